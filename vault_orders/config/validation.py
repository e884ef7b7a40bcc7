"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

from eth_utils import is_hex_address

from .defaults import UNSET_ADDRESS


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_addresses(addresses: dict[str, Any]) -> list[ValidationError]:
        """Validate role and token address tables."""
        errors = []

        for section in ("roles", "tokens"):
            entries = addresses.get(section, {})
            if not isinstance(entries, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping of name to address",
                    value=entries
                ))
                continue

            for name, value in entries.items():
                if value == UNSET_ADDRESS or value is None:
                    continue
                if not isinstance(value, str) or not is_hex_address(value):
                    errors.append(ValidationError(
                        field=f"{section}.{name}",
                        message="Must be a 20-byte hex address or empty",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_encoding_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate fixed-point encoding parameters."""
        errors = []

        for name in ("price_decimals", "gas_price_decimals", "gas_tank_decimals"):
            if name in params:
                value = params[name]
                if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 77:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be an integer between 0 and 77",
                        value=value
                    ))

        if "order_type" in params:
            value = params["order_type"]
            if value != 0:
                errors.append(ValidationError(
                    field="order_type",
                    message="Only order type 0 is supported",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_network_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate signer and transport parameters."""
        errors = []

        for name in ("rpc_url_env", "private_key_env"):
            if name in params:
                value = params[name]
                if not isinstance(value, str) or not value:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-empty environment variable name",
                        value=value
                    ))

        if "request_timeout" in params:
            value = params["request_timeout"]
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="request_timeout",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @classmethod
    def validate_config(cls, config: dict[str, Any]) -> list[ValidationError]:
        """Validate a complete merged configuration."""
        errors = []

        if "network" in config:
            errors.extend(cls.validate_network_params(config["network"]))

        if "encoding" in config:
            errors.extend(cls.validate_encoding_params(config["encoding"]))

        if "addresses" in config:
            errors.extend(cls.validate_addresses(config["addresses"]))

        return errors
