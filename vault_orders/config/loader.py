"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from ..registry import AddressBook
from .defaults import (
    DEFAULT_ADDRESSES,
    DefaultConfig,
    EncodingParams,
    NetworkParams,
    QueryParams,
    get_default_config,
)


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=config_dir,
            defaults=get_default_config(),
        )

    def _load_yaml(self, filename: str) -> dict[str, Any]:
        path = self.config_dir / filename

        if not path.exists():
            return {}

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Cannot parse {path}: {e}",
                setting=filename,
            ) from e

        return data or {}

    def load_network_addresses(self, network: str) -> dict[str, Any]:
        """Load address overrides for one network from addresses.yaml."""
        addresses_config = self._load_yaml("addresses.yaml")
        return addresses_config.get("networks", {}).get(network, {}) or {}  # type: ignore[no-any-return]

    def load_settings(self) -> dict[str, Any]:
        """Load parameter overrides from settings.yaml."""
        return self._load_yaml("settings.yaml")

    def merge_addresses(
        self,
        network: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge address tables with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. addresses.yaml entries for the network
        3. Packaged deployment (lowest priority)
        """
        addresses = DEFAULT_ADDRESSES.get(network, {"roles": {}, "tokens": {}})
        addresses = self._deep_merge(addresses, self.load_network_addresses(network))

        if overrides:
            addresses = self._deep_merge(addresses, overrides)

        return addresses

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """Merge parameter defaults with settings.yaml and explicit overrides."""
        config = self._dataclass_to_dict(self.defaults)
        config = self._deep_merge(config, self.load_settings())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load_config(self, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """Merged parameters as frozen dataclasses."""
        config = self.merge_config(overrides)
        try:
            return DefaultConfig(
                network=NetworkParams(**config.get("network", {})),
                encoding=EncodingParams(**config.get("encoding", {})),
                query=QueryParams(**config.get("query", {})),
            )
        except TypeError as e:
            raise ConfigurationError(f"Unknown configuration key: {e}") from e

    def load_address_book(
        self,
        network: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> AddressBook:
        """Build the AddressBook for ``network`` (default from the network params)."""
        network = network or self.defaults.network.network
        addresses = self.merge_addresses(network, overrides)
        if not addresses.get("roles") and not addresses.get("tokens"):
            raise ConfigurationError(
                f"No addresses configured for network {network!r}",
                setting="network",
            )
        return AddressBook.from_mapping(network, addresses)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
