"""
Immutable binding from logical protocol roles to deployed addresses.

An AddressBook is passed explicitly to every component that resolves
addresses, so tests and alternative deployments can substitute their own.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from eth_utils import is_hex_address, to_checksum_address

from ..config.defaults import DEFAULT_ADDRESSES, DEFAULT_NETWORK, UNSET_ADDRESS
from ..errors import ConfigurationError

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def normalize_role(role: str) -> str:
    """Map deployment-style names (``controllerView``) to ``controller_view``."""
    return _CAMEL_BOUNDARY.sub("_", role.strip()).lower().replace("-", "_")


def normalize_symbol(symbol: str) -> str:
    return symbol.strip().upper()


def checksum_or_unset(value: Optional[str], setting: str) -> str:
    """
    Validate one address entry.

    Returns:
        The EIP-55 checksum form, or the unset sentinel for empty entries

    Raises:
        ConfigurationError: If the entry is not a 20-byte hex address
    """
    if value is None or value == UNSET_ADDRESS:
        return UNSET_ADDRESS
    if not isinstance(value, str) or not is_hex_address(value):
        raise ConfigurationError(
            f"Malformed address for {setting}: {value!r}",
            setting=setting,
        )
    return to_checksum_address(value)


@dataclass(frozen=True)
class AddressBook:
    """Role and token address lookup for one network deployment."""
    network: str
    roles: Mapping[str, str] = field(default_factory=dict)
    tokens: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        roles = {
            normalize_role(name): checksum_or_unset(address, f"roles.{name}")
            for name, address in self.roles.items()
        }
        tokens = {
            normalize_symbol(symbol): checksum_or_unset(address, f"tokens.{symbol}")
            for symbol, address in self.tokens.items()
        }
        object.__setattr__(self, "roles", MappingProxyType(roles))
        object.__setattr__(self, "tokens", MappingProxyType(tokens))

    @classmethod
    def from_mapping(cls, network: str, data: Mapping[str, Mapping[str, str]]) -> "AddressBook":
        """Build from a ``{"roles": {...}, "tokens": {...}}`` mapping."""
        return cls(
            network=network,
            roles=dict(data.get("roles") or {}),
            tokens=dict(data.get("tokens") or {}),
        )

    @classmethod
    def default(cls, network: str = DEFAULT_NETWORK) -> "AddressBook":
        """Address book of the packaged deployment for ``network``."""
        if network not in DEFAULT_ADDRESSES:
            raise ConfigurationError(
                f"No packaged deployment for network {network!r}",
                setting="network",
            )
        return cls.from_mapping(network, DEFAULT_ADDRESSES[network])

    def address_for(self, role: str) -> str:
        """Address of ``role``, or the unset sentinel when it has none."""
        return self.roles.get(normalize_role(role), UNSET_ADDRESS)

    def token_address(self, symbol: str) -> str:
        """Address of the token ``symbol``, or the unset sentinel."""
        return self.tokens.get(normalize_symbol(symbol), UNSET_ADDRESS)

    def is_set(self, role: str) -> bool:
        return self.address_for(role) != UNSET_ADDRESS

    def require(self, role: str, operation: Optional[str] = None) -> str:
        """
        Address of ``role`` for an operation that cannot proceed without it.

        Raises:
            ConfigurationError: If the role is unknown or not deployed
        """
        address = self.address_for(role)
        if address == UNSET_ADDRESS:
            raise ConfigurationError(
                f"Address for role {role!r} is not set on {self.network}",
                setting=f"roles.{normalize_role(role)}",
                operation=operation,
            )
        return address

    def require_token(self, symbol: str, operation: Optional[str] = None) -> str:
        """
        Address of token ``symbol``.

        Raises:
            ConfigurationError: If the symbol is unknown or unset
        """
        address = self.token_address(symbol)
        if address == UNSET_ADDRESS:
            raise ConfigurationError(
                f"Address for token {symbol!r} is not set on {self.network}",
                setting=f"tokens.{normalize_symbol(symbol)}",
                operation=operation,
            )
        return address

    def resolve(self, reference: str, operation: Optional[str] = None) -> str:
        """
        Resolve a hex address, a role name or a token symbol to an address.

        Hex addresses are returned in checksum form without a lookup. Other
        references, including symbols such as ``0xBTC``, go through the tables.
        """
        if not isinstance(reference, str) or not reference:
            raise ConfigurationError(
                f"Cannot resolve address reference {reference!r}",
                operation=operation,
            )
        if is_hex_address(reference):
            return to_checksum_address(reference)
        if normalize_role(reference) in self.roles:
            return self.require(reference, operation)
        if normalize_symbol(reference) in self.tokens or not reference.startswith("0x"):
            return self.require_token(reference, operation)
        raise ConfigurationError(
            f"Malformed address {reference!r}",
            operation=operation,
        )
