"""Pytest configuration and shared fixtures."""

from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple

import pytest

from vault_orders.errors import RemoteCallError
from vault_orders.registry import AddressBook

SIGNER_ADDRESS = "0x2222222222222222222222222222222222222222"
TX_HASH = bytes.fromhex("ab" * 32)


class FakeHandle:
    """Stands in for a bound contract; records every remote invocation."""

    def __init__(self, binder: "RecordingBinder", address: str, label: Optional[str]):
        self._binder = binder
        self.address = address
        self.label = label

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)

        async def remote(*args: Any) -> Any:
            key = (self.label, name)
            self._binder.calls.append((self.label, name, args))
            if key in self._binder.failures:
                raise self._binder.failures[key]
            return self._binder.responses.get(key, self._binder.default_response)

        return remote


class RecordingBinder:
    """Binder double: records binds and calls, returns canned responses."""

    def __init__(self) -> None:
        self.binds: List[Tuple[str, Optional[str]]] = []
        self.calls: List[Tuple[Optional[str], str, tuple]] = []
        self.responses: Dict[Tuple[Optional[str], str], Any] = {}
        self.failures: Dict[Tuple[Optional[str], str], Exception] = {}
        self.default_response: Any = TX_HASH

    def calls_to(self, label: str) -> List[Tuple[Optional[str], str, tuple]]:
        return [call for call in self.calls if call[0] == label]

    def bind(self, address, interface_shape, signing_context, label=None):
        self.binds.append((address, label))
        return FakeHandle(self, address, label)

    def reject(self, label: str, operation: str, reason: str) -> None:
        """Make one remote operation fail the way the protocol would."""
        self.failures[(label, operation)] = RemoteCallError(
            f"{label}.{operation} rejected: {reason}",
            reason=reason,
            operation=operation,
        )


@pytest.fixture
def address_book() -> AddressBook:
    """Packaged Polygon deployment."""
    return AddressBook.default()


@pytest.fixture
def unset_address_book() -> AddressBook:
    """Deployment where no protocol contract is live yet."""
    return AddressBook.from_mapping("testnet", {
        "roles": {
            "controller": "",
            "controller_view": "",
            "gas_tank": "",
        },
        "tokens": {
            "USDC": "0x2791bca1f2de4661ed88a30c99a7a9449aa84174",
            "WETH": "",
        },
    })


@pytest.fixture
def binder() -> RecordingBinder:
    return RecordingBinder()


@pytest.fixture
def signing_context() -> SimpleNamespace:
    """Signing context double exposing only the active address."""
    return SimpleNamespace(active_address=SIGNER_ADDRESS, endpoint="http://localhost:8545")


@pytest.fixture
def sample_vault_entries() -> List[Tuple[str, int]]:
    """Raw vaultTokensByOwner response as web3 decodes it."""
    return [
        ("0x5fe2b58c013d7601147dcdd68c143a77499f5531", 7),
        ("0x8505b9d2254a7ae468c0e9dd10ccea3a837aef5c", 2**200),
        ("0x5fe2b58c013d7601147dcdd68c143a77499f5531", 7),
    ]
