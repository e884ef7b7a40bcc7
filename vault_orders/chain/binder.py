"""
Contract binding: (address, interface shape, signing context) -> handle.

Binding builds the web3 contract object only; nothing is sent until an
operation on the handle is awaited. Read-only operations return the
decoded value, state-changing ones return a PendingTransaction without
waiting for it to be mined.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

import aiohttp
from eth_utils import is_hex_address, to_checksum_address, to_hex
from web3.exceptions import ContractLogicError, MismatchedABI, Web3Exception

from ..errors import ConfigurationError, EncodingError, RemoteCallError
from ..logging import get_remote_logger, log_remote_call
from .signer import SigningContext

logger = get_remote_logger(__name__)

READ_ONLY_MUTABILITY = ("view", "pure")

TRANSPORT_ERRORS = (Web3Exception, aiohttp.ClientError, asyncio.TimeoutError, ConnectionError)

DEFAULT_RECEIPT_TIMEOUT = 120.0


def _revert_reason(error: ContractLogicError) -> str:
    message = getattr(error, "message", None)
    return str(message) if message else str(error)


def _is_read_only(entry: dict[str, Any]) -> bool:
    if "stateMutability" in entry:
        return entry["stateMutability"] in READ_ONLY_MUTABILITY
    return bool(entry.get("constant", False))


@dataclass(frozen=True)
class PendingTransaction:
    """A submitted, unconfirmed state-changing call."""
    tx_hash: bytes
    operation: str
    contract: str
    signing_context: SigningContext = field(repr=False, compare=False)

    @property
    def hash_hex(self) -> str:
        return to_hex(self.tx_hash)

    async def wait(self, timeout: float = DEFAULT_RECEIPT_TIMEOUT) -> Any:
        """
        Await the receipt. The orchestrator never calls this; callers
        that need confirmation do.

        Raises:
            RemoteCallError: On transport failure, timeout or a reverted receipt
        """
        try:
            receipt = await self.signing_context.web3.eth.wait_for_transaction_receipt(
                self.tx_hash, timeout=timeout
            )
        except TRANSPORT_ERRORS as e:
            raise RemoteCallError(
                f"Waiting for {self.hash_hex} failed: {e}",
                reason=str(e),
                contract=self.contract,
                operation=self.operation,
            ) from e

        if receipt["status"] == 0:
            raise RemoteCallError(
                f"Transaction {self.hash_hex} reverted",
                reason="reverted",
                contract=self.contract,
                operation=self.operation,
                context={"tx_hash": self.hash_hex},
            )
        return receipt


class RemoteOperation:
    """One named operation of a bound contract."""

    def __init__(self, handle: "ContractHandle", name: str, entry: dict[str, Any]):
        self.handle = handle
        self.name = name
        self.read_only = _is_read_only(entry)
        self.arity = len(entry.get("inputs", []))

    async def __call__(self, *args: Any) -> Any:
        if self.read_only:
            return await self.handle.call(self.name, *args)
        return await self.handle.transact(self.name, *args)

    def __repr__(self) -> str:
        kind = "call" if self.read_only else "transact"
        return f"<RemoteOperation {self.handle.label}.{self.name} ({kind})>"


class ContractHandle:
    """Callable view of one deployed contract for one signing context."""

    def __init__(self, address: str, interface_shape: Sequence[dict[str, Any]],
                 signing_context: SigningContext, label: Optional[str] = None):
        self.address = address
        self.label = label or address
        self.signing_context = signing_context
        self._operations = {
            entry["name"]: entry
            for entry in interface_shape
            if entry.get("type", "function") == "function" and "name" in entry
        }
        self._contract = signing_context.web3.eth.contract(
            address=address, abi=list(interface_shape)
        )

    @property
    def operations(self) -> tuple[str, ...]:
        return tuple(self._operations)

    def operation(self, name: str) -> RemoteOperation:
        """
        Look up a named operation.

        Raises:
            ConfigurationError: If the interface shape has no such operation
        """
        entry = self._operations.get(name)
        if entry is None:
            raise ConfigurationError(
                f"{self.label} has no operation {name!r}",
                setting="interface_shape",
                operation=name,
            )
        return RemoteOperation(self, name, entry)

    def __getattr__(self, name: str) -> RemoteOperation:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.operation(name)

    def _prepare(self, name: str, args: Sequence[Any]) -> Any:
        self.operation(name)
        try:
            return getattr(self._contract.functions, name)(*args)
        except MismatchedABI as e:
            raise EncodingError(
                f"Arguments do not match {self.label}.{name}: {e}",
                raw_value=list(args),
                operation=name,
            ) from e

    async def call(self, name: str, *args: Any) -> Any:
        """Invoke a read-only operation and return its decoded value."""
        function = self._prepare(name, args)
        log_remote_call(logger, self.label, name, "call", args)

        try:
            return await function.call()
        except ContractLogicError as e:
            reason = _revert_reason(e)
            raise RemoteCallError(
                f"{self.label}.{name} reverted: {reason}",
                reason=reason,
                contract=self.address,
                operation=name,
            ) from e
        except TRANSPORT_ERRORS as e:
            raise RemoteCallError(
                f"{self.label}.{name} failed: {e}",
                reason=str(e),
                contract=self.address,
                operation=name,
            ) from e

    async def transact(self, name: str, *args: Any) -> PendingTransaction:
        """Submit a state-changing operation; does not wait for the receipt."""
        function = self._prepare(name, args)
        log_remote_call(logger, self.label, name, "transact", args)

        try:
            tx_hash = await function.transact({"from": self.signing_context.active_address})
        except ContractLogicError as e:
            reason = _revert_reason(e)
            raise RemoteCallError(
                f"{self.label}.{name} rejected: {reason}",
                reason=reason,
                contract=self.address,
                operation=name,
            ) from e
        except TRANSPORT_ERRORS as e:
            raise RemoteCallError(
                f"{self.label}.{name} failed: {e}",
                reason=str(e),
                contract=self.address,
                operation=name,
            ) from e

        pending = PendingTransaction(
            tx_hash=bytes(tx_hash),
            operation=name,
            contract=self.address,
            signing_context=self.signing_context,
        )
        logger.info("Transaction submitted", operation=name, tx_hash=pending.hash_hex)
        return pending

    def __repr__(self) -> str:
        return f"<ContractHandle {self.label} at {self.address}>"


class ContractBinder:
    """Builds contract handles; keeps no cache between binds."""

    def bind(self, address: str, interface_shape: Sequence[dict[str, Any]],
             signing_context: SigningContext, label: Optional[str] = None) -> ContractHandle:
        """
        Bind an address and interface shape to a signing context.

        Raises:
            ConfigurationError: If the address is unset or malformed, or the
                interface shape declares no operations
        """
        if not isinstance(address, str) or not is_hex_address(address):
            raise ConfigurationError(
                f"Cannot bind {label or 'contract'} to address {address!r}",
                setting=label,
                operation="bind",
            )
        if not interface_shape:
            raise ConfigurationError(
                f"Interface shape for {label or address} is empty",
                setting="interface_shape",
                operation="bind",
            )

        return ContractHandle(to_checksum_address(address), interface_shape, signing_context, label)
