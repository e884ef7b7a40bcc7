"""
Vault enumeration and normalization.

Converts the controller view's ``vaultTokensByOwner`` response into a
freshly built list of VaultRecord, in protocol order, with every token
id range-checked instead of silently truncated.
"""

from collections.abc import Mapping
from typing import Any, Iterable, Optional

from eth_utils import is_hex_address, to_checksum_address

from ..chain.abi import CONTROLLER_VIEW_ABI
from ..chain.binder import ContractBinder
from ..chain.signer import SigningContext
from ..config.defaults import QueryParams
from ..errors import RemoteCallError, TokenIdOverflowError
from ..logging import get_logger
from ..registry import AddressBook
from ..units import UINT256_MAX
from .models import VaultRecord

logger = get_logger(__name__)

# Largest integer an IEEE double holds exactly
JSON_SAFE_MAX = 2**53 - 1

OPERATION = "list_vaults_by_owner"


def normalize_token_id(value: Any, limit: int = UINT256_MAX) -> int:
    """
    Check one protocol token id against ``limit``.

    Raises:
        TokenIdOverflowError: If the id is not an integer, is negative or
            exceeds ``limit``
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TokenIdOverflowError(
            f"Token id {value!r} is not an exact integer",
            value=value,
            limit=limit,
            operation=OPERATION,
        )
    if value < 0 or value > limit:
        raise TokenIdOverflowError(
            f"Token id {value} is outside 0..{limit}",
            value=value,
            limit=limit,
            operation=OPERATION,
        )
    return value


def _entry_fields(entry: Any) -> tuple[Any, Any]:
    if isinstance(entry, Mapping):
        token_id = entry["tokenId"] if "tokenId" in entry else entry["token_id"]
        return entry["vault"], token_id
    if isinstance(entry, (tuple, list)) and len(entry) == 2:
        return entry[0], entry[1]
    return entry.vault, entry.tokenId


def normalize_vault_entry(entry: Any, limit: int = UINT256_MAX) -> VaultRecord:
    """Map one ``(vault, tokenId)`` entry to a VaultRecord."""
    try:
        vault, token_id = _entry_fields(entry)
    except (KeyError, AttributeError) as e:
        raise RemoteCallError(
            f"Malformed vault entry: {entry!r}",
            reason="malformed response",
            operation=OPERATION,
        ) from e

    if not isinstance(vault, str) or not is_hex_address(vault):
        raise RemoteCallError(
            f"Malformed vault address in entry: {vault!r}",
            reason="malformed response",
            operation=OPERATION,
        )

    return VaultRecord(
        vault=to_checksum_address(vault),
        token_id=normalize_token_id(token_id, limit),
    )


def normalize_vault_tokens(entries: Iterable[Any], limit: int = UINT256_MAX) -> list[VaultRecord]:
    """Normalize a whole response; order and duplicates are preserved."""
    return [normalize_vault_entry(entry, limit) for entry in entries]


class VaultQueryNormalizer:
    """Lists the vaults an owner holds through the controller view."""

    def __init__(self, address_book: AddressBook, binder: Optional[ContractBinder] = None,
                 params: Optional[QueryParams] = None):
        self.address_book = address_book
        self.binder = binder or ContractBinder()
        self.params = params or QueryParams()

    @property
    def limit(self) -> int:
        return JSON_SAFE_MAX if self.params.json_safe else UINT256_MAX

    async def list_vaults_by_owner(self, owner: Optional[str],
                                   signing_context: SigningContext) -> list[VaultRecord]:
        """
        Enumerate vaults held by ``owner``.

        Args:
            owner: Owner address; the signer's own address when None
            signing_context: Context the read is issued through

        Returns:
            One VaultRecord per protocol entry, in protocol order
        """
        owner = self.address_book.resolve(owner or signing_context.active_address, OPERATION)
        address = self.address_book.require("controller_view", OPERATION)
        view = self.binder.bind(address, CONTROLLER_VIEW_ABI, signing_context, label="controller_view")

        entries = await view.vaultTokensByOwner(owner)
        records = normalize_vault_tokens(entries, self.limit)

        logger.debug("Vaults listed", owner=owner, count=len(records))
        return records
