"""Unit tests for vault enumeration and normalization."""

from types import SimpleNamespace

import pytest
from eth_utils import to_checksum_address

from vault_orders.config.defaults import QueryParams
from vault_orders.errors import ConfigurationError, RemoteCallError, TokenIdOverflowError
from vault_orders.orders import (
    JSON_SAFE_MAX,
    OrderOrchestrator,
    VaultQueryNormalizer,
    VaultRecord,
    normalize_vault_tokens,
)
from vault_orders.units import UINT256_MAX


class TestNormalizeVaultTokens:
    """Test suite for response normalization."""

    def test_order_and_duplicates_preserved(self, sample_vault_entries) -> None:
        """Test that entries map one to one in protocol order."""
        records = normalize_vault_tokens(sample_vault_entries)

        assert len(records) == len(sample_vault_entries)
        assert [record.token_id for record in records] == [7, 2**200, 7]
        assert records[0] == records[2]

    def test_vault_addresses_checksummed(self, sample_vault_entries) -> None:
        """Test that vault addresses come back in checksum form."""
        records = normalize_vault_tokens(sample_vault_entries)
        raw = sample_vault_entries[0][0]
        assert records[0].vault == to_checksum_address(raw)
        assert records[0].vault != raw

    def test_entry_shapes(self) -> None:
        """Test tuples, mappings and attribute objects alike."""
        vault = "0x5fe2b58c013d7601147dcdd68c143a77499f5531"
        entries = [
            (vault, 1),
            {"vault": vault, "tokenId": 2},
            {"vault": vault, "token_id": 3},
            SimpleNamespace(vault=vault, tokenId=4),
        ]

        assert [record.token_id for record in normalize_vault_tokens(entries)] == [1, 2, 3, 4]

    def test_empty_response(self) -> None:
        """Test that an owner without vaults gets an empty list."""
        assert normalize_vault_tokens([]) == []

    def test_uint256_boundary(self) -> None:
        """Test that the largest uint256 id is kept exactly."""
        vault = "0x5fe2b58c013d7601147dcdd68c143a77499f5531"

        record, = normalize_vault_tokens([(vault, UINT256_MAX)])
        assert record.token_id == UINT256_MAX

        with pytest.raises(TokenIdOverflowError) as exc_info:
            normalize_vault_tokens([(vault, UINT256_MAX + 1)])
        assert exc_info.value.limit == UINT256_MAX

    def test_json_safe_boundary(self) -> None:
        """Test that the double-safe limit raises instead of rounding."""
        vault = "0x5fe2b58c013d7601147dcdd68c143a77499f5531"

        record, = normalize_vault_tokens([(vault, JSON_SAFE_MAX)], JSON_SAFE_MAX)
        assert record.token_id == JSON_SAFE_MAX

        with pytest.raises(OverflowError):
            normalize_vault_tokens([(vault, JSON_SAFE_MAX + 1)], JSON_SAFE_MAX)

    @pytest.mark.parametrize("token_id", [-1, 1.0, "5", True])
    def test_inexact_ids_rejected(self, token_id) -> None:
        """Test that ids that are not exact non-negative ints fail."""
        with pytest.raises(TokenIdOverflowError):
            normalize_vault_tokens([("0x5fe2b58c013d7601147dcdd68c143a77499f5531", token_id)])

    def test_malformed_entry(self) -> None:
        """Test that entries without the expected fields are rejected."""
        with pytest.raises(RemoteCallError):
            normalize_vault_tokens([{"vault": "0x5fe2b58c013d7601147dcdd68c143a77499f5531"}])

        with pytest.raises(RemoteCallError):
            normalize_vault_tokens([("not-an-address", 1)])

    def test_record_to_dict(self) -> None:
        """Test plain dict export of a record."""
        record = VaultRecord(vault="0xabc", token_id=2**70)
        assert record.to_dict() == {"vault": "0xabc", "token_id": 2**70}


class TestListVaultsByOwner:
    """Test suite for the enumeration call."""

    @pytest.mark.asyncio
    async def test_lists_through_controller_view(self, address_book, binder, signing_context,
                                                 sample_vault_entries) -> None:
        """Test the call target, argument and normalized result."""
        binder.responses[("controller_view", "vaultTokensByOwner")] = sample_vault_entries
        owner = "0x1111111111111111111111111111111111111111"

        records = await VaultQueryNormalizer(address_book, binder).list_vaults_by_owner(
            owner, signing_context
        )

        assert binder.binds == [(address_book.address_for("controller_view"), "controller_view")]
        assert binder.calls == [("controller_view", "vaultTokensByOwner", (owner,))]
        assert [record.token_id for record in records] == [7, 2**200, 7]
        assert isinstance(records, list)

    @pytest.mark.asyncio
    async def test_defaults_to_signer(self, address_book, binder, signing_context) -> None:
        """Test that omitting the owner lists the signer's vaults."""
        binder.responses[("controller_view", "vaultTokensByOwner")] = []

        records = await OrderOrchestrator(address_book, binder).list_vaults_by_owner(
            None, signing_context
        )

        assert records == []
        assert binder.calls[0][2] == (signing_context.active_address,)

    @pytest.mark.asyncio
    async def test_json_safe_mode(self, address_book, binder, signing_context,
                                  sample_vault_entries) -> None:
        """Test that json_safe caps ids at 2**53 - 1."""
        binder.responses[("controller_view", "vaultTokensByOwner")] = sample_vault_entries
        normalizer = VaultQueryNormalizer(address_book, binder, QueryParams(json_safe=True))

        with pytest.raises(TokenIdOverflowError) as exc_info:
            await normalizer.list_vaults_by_owner(None, signing_context)

        assert exc_info.value.value == 2**200
        assert exc_info.value.operation == "list_vaults_by_owner"

    @pytest.mark.asyncio
    async def test_unset_controller_view(self, unset_address_book, binder,
                                         signing_context) -> None:
        """Test that an unset view address fails with no remote call."""
        with pytest.raises(ConfigurationError):
            await VaultQueryNormalizer(unset_address_book, binder).list_vaults_by_owner(
                None, signing_context
            )

        assert binder.calls == []
