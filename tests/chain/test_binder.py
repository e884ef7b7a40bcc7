"""Unit tests for contract binding and remote call translation."""

import pytest
from unittest.mock import AsyncMock, MagicMock

import aiohttp
from web3.exceptions import ContractLogicError, MismatchedABI

from vault_orders.chain import ContractBinder, PendingTransaction
from vault_orders.chain.abi import CONTROLLER_VIEW_ABI, ERC20_ABI
from vault_orders.errors import ConfigurationError, EncodingError, RemoteCallError

TOKEN = "0x2791bca1f2de4661ed88a30c99a7a9449aa84174"
SPENDER = "0x678753f5b53bfbF1d4dCfBB0F33aB5C2161edDF2"
SIGNER = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"
TX_HASH = bytes.fromhex("cd" * 32)


@pytest.fixture
def web3_contract() -> MagicMock:
    contract = MagicMock()
    contract.functions.approve.return_value.transact = AsyncMock(return_value=TX_HASH)
    contract.functions.allowance.return_value.call = AsyncMock(return_value=5_000_000)
    return contract


@pytest.fixture
def mock_context(web3_contract: MagicMock) -> MagicMock:
    context = MagicMock()
    context.active_address = SIGNER
    context.web3.eth.contract.return_value = web3_contract
    return context


class TestBind:
    """Test suite for ContractBinder.bind."""

    def test_bind_performs_no_remote_call(self, mock_context, web3_contract) -> None:
        """Test that binding only builds the contract object."""
        handle = ContractBinder().bind(TOKEN, ERC20_ABI, mock_context, label="USDC")

        assert handle.address == "0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174"
        assert handle.operations == ("approve", "allowance")
        web3_contract.functions.approve.assert_not_called()
        mock_context.web3.eth.contract.assert_called_once()

    @pytest.mark.parametrize("address", ["", "0x1234", None])
    def test_bind_rejects_unusable_address(self, mock_context, address) -> None:
        """Test that unset or malformed addresses fail at bind time."""
        with pytest.raises(ConfigurationError) as exc_info:
            ContractBinder().bind(address, ERC20_ABI, mock_context, label="controller")

        assert exc_info.value.operation == "bind"
        mock_context.web3.eth.contract.assert_not_called()

    def test_bind_rejects_empty_shape(self, mock_context) -> None:
        """Test that an empty interface shape is a configuration error."""
        with pytest.raises(ConfigurationError):
            ContractBinder().bind(TOKEN, [], mock_context)

    def test_unknown_operation(self, mock_context) -> None:
        """Test that operations outside the shape raise ConfigurationError."""
        handle = ContractBinder().bind(TOKEN, ERC20_ABI, mock_context)

        with pytest.raises(ConfigurationError):
            handle.transferFrom

    def test_operation_kinds(self, mock_context) -> None:
        """Test that view functions are calls and the rest transactions."""
        handle = ContractBinder().bind(TOKEN, ERC20_ABI, mock_context)

        assert handle.allowance.read_only is True
        assert handle.approve.read_only is False

        view = ContractBinder().bind(TOKEN, CONTROLLER_VIEW_ABI, mock_context)
        assert view.vaultTokensByOwner.read_only is True


class TestRemoteOperations:
    """Test suite for invoking bound operations."""

    @pytest.mark.asyncio
    async def test_transact_returns_pending_transaction(self, mock_context, web3_contract) -> None:
        """Test that state-changing calls return an unconfirmed handle."""
        handle = ContractBinder().bind(TOKEN, ERC20_ABI, mock_context, label="USDC")

        pending = await handle.approve(SPENDER, 10**6)

        assert isinstance(pending, PendingTransaction)
        assert pending.tx_hash == TX_HASH
        assert pending.hash_hex == "0x" + "cd" * 32
        assert pending.operation == "approve"
        web3_contract.functions.approve.assert_called_once_with(SPENDER, 10**6)
        web3_contract.functions.approve.return_value.transact.assert_awaited_once_with(
            {"from": SIGNER}
        )
        mock_context.web3.eth.wait_for_transaction_receipt.assert_not_called()

    @pytest.mark.asyncio
    async def test_call_returns_decoded_value(self, mock_context) -> None:
        """Test that read-only calls return the decoded result."""
        handle = ContractBinder().bind(TOKEN, ERC20_ABI, mock_context)

        assert await handle.allowance(SIGNER, SPENDER) == 5_000_000

    @pytest.mark.asyncio
    async def test_revert_reason_surfaced(self, mock_context, web3_contract) -> None:
        """Test that a protocol rejection keeps its revert reason."""
        reason = "execution reverted: ERC20: insufficient allowance"
        web3_contract.functions.approve.return_value.transact = AsyncMock(
            side_effect=ContractLogicError(reason)
        )
        handle = ContractBinder().bind(TOKEN, ERC20_ABI, mock_context)

        with pytest.raises(RemoteCallError) as exc_info:
            await handle.approve(SPENDER, 1)

        assert exc_info.value.reason == reason
        assert exc_info.value.operation == "approve"
        assert isinstance(exc_info.value.__cause__, ContractLogicError)

    @pytest.mark.asyncio
    async def test_transport_failure_wrapped(self, mock_context, web3_contract) -> None:
        """Test that transport errors become RemoteCallError."""
        web3_contract.functions.allowance.return_value.call = AsyncMock(
            side_effect=aiohttp.ClientConnectionError("connection refused")
        )
        handle = ContractBinder().bind(TOKEN, ERC20_ABI, mock_context)

        with pytest.raises(RemoteCallError) as exc_info:
            await handle.allowance(SIGNER, SPENDER)

        assert "connection refused" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_argument_mismatch_is_encoding_error(self, mock_context, web3_contract) -> None:
        """Test that arguments web3 cannot encode fail before sending."""
        web3_contract.functions.approve.side_effect = MismatchedABI("no matching function")
        handle = ContractBinder().bind(TOKEN, ERC20_ABI, mock_context)

        with pytest.raises(EncodingError):
            await handle.approve("not-an-address", -1)


class TestPendingTransaction:
    """Test suite for optional receipt waiting."""

    @pytest.mark.asyncio
    async def test_wait_returns_receipt(self, mock_context) -> None:
        """Test that wait() returns a successful receipt."""
        mock_context.web3.eth.wait_for_transaction_receipt = AsyncMock(return_value={"status": 1})
        pending = PendingTransaction(TX_HASH, "approve", TOKEN, mock_context)

        receipt = await pending.wait(timeout=5)

        assert receipt["status"] == 1
        mock_context.web3.eth.wait_for_transaction_receipt.assert_awaited_once_with(
            TX_HASH, timeout=5
        )

    @pytest.mark.asyncio
    async def test_wait_reverted_receipt(self, mock_context) -> None:
        """Test that a reverted receipt raises RemoteCallError."""
        mock_context.web3.eth.wait_for_transaction_receipt = AsyncMock(return_value={"status": 0})
        pending = PendingTransaction(TX_HASH, "createTrade", SPENDER, mock_context)

        with pytest.raises(RemoteCallError) as exc_info:
            await pending.wait()

        assert exc_info.value.reason == "reverted"
        assert exc_info.value.operation == "createTrade"
