"""
Order orchestration over the controller, gas tank and token contracts.

The orchestrator holds no state between calls. Every operation encodes
its inputs and resolves its addresses before the first remote call, so
EncodingError and ConfigurationError never follow a submitted
transaction.

Call order is the caller's responsibility:

1. ``authorize_spend`` for the input token, with the controller as spender
2. ``authorize_gas_tank_spend`` once per signer
3. ``fund_gas_tank`` so execution can be reimbursed
4. ``create_limit_order``

Skipping a step surfaces the protocol's rejection as RemoteCallError,
or as a local ConfigurationError when the allowance preflight is on.
"""

from typing import Optional, Union

from ..chain.abi import CONTROLLER_ABI, ERC20_ABI, GAS_TANK_ABI
from ..chain.binder import ContractBinder, ContractHandle, PendingTransaction
from ..chain.signer import SigningContext
from ..config.defaults import EncodingParams, QueryParams
from ..errors import ConfigurationError, EncodingError
from ..logging import get_logger
from ..registry import AddressBook
from ..units import UINT256_MAX, to_fixed_point
from .models import EncodedOrder, OrderIntent, VaultRecord
from .vaults import VaultQueryNormalizer

logger = get_logger(__name__)

Amount = Union[str, int]


def _encode(value: str, decimals: int, operation: str) -> int:
    try:
        return to_fixed_point(value, decimals)
    except EncodingError as e:
        e.operation = e.operation or operation
        raise


def _raw_integer(value: int, name: str, operation: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= UINT256_MAX:
        raise EncodingError(
            f"{name} must be an integer in uint256 range, got {value!r}",
            raw_value=value,
            operation=operation,
        )
    return value


def _amount(amount: Amount, decimals: Optional[int], operation: str, name: str = "amount") -> int:
    # Integers are already in base units; strings are human decimals
    if isinstance(amount, int) and not isinstance(amount, bool):
        return _raw_integer(amount, name, operation)
    if decimals is None:
        raise EncodingError(
            f"Decimal amount {amount!r} needs the token's decimal count",
            raw_value=amount,
            operation=operation,
        )
    return _encode(amount, decimals, operation)


class OrderOrchestrator:
    """Sequences authorization, funding and order calls for one deployment."""

    def __init__(self, address_book: AddressBook, binder: Optional[ContractBinder] = None,
                 encoding: Optional[EncodingParams] = None, query: Optional[QueryParams] = None):
        self.address_book = address_book
        self.binder = binder or ContractBinder()
        self.encoding = encoding or EncodingParams()
        self.vaults = VaultQueryNormalizer(address_book, self.binder, query)

    def _bind_role(self, role: str, interface_shape: list, signing_context: SigningContext,
                   operation: str) -> ContractHandle:
        address = self.address_book.require(role, operation)
        return self.binder.bind(address, interface_shape, signing_context, label=role)

    def encode_order(self, intent: OrderIntent) -> EncodedOrder:
        """
        Encode an intent into protocol-exact createTrade arguments.

        Decimal strings are scaled: amount at the input token's decimals,
        price at 18 and the max gas price from gwei to wei. Integers are
        base units and pass through, as in authorize_spend.
        """
        operation = "create_limit_order"
        return EncodedOrder(
            order_type=self.encoding.order_type,
            tokens=(
                self.address_book.resolve(intent.from_token, operation),
                self.address_book.resolve(intent.to_token, operation),
            ),
            amount_in=_amount(intent.amount_in, intent.from_token_decimals, operation, "amount_in"),
            price=_amount(intent.price, self.encoding.price_decimals, operation, "price"),
            expirations=intent.expirations,
            max_gas_price=_amount(intent.max_gas_gwei, self.encoding.gas_price_decimals,
                                  operation, "max_gas_gwei"),
        )

    async def authorize_spend(self, token: str, spender: str, amount: Amount,
                              signing_context: SigningContext,
                              decimals: Optional[int] = None) -> PendingTransaction:
        """
        Approve ``spender`` to move ``amount`` of ``token``.

        ``token`` may be a symbol or an address and ``spender`` a role name
        or an address. Integer amounts are base units; decimal strings are
        scaled at ``decimals``. Repeating the call resets the allowance.
        """
        operation = "authorize_spend"
        token_address = self.address_book.resolve(token, operation)
        spender_address = self.address_book.resolve(spender, operation)
        value = _amount(amount, decimals, operation)

        erc20 = self.binder.bind(token_address, ERC20_ABI, signing_context, label=token)
        logger.info("Authorizing spend", token=token_address, spender=spender_address,
                    amount=str(value))
        return await erc20.approve(spender_address, value)

    async def authorize_gas_tank_spend(self, signing_context: SigningContext) -> PendingTransaction:
        """
        Let the controller debit the signer's gas tank balance.

        Must have happened at least once before an order whose execution is
        paid from the gas tank; this is not checked here.
        """
        operation = "authorize_gas_tank_spend"
        controller = self.address_book.require("controller", operation)
        gas_tank = self._bind_role("gas_tank", GAS_TANK_ABI, signing_context, operation)

        logger.info("Authorizing gas tank spend", spender=controller)
        return await gas_tank.approve(controller, True)

    async def fund_gas_tank(self, amount: Amount, signing_context: SigningContext) -> PendingTransaction:
        """Deposit ``amount`` into the signer's own gas tank balance."""
        operation = "fund_gas_tank"
        value = _amount(amount, self.encoding.gas_tank_decimals, operation)
        gas_tank = self._bind_role("gas_tank", GAS_TANK_ABI, signing_context, operation)

        logger.info("Funding gas tank", recipient=signing_context.active_address, amount=str(value))
        return await gas_tank.deposit(signing_context.active_address, value)

    async def withdraw_gas_tank(self, amount: Amount, signing_context: SigningContext) -> PendingTransaction:
        """Withdraw ``amount`` from the signer's gas tank balance."""
        operation = "withdraw_gas_tank"
        value = _amount(amount, self.encoding.gas_tank_decimals, operation)
        gas_tank = self._bind_role("gas_tank", GAS_TANK_ABI, signing_context, operation)

        logger.info("Withdrawing from gas tank", amount=str(value))
        return await gas_tank.withdraw(value)

    async def create_limit_order(self, intent: OrderIntent, signing_context: SigningContext,
                                 verify_allowance: bool = False) -> PendingTransaction:
        """
        Submit a limit order and return the pending transaction unconfirmed.

        Args:
            intent: Human-denominated order
            signing_context: Signer submitting the order
            verify_allowance: Read the input token allowance first and fail
                locally when it does not cover the order amount

        Raises:
            EncodingError: If an amount cannot be encoded exactly
            ConfigurationError: If an address is unset, or the allowance
                preflight fails
            RemoteCallError: If the protocol rejects the order
        """
        operation = "create_limit_order"
        order = self.encode_order(intent)
        controller_address = self.address_book.require("controller", operation)

        if verify_allowance:
            await self._check_allowance(order, controller_address, signing_context)

        controller = self.binder.bind(controller_address, CONTROLLER_ABI, signing_context,
                                      label="controller")

        logger.info(
            "Creating limit order",
            tokens=list(order.tokens),
            amount_in=str(order.amount_in),
            price=str(order.price),
            expirations=list(order.expirations),
            max_gas_price=str(order.max_gas_price),
        )
        return await controller.createTrade(*order.as_call_args())

    async def _check_allowance(self, order: EncodedOrder, spender: str,
                               signing_context: SigningContext) -> None:
        from_token = order.tokens[0]
        erc20 = self.binder.bind(from_token, ERC20_ABI, signing_context, label=from_token)
        allowance = await erc20.allowance(signing_context.active_address, spender)

        if allowance < order.amount_in:
            raise ConfigurationError(
                f"Allowance {allowance} of {from_token} for the controller is below "
                f"the order amount {order.amount_in}; call authorize_spend first",
                setting="allowance",
                operation="create_limit_order",
                context={"allowance": allowance, "required": order.amount_in},
            )

    async def withdraw_vault(self, vault_id: int, token_id: int,
                             signing_context: SigningContext) -> PendingTransaction:
        """Withdraw the assets held by a vault token."""
        operation = "withdraw_vault"
        vault_id = _raw_integer(vault_id, "vault_id", operation)
        token_id = _raw_integer(token_id, "token_id", operation)
        controller = self._bind_role("controller", CONTROLLER_ABI, signing_context, operation)

        logger.info("Withdrawing vault", vault_id=str(vault_id), token_id=str(token_id))
        return await controller.withdraw(vault_id, token_id)

    async def list_vaults_by_owner(self, owner: Optional[str],
                                   signing_context: SigningContext) -> list[VaultRecord]:
        """Vaults held by ``owner`` (the signer when None), in protocol order."""
        return await self.vaults.list_vaults_by_owner(owner, signing_context)
