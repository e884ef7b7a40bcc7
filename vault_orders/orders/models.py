"""
Order intent and vault record models.

Both are immutable. An OrderIntent lives for the duration of one
creation call; a VaultRecord is a normalized query result.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Union

from ..errors import EncodingError

DecimalInput = Union[str, int]


@dataclass(frozen=True)
class OrderIntent:
    """Human-denominated limit order request."""
    from_token: str                  # Symbol or address
    to_token: str                    # Symbol or address
    from_token_decimals: int         # Native decimals of from_token
    amount_in: DecimalInput          # "100", or an int in base units
    price: DecimalInput              # amount_in / desired amount out
    expirations: tuple[int, ...]     # Unix timestamps, in protocol order
    max_gas_gwei: DecimalInput       # Highest gas price; an int is wei

    def __post_init__(self) -> None:
        expirations = self.expirations
        if isinstance(expirations, (int, str)) and not isinstance(expirations, bool):
            expirations = (expirations,)
        expirations = tuple(self._expiration(value) for value in expirations)

        if not expirations:
            raise EncodingError(
                "An order needs at least one expiration timestamp",
                raw_value=self.expirations,
                operation="create_limit_order",
            )

        object.__setattr__(self, "expirations", expirations)

    @staticmethod
    def _expiration(value: Any) -> int:
        if isinstance(value, str) and value.isdigit():
            value = int(value)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise EncodingError(
                f"Expiration must be a non-negative integer timestamp, got {value!r}",
                raw_value=value,
                operation="create_limit_order",
            )
        return value

    @classmethod
    def create(cls, from_token: str, to_token: str, from_token_decimals: int,
               amount_in: DecimalInput, price: DecimalInput,
               expirations: Union[int, Iterable[int]],
               max_gas_gwei: DecimalInput) -> "OrderIntent":
        """Build an intent, accepting a single expiration or any iterable."""
        if isinstance(expirations, int):
            expirations = (expirations,)
        return cls(
            from_token=from_token,
            to_token=to_token,
            from_token_decimals=from_token_decimals,
            amount_in=amount_in,
            price=price,
            expirations=tuple(expirations),
            max_gas_gwei=max_gas_gwei,
        )


@dataclass(frozen=True)
class EncodedOrder:
    """Protocol-exact arguments of one createTrade call."""
    order_type: int
    tokens: tuple[str, str]
    amount_in: int
    price: int
    expirations: tuple[int, ...]
    max_gas_price: int

    def as_call_args(self) -> tuple[Any, ...]:
        """Arguments in controller argument order."""
        return (
            self.order_type,
            list(self.tokens),
            [self.amount_in, self.price],
            list(self.expirations),
            self.max_gas_price,
        )


@dataclass(frozen=True)
class VaultRecord:
    """Vault address and exact token id."""
    vault: str
    token_id: int

    def to_dict(self) -> dict[str, Any]:
        return {"vault": self.vault, "token_id": self.token_id}
