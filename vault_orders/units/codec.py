"""
Exact conversion between human decimal strings and protocol integers.

All arithmetic is done on the digit strings and Python ints. Floats are
rejected outright since a binary float cannot carry an exact decimal
amount.
"""

import re
from typing import Union

from ..errors import EncodingError

UINT256_MAX = 2**256 - 1

GWEI_DECIMALS = 9
ETHER_DECIMALS = 18

UNIT_DECIMALS: dict[str, int] = {
    "wei": 0,
    "kwei": 3,
    "mwei": 6,
    "gwei": 9,
    "szabo": 12,
    "finney": 15,
    "ether": 18,
}

_DECIMAL_NUMERAL = re.compile(r"^(?P<whole>[0-9]*)(?:\.(?P<fraction>[0-9]*))?$")

Decimals = Union[int, str]


def resolve_decimals(decimals: Decimals) -> int:
    """Accept a decimal count or a unit name such as ``"gwei"``."""
    if isinstance(decimals, str):
        if decimals.lower() not in UNIT_DECIMALS:
            raise EncodingError(f"Unknown unit name {decimals!r}", decimals=None)
        return UNIT_DECIMALS[decimals.lower()]
    if isinstance(decimals, bool) or not isinstance(decimals, int) or not 0 <= decimals <= 77:
        raise EncodingError(
            f"Decimal count must be an integer between 0 and 77, got {decimals!r}",
            decimals=None,
        )
    return decimals


def to_fixed_point(value: str, decimals: Decimals) -> int:
    """
    Scale a human decimal string by 10**decimals.

    Ints are base-unit amounts already and are refused here.

    Args:
        value: Non-negative decimal numeral such as ``"100"`` or ``"0.25"``
        decimals: Number of fractional digits the protocol integer carries

    Returns:
        The exact scaled integer

    Raises:
        EncodingError: If the value is not a string, the numeral is
            malformed or negative, has more significant fractional digits
            than ``decimals`` or exceeds uint256
    """
    scale = resolve_decimals(decimals)

    if not isinstance(value, str):
        raise EncodingError(
            f"Expected a decimal string, got {type(value).__name__} {value!r}",
            raw_value=value,
            decimals=scale,
        )

    text = value.strip()
    match = _DECIMAL_NUMERAL.match(text)
    if match is None or text in ("", "."):
        raise EncodingError(
            f"Not a valid decimal numeral: {value!r}",
            raw_value=value,
            decimals=scale,
        )

    whole = match.group("whole") or "0"
    # Trailing zeros carry no value, so only significant digits count
    fraction = (match.group("fraction") or "").rstrip("0")

    if len(fraction) > scale:
        raise EncodingError(
            f"{value!r} has {len(fraction)} fractional digits, "
            f"at most {scale} are representable",
            raw_value=value,
            decimals=scale,
        )

    result = int(whole + fraction.ljust(scale, "0"))

    if result > UINT256_MAX:
        raise EncodingError(
            f"{value!r} at {scale} decimals does not fit in uint256",
            raw_value=value,
            decimals=scale,
        )

    return result


def from_fixed_point(value: int, decimals: Decimals) -> str:
    """
    Render a protocol integer as a canonical decimal string.

    The result has no trailing fractional zeros and no trailing point,
    so ``from_fixed_point(to_fixed_point(d, n), n) == d`` for canonical ``d``.
    """
    scale = resolve_decimals(decimals)

    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise EncodingError(
            f"Expected a non-negative integer, got {value!r}",
            raw_value=value,
            decimals=scale,
        )

    if scale == 0:
        return str(value)

    digits = str(value).rjust(scale + 1, "0")
    whole, fraction = digits[:-scale], digits[-scale:].rstrip("0")

    if not fraction:
        return whole
    return f"{whole}.{fraction}"


def gwei_to_wei(value: str) -> int:
    """Convert a gas price in gwei to wei."""
    return to_fixed_point(value, GWEI_DECIMALS)


def parse_ether(value: str) -> int:
    """Scale at 18 decimals, the convention for price ratios."""
    return to_fixed_point(value, ETHER_DECIMALS)
