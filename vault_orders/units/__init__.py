"""
Fixed-point unit conversion.
"""
from .codec import (
    UINT256_MAX,
    from_fixed_point,
    gwei_to_wei,
    parse_ether,
    to_fixed_point,
)

__all__ = [
    "UINT256_MAX",
    "from_fixed_point",
    "gwei_to_wei",
    "parse_ether",
    "to_fixed_point",
]
