"""
Error classifications for remote call failures and their results.

Remote failures are surfaced verbatim; the layer keeps no local state
that would need compensating.
"""

from typing import Optional, Any

from .input_errors import VaultOrdersError


class RemoteCallError(VaultOrdersError):
    """Transport failure or protocol rejection of a remote call."""

    def __init__(self, message: str, reason: Optional[str] = None,
                 contract: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.reason = reason
        self.contract = contract


class TokenIdOverflowError(VaultOrdersError, OverflowError):
    """Protocol integer outside the range of the normalized record type."""

    def __init__(self, message: str, value: Optional[Any] = None,
                 limit: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.value = value
        self.limit = limit
