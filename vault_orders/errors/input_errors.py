"""
Error classifications for invalid local input.

These are raised before any remote call is attempted, so no transaction
has been submitted when one of them surfaces.
"""

from typing import Optional, Dict, Any


class VaultOrdersError(Exception):
    """Base class for all orchestration errors."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.operation = operation
        self.context = context or {}
        self.retryable = False

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        message = super().__str__()
        if self.operation:
            return f"[{self.operation}] {message}"
        return message


class ConfigurationError(VaultOrdersError):
    """Unset or malformed address, signer input or interface lookup."""

    def __init__(self, message: str, setting: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.setting = setting


class EncodingError(VaultOrdersError):
    """Decimal input that cannot be represented exactly at the required precision."""

    def __init__(self, message: str, raw_value: Optional[Any] = None,
                 decimals: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_value = raw_value
        self.decimals = decimals
