"""
Structured error classification for the orchestration layer.

Every error identifies the operation that raised it and carries a context
dict. None of them are retried automatically.
"""

from .input_errors import (
    VaultOrdersError,
    ConfigurationError,
    EncodingError,
)
from .remote_failures import (
    RemoteCallError,
    TokenIdOverflowError,
)

__all__ = [
    "VaultOrdersError",
    # Raised before any remote call
    "ConfigurationError",
    "EncodingError",
    # Raised by or after a remote call
    "RemoteCallError",
    "TokenIdOverflowError",
]
