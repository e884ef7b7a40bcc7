"""
Limit order orchestration and vault queries.
"""
from .models import EncodedOrder, OrderIntent, VaultRecord
from .orchestrator import OrderOrchestrator
from .vaults import JSON_SAFE_MAX, VaultQueryNormalizer, normalize_vault_tokens

__all__ = [
    "EncodedOrder",
    "OrderIntent",
    "VaultRecord",
    "OrderOrchestrator",
    "JSON_SAFE_MAX",
    "VaultQueryNormalizer",
    "normalize_vault_tokens",
]
