"""
Signing context and contract binding over web3.
"""
from .binder import ContractBinder, ContractHandle, PendingTransaction, RemoteOperation
from .signer import SigningContext, connect, connect_from_env

__all__ = [
    "ContractBinder",
    "ContractHandle",
    "PendingTransaction",
    "RemoteOperation",
    "SigningContext",
    "connect",
    "connect_from_env",
]
