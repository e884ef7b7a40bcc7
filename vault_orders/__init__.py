"""
Vault Orders - limit order orchestration client

Client-side orchestration layer for an on-chain vault-execution protocol.
Converts human-denominated order intents into protocol-exact integers,
sequences the authorization calls an order needs and normalizes vault
queries into plain records.
"""

__version__ = "0.1.0"
__author__ = "Vault Orders Team"
