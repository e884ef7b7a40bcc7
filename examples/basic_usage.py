#!/usr/bin/env python3
"""
Basic Usage Example - Vault Orders

This script walks through the order flow against a live deployment:
- Connect a signer from RPC_URL and PRIVATE_KEY
- Approve the controller for the input token and the gas tank
- Fund the gas tank and submit a limit order
- List the signer's vaults

Set SUBMIT=1 to actually send the transactions; otherwise only the
encoded order and the vault listing are printed.

Run: python examples/basic_usage.py
"""

import asyncio
import os
import time

from vault_orders.chain import connect_from_env
from vault_orders.config.loader import ConfigLoader
from vault_orders.logging import configure_logging
from vault_orders.orders import OrderIntent, OrderOrchestrator


async def main() -> None:
    configure_logging(level="INFO")

    loader = ConfigLoader.create()
    config = loader.load_config()
    address_book = loader.load_address_book()

    signer = connect_from_env(config.network)
    orchestrator = OrderOrchestrator(address_book, encoding=config.encoding, query=config.query)

    intent = OrderIntent.create(
        from_token="USDC",
        to_token="WETH",
        from_token_decimals=6,
        amount_in="100",
        price="2500",                      # 2500 USDC per WETH
        expirations=int(time.time()) + 7 * 24 * 3600,
        max_gas_gwei="80",
    )

    order = orchestrator.encode_order(intent)
    print(f"Encoded order: {order.as_call_args()}")

    if os.environ.get("SUBMIT") == "1":
        await orchestrator.authorize_spend("USDC", "controller", order.amount_in, signer)
        await orchestrator.authorize_gas_tank_spend(signer)
        await orchestrator.fund_gas_tank("1", signer)
        pending = await orchestrator.create_limit_order(intent, signer, verify_allowance=False)
        receipt = await pending.wait()
        print(f"Order mined in block {receipt['blockNumber']}: {pending.hash_hex}")

    for record in await orchestrator.list_vaults_by_owner(None, signer):
        print(f"vault={record.vault} token_id={record.token_id}")


if __name__ == "__main__":
    asyncio.run(main())
