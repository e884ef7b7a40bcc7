"""
Signing context: an RPC endpoint bound to a local signing account.

Construction performs no network I/O. The endpoint is first contacted
when a bound contract is called or `is_connected` is awaited.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import urlparse

import aiohttp
from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.middleware import SignAndSendRawMiddlewareBuilder

from ..config.defaults import NetworkParams
from ..errors import ConfigurationError
from ..logging import get_logger

logger = get_logger(__name__)

_PRIVATE_KEY = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")


@dataclass(frozen=True)
class SigningContext:
    """Endpoint and signing identity shared by every call in a process run."""
    endpoint: str
    account: LocalAccount = field(repr=False, compare=False)
    web3: Any = field(repr=False, compare=False)

    @property
    def active_address(self) -> str:
        """Checksum address derived from the credential."""
        return self.account.address

    async def is_connected(self) -> bool:
        """Probe the endpoint; does not raise on transport failure."""
        return bool(await self.web3.is_connected())


def _validate_endpoint(endpoint: Any) -> str:
    if not isinstance(endpoint, str) or not endpoint.strip():
        raise ConfigurationError("RPC endpoint is empty", setting="endpoint", operation="connect")

    endpoint = endpoint.strip()
    parsed = urlparse(endpoint)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(
            f"RPC endpoint must be an http(s) URL: {endpoint}",
            setting="endpoint",
            operation="connect",
        )
    return endpoint


def _load_account(credential: Any) -> LocalAccount:
    # The credential itself never appears in error messages or logs
    if not isinstance(credential, str) or not _PRIVATE_KEY.match(credential.strip()):
        raise ConfigurationError(
            "Credential must be 32 bytes of hex key material",
            setting="credential",
            operation="connect",
        )

    try:
        return Account.from_key(credential.strip())
    except ValueError as e:
        raise ConfigurationError(
            "Credential is not a valid secp256k1 private key",
            setting="credential",
            operation="connect",
        ) from e


def connect(endpoint: str, credential: str, request_timeout: float = 30.0) -> SigningContext:
    """
    Bind an RPC endpoint and a private key into a signing context.

    Args:
        endpoint: http(s) JSON-RPC URL
        credential: Hex private key, with or without ``0x``
        request_timeout: Per-request transport timeout in seconds

    Returns:
        SigningContext whose active address is derived from ``credential``

    Raises:
        ConfigurationError: If either input is malformed
    """
    endpoint = _validate_endpoint(endpoint)
    account = _load_account(credential)

    provider = AsyncHTTPProvider(
        endpoint,
        request_kwargs={"timeout": aiohttp.ClientTimeout(total=request_timeout)},
    )
    web3 = AsyncWeb3(provider)
    web3.middleware_onion.add(SignAndSendRawMiddlewareBuilder.build(account))
    web3.eth.default_account = account.address

    logger.info("Signer connected", endpoint=endpoint, active_address=account.address)

    return SigningContext(endpoint=endpoint, account=account, web3=web3)


def connect_from_env(params: Optional[NetworkParams] = None) -> SigningContext:
    """
    Build the signing context from the environment.

    The variable names come from `NetworkParams` (``RPC_URL`` and
    ``PRIVATE_KEY`` by default).
    """
    params = params or NetworkParams()

    endpoint = os.environ.get(params.rpc_url_env)
    if not endpoint:
        raise ConfigurationError(
            f"{params.rpc_url_env} is not set",
            setting=params.rpc_url_env,
            operation="connect",
        )

    credential = os.environ.get(params.private_key_env)
    if not credential:
        raise ConfigurationError(
            f"{params.private_key_env} is not set",
            setting=params.private_key_env,
            operation="connect",
        )

    return connect(endpoint, credential, request_timeout=params.request_timeout)
