"""Default configuration parameters for the vault orders client."""

from dataclasses import dataclass, field

UNSET_ADDRESS = ""

DEFAULT_NETWORK = "polygon"

# Deployed protocol addresses; an empty string marks a role not yet live
DEFAULT_ADDRESSES: dict[str, dict[str, dict[str, str]]] = {
    "polygon": {
        "roles": {
            "master_chef": "0xb4B14Aa0dfa22Cb3549de81E2657c6c026014090",
            "cob_token": "0x648FA1E7Dd2722Ba93EC4Da99f2C32347522a37C",
            "dev_treasury": "0x93F835b9a2eec7D2E289c1E0D50Ad4dEd88b253f",
            "corn_treasury": "0xfC484aFB55D9EA9E186D8De55A0Aa24cbe772a19",
            "timelock": "0x4C7d41cF74BE3994e4BcEb7F7810cd85CB67c973",
            "gas_tank": "0xA7721E54dd41bceaB8d30B5590D861c396B32F2c",
            "resolver": "0x7DEfff816DB6da768De806eC4C8f42fC8FaE4531",
            "controller": "0x678753f5b53bfbF1d4dCfBB0F33aB5C2161edDF2",
            "controller_view": "0xC69334272cAE03986B4d9e5FC6C3897934E2D7Ef",
            "limit_order": UNSET_ADDRESS,
        },
        "tokens": {
            "USDC": "0x2791bca1f2de4661ed88a30c99a7a9449aa84174",
            "WETH": "0x7ceb23fd6bc0add59e62ac25578270cff1b9f619",
            "WMATIC": "0x0d500b1d8e8ef31e21c99d1db9a6444d3adf1270",
            "MIMATIC": "0xa3Fa99A148fA48D14Ed51d610c367C61876997F1",
            "DAI": "0x8f3cf7ad23cd3cadbd9735aff958023239c6a063",
            "USDT": "0xc2132D05D31c914a87C6611C10748AEb04B58e8F",
            "DINO": "0xAa9654BECca45B5BDFA5ac646c939C62b527D394",
            "LINK": "0x53e0bca35ec356bd5dddfebbd1fc0fd03fabad39",
            "SUSHI": "0x0b3f868e0be5597d5db7feb59e1cadbb0fdda50a",
            "FISH": "0x3a3df212b7aa91aa0402b9035b098891d276572b",
            "OMEN": "0x76e63a3E7Ba1e2E61D3DA86a87479f983dE89a7E",
            "UNI": "0xb33eaad8d922b1083446dc23f610c2567fb5180f",
            "AAVE": "0xd6df932a45c0f255f85145f286ea0b292b21c90b",
            "GRT": "0x5fe2b58c013d7601147dcdd68c143a77499f5531",
            "COMP": "0x8505b9d2254a7ae468c0e9dd10ccea3a837aef5c",
            "SNX": "0x50b728d8d964fd00c2d0aad81718b71311fef68a",
            "CRV": "0x172370d5cd63279efa6d502dab29171933a610af",
        },
    },
}


@dataclass(frozen=True)
class NetworkParams:
    """Signer and transport parameters."""
    network: str = DEFAULT_NETWORK
    rpc_url_env: str = "RPC_URL"                    # Env var holding the endpoint
    private_key_env: str = "PRIVATE_KEY"            # Env var holding the credential
    request_timeout: float = 30.0                   # Seconds, applied by the transport


@dataclass(frozen=True)
class EncodingParams:
    """Fixed-point scaling used when encoding order intents."""
    price_decimals: int = 18                        # Price ratios, regardless of token
    gas_price_decimals: int = 9                     # Max gas price is given in gwei
    gas_tank_decimals: int = 18                     # Gas tank holds the native coin
    order_type: int = 0                             # Only supported order variant


@dataclass(frozen=True)
class QueryParams:
    """Vault query normalization parameters."""
    json_safe: bool = False                         # Cap token ids at 2**53 - 1


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    network: NetworkParams = field(default_factory=NetworkParams)
    encoding: EncodingParams = field(default_factory=EncodingParams)
    query: QueryParams = field(default_factory=QueryParams)


def get_default_config() -> DefaultConfig:
    """Get default configuration instance."""
    return DefaultConfig()
