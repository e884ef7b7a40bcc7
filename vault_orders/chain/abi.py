"""Interface shapes of the protocol contracts this client calls."""

ERC20_ABI = [
    {
        "type": "function",
        "name": "approve",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "spender", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "type": "function",
        "name": "allowance",
        "stateMutability": "view",
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "spender", "type": "address"},
        ],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]

GAS_TANK_ABI = [
    {
        "type": "function",
        "name": "approve",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "_spender", "type": "address"},
            {"name": "_status", "type": "bool"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "deposit",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "_receiver", "type": "address"},
            {"name": "_amount", "type": "uint256"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "withdraw",
        "stateMutability": "nonpayable",
        "inputs": [{"name": "_amount", "type": "uint256"}],
        "outputs": [],
    },
]

CONTROLLER_ABI = [
    {
        "type": "function",
        "name": "createTrade",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "_orderType", "type": "uint8"},
            {"name": "_tokens", "type": "address[]"},
            {"name": "_amounts", "type": "uint256[]"},
            {"name": "_times", "type": "uint256[]"},
            {"name": "_maxGasPrice", "type": "uint256"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "withdraw",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "_vaultId", "type": "uint256"},
            {"name": "_tokenId", "type": "uint256"},
        ],
        "outputs": [],
    },
]

CONTROLLER_VIEW_ABI = [
    {
        "type": "function",
        "name": "vaultTokensByOwner",
        "stateMutability": "view",
        "inputs": [{"name": "_owner", "type": "address"}],
        "outputs": [
            {
                "name": "",
                "type": "tuple[]",
                "components": [
                    {"name": "vault", "type": "address"},
                    {"name": "tokenId", "type": "uint256"},
                ],
            }
        ],
    },
]
