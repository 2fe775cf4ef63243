"""
Contract ABIs for the Drips contracts.

Only the functions and events the SDK calls are listed.
"""

_DRIPS_RECEIVER_TUPLE = {
    "type": "tuple[]",
    "components": [
        {"name": "userId", "type": "uint256"},
        {"name": "config", "type": "uint256"},
    ],
}

_SPLITS_RECEIVER_TUPLE = {
    "type": "tuple[]",
    "components": [
        {"name": "userId", "type": "uint256"},
        {"name": "weight", "type": "uint32"},
    ],
}


def _drips_receivers(name: str) -> dict:
    return {"name": name, **_DRIPS_RECEIVER_TUPLE}


def _splits_receivers(name: str) -> dict:
    return {"name": name, **_SPLITS_RECEIVER_TUPLE}


# DripsHub ABI
DRIPS_HUB_ABI = [
    # Read functions
    {
        "type": "function",
        "name": "cycleSecs",
        "inputs": [],
        "outputs": [{"type": "uint32"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "splittable",
        "inputs": [
            {"name": "userId", "type": "uint256"},
            {"name": "erc20", "type": "address"},
        ],
        "outputs": [{"name": "amt", "type": "uint128"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "collectable",
        "inputs": [
            {"name": "userId", "type": "uint256"},
            {"name": "erc20", "type": "address"},
        ],
        "outputs": [{"name": "amt", "type": "uint128"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "receivableDripsCycles",
        "inputs": [
            {"name": "userId", "type": "uint256"},
            {"name": "erc20", "type": "address"},
        ],
        "outputs": [{"name": "cycles", "type": "uint32"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "receiveDripsResult",
        "inputs": [
            {"name": "userId", "type": "uint256"},
            {"name": "erc20", "type": "address"},
            {"name": "maxCycles", "type": "uint32"},
        ],
        "outputs": [{"name": "receivableAmt", "type": "uint128"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "splitResult",
        "inputs": [
            {"name": "userId", "type": "uint256"},
            _splits_receivers("currReceivers"),
            {"name": "amount", "type": "uint128"},
        ],
        "outputs": [
            {"name": "collectableAmt", "type": "uint128"},
            {"name": "splitAmt", "type": "uint128"},
        ],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "collectableAll",
        "inputs": [
            {"name": "userId", "type": "uint256"},
            {"name": "erc20", "type": "address"},
            _splits_receivers("currReceivers"),
        ],
        "outputs": [
            {"name": "collectedAmt", "type": "uint128"},
            {"name": "splitAmt", "type": "uint128"},
        ],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "dripsState",
        "inputs": [
            {"name": "userId", "type": "uint256"},
            {"name": "erc20", "type": "address"},
        ],
        "outputs": [
            {"name": "dripsHash", "type": "bytes32"},
            {"name": "updateTime", "type": "uint32"},
            {"name": "balance", "type": "uint128"},
            {"name": "maxEnd", "type": "uint32"},
        ],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "balanceAt",
        "inputs": [
            {"name": "userId", "type": "uint256"},
            {"name": "erc20", "type": "address"},
            _drips_receivers("receivers"),
            {"name": "timestamp", "type": "uint32"},
        ],
        "outputs": [{"name": "balance", "type": "uint128"}],
        "stateMutability": "view",
    },
    # Write functions (permissionless)
    {
        "type": "function",
        "name": "receiveDrips",
        "inputs": [
            {"name": "userId", "type": "uint256"},
            {"name": "erc20", "type": "address"},
            {"name": "maxCycles", "type": "uint32"},
        ],
        "outputs": [{"name": "receivedAmt", "type": "uint128"}],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "split",
        "inputs": [
            {"name": "userId", "type": "uint256"},
            {"name": "erc20", "type": "address"},
            _splits_receivers("currReceivers"),
        ],
        "outputs": [
            {"name": "collectableAmt", "type": "uint128"},
            {"name": "splitAmt", "type": "uint128"},
        ],
        "stateMutability": "nonpayable",
    },
]

# AddressDriver ABI
ADDRESS_DRIVER_ABI = [
    {
        "type": "function",
        "name": "calcUserId",
        "inputs": [{"name": "userAddr", "type": "address"}],
        "outputs": [{"name": "userId", "type": "uint256"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "collect",
        "inputs": [
            {"name": "erc20", "type": "address"},
            {"name": "transferTo", "type": "address"},
        ],
        "outputs": [{"name": "amt", "type": "uint128"}],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "give",
        "inputs": [
            {"name": "receiver", "type": "uint256"},
            {"name": "erc20", "type": "address"},
            {"name": "amt", "type": "uint128"},
        ],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "setDrips",
        "inputs": [
            {"name": "erc20", "type": "address"},
            _drips_receivers("currReceivers"),
            {"name": "balanceDelta", "type": "int128"},
            _drips_receivers("newReceivers"),
            {"name": "transferTo", "type": "address"},
        ],
        "outputs": [{"name": "realBalanceDelta", "type": "int128"}],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "setSplits",
        "inputs": [_splits_receivers("receivers")],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "emitUserMetadata",
        "inputs": [
            {"name": "key", "type": "uint256"},
            {"name": "value", "type": "bytes"},
        ],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
]

# NFTDriver ABI
NFT_DRIVER_ABI = [
    {
        "type": "function",
        "name": "mint",
        "inputs": [{"name": "to", "type": "address"}],
        "outputs": [{"name": "tokenId", "type": "uint256"}],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "safeMint",
        "inputs": [{"name": "to", "type": "address"}],
        "outputs": [{"name": "tokenId", "type": "uint256"}],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "collect",
        "inputs": [
            {"name": "tokenId", "type": "uint256"},
            {"name": "erc20", "type": "address"},
            {"name": "transferTo", "type": "address"},
        ],
        "outputs": [{"name": "amt", "type": "uint128"}],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "give",
        "inputs": [
            {"name": "tokenId", "type": "uint256"},
            {"name": "receiver", "type": "uint256"},
            {"name": "erc20", "type": "address"},
            {"name": "amt", "type": "uint128"},
        ],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "setDrips",
        "inputs": [
            {"name": "tokenId", "type": "uint256"},
            {"name": "erc20", "type": "address"},
            _drips_receivers("currReceivers"),
            {"name": "balanceDelta", "type": "int128"},
            _drips_receivers("newReceivers"),
            {"name": "transferTo", "type": "address"},
        ],
        "outputs": [{"name": "realBalanceDelta", "type": "int128"}],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "setSplits",
        "inputs": [
            {"name": "tokenId", "type": "uint256"},
            _splits_receivers("receivers"),
        ],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "emitUserMetadata",
        "inputs": [
            {"name": "tokenId", "type": "uint256"},
            {"name": "key", "type": "uint256"},
            {"name": "value", "type": "bytes"},
        ],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    # Events
    {
        "type": "event",
        "name": "Transfer",
        "inputs": [
            {"name": "from", "type": "address", "indexed": True},
            {"name": "to", "type": "address", "indexed": True},
            {"name": "tokenId", "type": "uint256", "indexed": True},
        ],
        "anonymous": False,
    },
]

# Caller ABI
CALLER_ABI = [
    {
        "type": "function",
        "name": "callBatched",
        "inputs": [
            {
                "name": "calls",
                "type": "tuple[]",
                "components": [
                    {"name": "to", "type": "address"},
                    {"name": "data", "type": "bytes"},
                    {"name": "value", "type": "uint256"},
                ],
            },
        ],
        "outputs": [{"name": "returnData", "type": "bytes[]"}],
        "stateMutability": "payable",
    },
]

# Minimal ERC-20 ABI (allowance/approve)
ERC20_ABI = [
    {
        "type": "function",
        "name": "allowance",
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "spender", "type": "address"},
        ],
        "outputs": [{"type": "uint256"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "approve",
        "inputs": [
            {"name": "spender", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"type": "bool"}],
        "stateMutability": "nonpayable",
    },
]
