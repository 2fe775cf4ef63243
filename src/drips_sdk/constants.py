"""Contract addresses and protocol constants for drips-sdk."""

from ._exceptions import UnsupportedNetworkError
from .types import NetworkConfig

# Packed receiver config field widths (bits), most to least significant:
# drip_id | amount_per_sec | start | duration
DRIP_ID_BITS = 32
AMT_PER_SEC_BITS = 160
START_BITS = 32
DURATION_BITS = 32

MAX_UINT32 = (1 << 32) - 1
MAX_UINT128 = (1 << 128) - 1
MAX_UINT256 = (1 << 256) - 1

# Receiver limits (enforced by DripsHub)
MAX_DRIPS_RECEIVERS = 100
MAX_SPLITS_RECEIVERS = 200
TOTAL_SPLITS_WEIGHT = 1_000_000

# Deployed contracts per chain.
NETWORK_CONFIGS: dict[int, NetworkConfig] = {
    5: NetworkConfig(
        chain_id=5,
        name="goerli",
        drips_hub="0x4faab6f89e2aca66b7ab9cb6bb9d9b2f7ba4fd1c",
        address_driver="0x7a8a3b8cca3d6ac7c2b2f1f0de3d6e1e0a3bbd4f",
        nft_driver="0xcb7c1a7a54f4bdbd0a8a0e1e6f3c1c8e2c0bd1e2",
        caller="0x9a4cbb2d8f8b4e2f6c21e1a7b7e0d0b5e3f6c8a1",
        subgraph_url="https://api.thegraph.com/subgraphs/name/gh0stwheel/drips-v2-on-goerli",
    ),
}

SUPPORTED_CHAIN_IDS: list[int] = list(NETWORK_CONFIGS)

DEFAULT_CHAIN_ID = 5


def get_network_config(chain_id: int) -> NetworkConfig:
    """Get the deployed contracts for a given chain ID."""
    config = NETWORK_CONFIGS.get(chain_id)
    if config is None:
        raise UnsupportedNetworkError(chain_id)
    return config


def is_supported_chain(chain_id: int) -> bool:
    """Check if a chain is supported."""
    return chain_id in NETWORK_CONFIGS
