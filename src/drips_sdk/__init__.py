# Suppress websockets deprecation warning from web3.py (ethereum/web3.py#3530)
# web3.py unconditionally imports LegacyWebSocketProvider even for HTTP-only usage.
# This will be fixed in web3.py v8. Remove this filter after upgrading.
import warnings

warnings.filterwarnings(
    "ignore",
    message="websockets.legacy is deprecated",
    category=DeprecationWarning,
    module=r"websockets\.legacy",
)

"""
Drips SDK

Async Python client for the Drips v2 protocol: stream (drip) and split
ERC-20 funds between users identified by an address or by an NFT.

Usage:
    import asyncio
    from drips_sdk import AddressDriverClient, DripsReceiver, DripsReceiverConfig, to_packed

    async def main():
        async with AddressDriverClient(
            rpc_url="https://goerli.example/rpc",
            private_key="0x...",
        ) as client:
            config = to_packed(DripsReceiverConfig(drip_id=1, amount_per_sec=10**9, duration=0, start=0))

            tx_hash = await client.set_drips(
                token_address="0xToken...",
                current_receivers=[],
                new_receivers=[DripsReceiver(user_id="1234", config=config)],
                transfer_to_address=client.address,
                balance_delta=10**18,
            )

    asyncio.run(main())

Batched calls:
    from drips_sdk import CallerClient, NFTDriverPresets, CollectFlowPayload

    calls = NFTDriverPresets.create_collect_flow(CollectFlowPayload(...))
    tx_hash = await caller.call_batched(calls)

Subgraph:
    from drips_sdk import DripsSubgraphClient

    async with DripsSubgraphClient.from_chain(5) as subgraph:
        configs = await subgraph.get_user_asset_configs("1234")
"""

from . import async_helpers
from ._exceptions import (
    DripsError,
    DripsErrorCode,
    InvalidArgumentError,
    MissingArgumentError,
    UnsupportedNetworkError,
)
from ._version import __version__

# ABIs (for advanced usage)
from .abi import ADDRESS_DRIVER_ABI, CALLER_ABI, DRIPS_HUB_ABI, ERC20_ABI, NFT_DRIVER_ABI

# Clients
from .address_driver import AddressDriverClient
from .caller import CallerClient

# Constants
from .constants import (
    DEFAULT_CHAIN_ID,
    MAX_DRIPS_RECEIVERS,
    MAX_SPLITS_RECEIVERS,
    NETWORK_CONFIGS,
    SUPPORTED_CHAIN_IDS,
    TOTAL_SPLITS_WEIGHT,
    get_network_config,
    is_supported_chain,
)
from .hub import DripsHubClient
from .nft_driver import NFTDriverClient

# Receiver config codec and list normalization
from .packing import from_packed, to_packed
from .presets import AddressDriverPresets, NFTDriverPresets
from .receivers import normalize_drips_receivers, normalize_splits_receivers
from .subgraph import DripsSubgraphClient

# Types
from .types import (
    CallStruct,
    CollectableAllResult,
    CollectFlowPayload,
    DripsEntry,
    DripsReceiver,
    DripsReceiverConfig,
    DripsState,
    GasOptions,
    NetworkConfig,
    NewStreamFlowPayload,
    SplitEntry,
    SplitResult,
    SplitsReceiver,
    UserAssetConfig,
)

__all__ = [
    # Version
    "__version__",
    # Clients
    "DripsHubClient",
    "AddressDriverClient",
    "NFTDriverClient",
    "CallerClient",
    "DripsSubgraphClient",
    # Presets
    "AddressDriverPresets",
    "NFTDriverPresets",
    # Codec and normalization
    "to_packed",
    "from_packed",
    "normalize_splits_receivers",
    "normalize_drips_receivers",
    # Types
    "DripsReceiverConfig",
    "DripsReceiver",
    "SplitsReceiver",
    "DripsState",
    "SplitResult",
    "CollectableAllResult",
    "CallStruct",
    "GasOptions",
    "NetworkConfig",
    "DripsEntry",
    "UserAssetConfig",
    "SplitEntry",
    "NewStreamFlowPayload",
    "CollectFlowPayload",
    # Constants
    "NETWORK_CONFIGS",
    "SUPPORTED_CHAIN_IDS",
    "DEFAULT_CHAIN_ID",
    "MAX_DRIPS_RECEIVERS",
    "MAX_SPLITS_RECEIVERS",
    "TOTAL_SPLITS_WEIGHT",
    "get_network_config",
    "is_supported_chain",
    # ABIs
    "DRIPS_HUB_ABI",
    "ADDRESS_DRIVER_ABI",
    "NFT_DRIVER_ABI",
    "CALLER_ABI",
    "ERC20_ABI",
    # Async helpers module
    "async_helpers",
    # Exceptions
    "DripsError",
    "DripsErrorCode",
    "MissingArgumentError",
    "InvalidArgumentError",
    "UnsupportedNetworkError",
]
