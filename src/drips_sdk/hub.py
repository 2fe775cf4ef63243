"""Read-only async client for the DripsHub contract."""

import logging

from web3 import AsyncWeb3

from ._exceptions import UnsupportedNetworkError
from .abi import DRIPS_HUB_ABI
from .async_helpers import resolve_rpc_url
from .constants import DEFAULT_CHAIN_ID, get_network_config, is_supported_chain
from .receivers import format_drips_receivers, format_splits_receivers
from .types import CollectableAllResult, DripsReceiver, DripsState, SplitResult, SplitsReceiver
from .validators import (
    validate_address,
    validate_amount,
    validate_drips_receivers,
    validate_max_cycles,
    validate_splits_receivers,
    validate_uint32,
    validate_user_id,
)

logger = logging.getLogger(__name__)


class DripsHubClient:
    """
    Read-only client for the DripsHub contract.

    DripsHub tracks streaming balances, splits and collectable funds for
    every user of every driver. Write access goes through a driver client
    or a batched `CallerClient` call.

    Example:
        >>> hub = DripsHubClient(rpc_url="https://goerli.example/rpc")
        >>> amount = await hub.get_collectable("1234", "0xToken...")
    """

    def __init__(
        self,
        rpc_url: str | None = None,
        chain_id: int = DEFAULT_CHAIN_ID,
        hub_address: str | None = None,
        w3: AsyncWeb3 | None = None,
    ) -> None:
        """
        Initialize the DripsHub client.

        Args:
            rpc_url: RPC endpoint URL. Falls back to DRIPS_RPC_URL env var.
                Ignored when `w3` is given.
            chain_id: Chain ID (5 for Goerli)
            hub_address: Custom DripsHub address (uses default if not provided)
            w3: Existing AsyncWeb3 instance to share with another client

        Raises:
            MissingArgumentError: If neither rpc_url nor DRIPS_RPC_URL is set
            UnsupportedNetworkError: If chain_id is not supported
        """
        if not is_supported_chain(chain_id):
            raise UnsupportedNetworkError(chain_id)

        self.w3 = w3 or AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(resolve_rpc_url(rpc_url)))
        self.chain_id = chain_id
        self.network = get_network_config(chain_id)

        self.hub_address = AsyncWeb3.to_checksum_address(hub_address or self.network.drips_hub)
        self.contract = self.w3.eth.contract(address=self.hub_address, abi=DRIPS_HUB_ABI)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.w3.provider.disconnect()

    async def __aenter__(self) -> "DripsHubClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def get_cycle_secs(self) -> int:
        """Get the length of a drips cycle in seconds."""
        cycle_secs = await self.contract.functions.cycleSecs().call()
        logger.debug("cycleSecs() -> %s", cycle_secs)
        return cycle_secs

    async def get_splittable(self, user_id: int | str, token_address: str) -> int:
        """Get the user's received, but not yet split, funds."""
        user = validate_user_id(user_id)
        validate_address(token_address, "token_address")

        logger.debug("splittable(%s, %s)", user, token_address)
        return await self.contract.functions.splittable(user, AsyncWeb3.to_checksum_address(token_address)).call()

    async def get_collectable(self, user_id: int | str, token_address: str) -> int:
        """Get the user's funds that are already split and ready to be collected."""
        user = validate_user_id(user_id)
        validate_address(token_address, "token_address")

        logger.debug("collectable(%s, %s)", user, token_address)
        return await self.contract.functions.collectable(user, AsyncWeb3.to_checksum_address(token_address)).call()

    async def get_receivable_cycles(self, user_id: int | str, token_address: str) -> int:
        """Get the number of drips cycles ready to be received."""
        user = validate_user_id(user_id)
        validate_address(token_address, "token_address")

        logger.debug("receivableDripsCycles(%s, %s)", user, token_address)
        return await self.contract.functions.receivableDripsCycles(
            user,
            AsyncWeb3.to_checksum_address(token_address),
        ).call()

    async def get_receive_drips_result(self, user_id: int | str, token_address: str, max_cycles: int) -> int:
        """Get the amount `receiveDrips` would receive for up to `max_cycles` cycles."""
        user = validate_user_id(user_id)
        validate_address(token_address, "token_address")
        validate_max_cycles(max_cycles)

        logger.debug("receiveDripsResult(%s, %s, %s)", user, token_address, max_cycles)
        return await self.contract.functions.receiveDripsResult(
            user,
            AsyncWeb3.to_checksum_address(token_address),
            max_cycles,
        ).call()

    async def get_split_result(
        self,
        user_id: int | str,
        current_receivers: list[SplitsReceiver],
        amount: int,
    ) -> SplitResult:
        """
        Preview how `amount` would be divided by a `split` call.

        Args:
            user_id: The user ID
            current_receivers: The user's current splits receivers
            amount: The amount being split

        Returns:
            SplitResult with the amount left collectable and the amount split
        """
        user = validate_user_id(user_id)
        validate_splits_receivers(current_receivers, "current_receivers")
        validate_amount(amount)

        logger.debug("splitResult(%s, %s)", user, amount)
        result = await self.contract.functions.splitResult(
            user,
            format_splits_receivers(current_receivers),
            amount,
        ).call()

        return SplitResult(collectable_amt=result[0], split_amt=result[1])

    async def get_collectable_all(
        self,
        user_id: int | str,
        token_address: str,
        current_receivers: list[SplitsReceiver],
    ) -> CollectableAllResult:
        """
        Preview what the user could collect right now.

        Assumes all receivable drips cycles are received and the splittable
        balance is split with `current_receivers` before collecting.

        Returns:
            CollectableAllResult with the amount collected and the amount
            passed on to splits receivers
        """
        user = validate_user_id(user_id)
        validate_address(token_address, "token_address")
        validate_splits_receivers(current_receivers, "current_receivers")

        logger.debug("collectableAll(%s, %s)", user, token_address)
        result = await self.contract.functions.collectableAll(
            user,
            AsyncWeb3.to_checksum_address(token_address),
            format_splits_receivers(current_receivers),
        ).call()

        return CollectableAllResult(collected_amt=result[0], split_amt=result[1])

    async def get_drips_state(self, user_id: int | str, token_address: str) -> DripsState:
        """
        Get the user's current drips state.

        Returns:
            DripsState with the receivers list hash, the time and balance of
            the last `setDrips` and the time the balance runs out
        """
        user = validate_user_id(user_id)
        validate_address(token_address, "token_address")

        logger.debug("dripsState(%s, %s)", user, token_address)
        result = await self.contract.functions.dripsState(user, AsyncWeb3.to_checksum_address(token_address)).call()

        return DripsState(
            drips_hash=result[0],
            update_time=result[1],
            balance=result[2],
            max_end=result[3],
        )

    async def get_balance_at(
        self,
        user_id: int | str,
        token_address: str,
        receivers: list[DripsReceiver],
        timestamp: int,
    ) -> int:
        """
        Get the user's drips balance at `timestamp`.

        `timestamp` can't be lower than the last `setDrips` call. If it is in
        the future, the result is a prediction assuming `setDrips` isn't
        called before then.
        """
        user = validate_user_id(user_id)
        validate_address(token_address, "token_address")
        validate_drips_receivers(receivers)
        validate_uint32(timestamp, "timestamp")

        logger.debug("balanceAt(%s, %s, %s)", user, token_address, timestamp)
        return await self.contract.functions.balanceAt(
            user,
            AsyncWeb3.to_checksum_address(token_address),
            format_drips_receivers(receivers),
            timestamp,
        ).call()
