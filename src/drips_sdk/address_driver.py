"""Async client for the AddressDriver contract."""

import logging

from eth_account import Account
from eth_account.signers.local import LocalAccount
from hexbytes import HexBytes
from web3 import AsyncWeb3

from ._exceptions import UnsupportedNetworkError
from .abi import ADDRESS_DRIVER_ABI
from .async_helpers import approve as _approve
from .async_helpers import get_allowance as _get_allowance
from .async_helpers import resolve_private_key, resolve_rpc_url, send_transaction
from .constants import DEFAULT_CHAIN_ID, MAX_UINT256, get_network_config, is_supported_chain
from .hub import DripsHubClient
from .receivers import format_drips_receivers, format_splits_receivers
from .types import DripsReceiver, GasOptions, SplitsReceiver
from .validators import (
    validate_address,
    validate_approve_amount,
    validate_collect_input,
    validate_emit_user_metadata_input,
    validate_give_input,
    validate_set_drips_input,
    validate_splits_receivers,
    validate_user_id,
)

logger = logging.getLogger(__name__)

_ADDRESS_MASK = (1 << 160) - 1


class AddressDriverClient:
    """
    Client for the AddressDriver: Drips users identified by a wallet address.

    The signing account is the user the driver acts on behalf of.

    Example:
        >>> from drips_sdk import AddressDriverClient, SplitsReceiver
        >>>
        >>> client = AddressDriverClient(
        ...     rpc_url="https://goerli.example/rpc",
        ...     private_key="0x...",
        ... )
        >>>
        >>> await client.set_splits([
        ...     SplitsReceiver(user_id="1234", weight=500_000),
        ... ])
    """

    def __init__(
        self,
        rpc_url: str | None = None,
        private_key: str | None = None,
        chain_id: int = DEFAULT_CHAIN_ID,
        driver_address: str | None = None,
    ) -> None:
        """
        Initialize the AddressDriver client.

        Args:
            rpc_url: RPC endpoint URL. Falls back to DRIPS_RPC_URL env var.
            private_key: Private key for signing. Falls back to DRIPS_PRIVATE_KEY env var.
            chain_id: Chain ID (5 for Goerli)
            driver_address: Custom AddressDriver address (uses default if not provided)

        Raises:
            MissingArgumentError: If rpc_url or private_key not provided
            UnsupportedNetworkError: If chain_id is not supported
        """
        resolved_rpc = resolve_rpc_url(rpc_url)
        resolved_key = resolve_private_key(private_key)

        if not is_supported_chain(chain_id):
            raise UnsupportedNetworkError(chain_id)

        self.w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(resolved_rpc))
        self.account: LocalAccount = Account.from_key(resolved_key)
        self.chain_id = chain_id
        self.network = get_network_config(chain_id)

        self.driver_address = AsyncWeb3.to_checksum_address(driver_address or self.network.address_driver)
        self.contract = self.w3.eth.contract(address=self.driver_address, abi=ADDRESS_DRIVER_ABI)

        self.hub = DripsHubClient(chain_id=chain_id, w3=self.w3)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.w3.provider.disconnect()

    async def __aenter__(self) -> "AddressDriverClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def address(self) -> str:
        """Get the wallet address."""
        return self.account.address

    async def _send(self, contract_call, gas: GasOptions | None) -> HexBytes:
        return await send_transaction(self.w3, self.account, self.chain_id, contract_call, gas_options=gas)

    async def get_allowance(self, token_address: str) -> int:
        """Get the ERC-20 allowance the wallet has granted the AddressDriver."""
        validate_address(token_address, "token_address")

        allowance = await _get_allowance(self.w3, token_address, self.account.address, self.driver_address)
        logger.debug("allowance(%s, %s) -> %s", token_address, self.account.address, allowance)
        return allowance

    async def approve(
        self,
        token_address: str,
        amount: int = MAX_UINT256,
        gas: GasOptions | None = None,
    ) -> HexBytes:
        """
        Approve the AddressDriver to spend the wallet's ERC-20 tokens.

        Args:
            token_address: ERC-20 token address
            amount: Allowance to grant (defaults to unlimited)
            gas: Gas options

        Returns:
            Transaction hash
        """
        validate_address(token_address, "token_address")
        validate_approve_amount(amount)

        return await _approve(
            self.w3,
            self.account,
            self.chain_id,
            token_address,
            self.driver_address,
            amount,
            gas_options=gas,
        )

    async def get_user_id(self) -> str:
        """Get the wallet's Drips user ID."""
        return await self.get_user_id_by_address(self.account.address)

    async def get_user_id_by_address(self, user_address: str) -> str:
        """Get the Drips user ID of an address, as a decimal string."""
        validate_address(user_address, "user_address")

        user_id = await self.contract.functions.calcUserId(AsyncWeb3.to_checksum_address(user_address)).call()
        logger.debug("calcUserId(%s) -> %s", user_address, user_id)
        return str(user_id)

    @staticmethod
    def get_user_address(user_id: int | str) -> str:
        """
        Get the address a user ID was derived from.

        The address occupies the low 160 bits of an AddressDriver user ID.

        Example:
            >>> AddressDriverClient.get_user_address("998697365313809816557299962230702436787341785997")
            '0xAEeF2381C4Ca788a7bc53421849d73e61ec47B8D'
        """
        value = validate_user_id(user_id)
        return AsyncWeb3.to_checksum_address(f"0x{value & _ADDRESS_MASK:040x}")

    async def collect(
        self,
        token_address: str,
        transfer_to_address: str,
        gas: GasOptions | None = None,
    ) -> HexBytes:
        """
        Collect the wallet's split funds and transfer them.

        Args:
            token_address: ERC-20 token to collect
            transfer_to_address: Address receiving the collected funds
            gas: Gas options

        Returns:
            Transaction hash
        """
        validate_collect_input(token_address, transfer_to_address)

        contract_call = self.contract.functions.collect(
            AsyncWeb3.to_checksum_address(token_address),
            AsyncWeb3.to_checksum_address(transfer_to_address),
        )
        return await self._send(contract_call, gas)

    async def give(
        self,
        receiver_user_id: int | str,
        token_address: str,
        amount: int,
        gas: GasOptions | None = None,
    ) -> HexBytes:
        """
        Give `amount` of a token from the wallet to a user, in one go.

        Raises:
            MissingArgumentError: If receiver_user_id, token_address or amount is None
            InvalidArgumentError: If amount is not positive or an argument is malformed
        """
        validate_give_input(receiver_user_id, token_address, amount)

        contract_call = self.contract.functions.give(
            validate_user_id(receiver_user_id, "receiver_user_id"),
            AsyncWeb3.to_checksum_address(token_address),
            amount,
        )
        return await self._send(contract_call, gas)

    async def set_drips(
        self,
        token_address: str,
        current_receivers: list[DripsReceiver],
        new_receivers: list[DripsReceiver],
        transfer_to_address: str,
        balance_delta: int | None = 0,
        gas: GasOptions | None = None,
    ) -> HexBytes:
        """
        Replace the wallet's drips receivers and top up or withdraw its balance.

        Args:
            token_address: ERC-20 token being streamed
            current_receivers: Receivers currently set (as last passed to set_drips)
            new_receivers: Receivers to set; an empty list stops all drips
            transfer_to_address: Address receiving withdrawn funds
            balance_delta: Amount to add (positive) or withdraw (negative); None means 0
            gas: Gas options

        Returns:
            Transaction hash
        """
        validate_set_drips_input(token_address, current_receivers, new_receivers, transfer_to_address, balance_delta)

        contract_call = self.contract.functions.setDrips(
            AsyncWeb3.to_checksum_address(token_address),
            format_drips_receivers(current_receivers),
            balance_delta or 0,
            format_drips_receivers(new_receivers),
            AsyncWeb3.to_checksum_address(transfer_to_address),
        )
        return await self._send(contract_call, gas)

    async def set_splits(self, receivers: list[SplitsReceiver], gas: GasOptions | None = None) -> HexBytes:
        """
        Set the wallet's splits receivers. An empty list clears them.

        Raises:
            MissingArgumentError: If receivers is None
        """
        validate_splits_receivers(receivers)

        contract_call = self.contract.functions.setSplits(format_splits_receivers(receivers))
        return await self._send(contract_call, gas)

    async def emit_user_metadata(self, key: int | str, value: str, gas: GasOptions | None = None) -> HexBytes:
        """Emit a metadata entry for the wallet. `value` is sent as UTF-8 bytes."""
        validate_emit_user_metadata_input(key, value)

        contract_call = self.contract.functions.emitUserMetadata(
            validate_user_id(key, "key"),
            value.encode("utf-8"),
        )
        return await self._send(contract_call, gas)
