"""Async client for the NFTDriver contract."""

import logging

from eth_account import Account
from eth_account.signers.local import LocalAccount
from hexbytes import HexBytes
from web3 import AsyncWeb3

from ._exceptions import UnsupportedNetworkError
from .abi import NFT_DRIVER_ABI
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
    validate_token_id,
    validate_user_id,
)

logger = logging.getLogger(__name__)


class NFTDriverClient:
    """
    Client for the NFTDriver: Drips users identified by an NFT.

    Minting a token creates a new user; whoever holds (or is approved for)
    the token acts as that user. The token ID is the user ID.

    Example:
        >>> client = NFTDriverClient(rpc_url="https://goerli.example/rpc", private_key="0x...")
        >>> token_id = await client.mint(client.address)
        >>> await client.set_splits(token_id, [SplitsReceiver(user_id="1234", weight=1)])
    """

    def __init__(
        self,
        rpc_url: str | None = None,
        private_key: str | None = None,
        chain_id: int = DEFAULT_CHAIN_ID,
        driver_address: str | None = None,
    ) -> None:
        """
        Initialize the NFTDriver client.

        Args:
            rpc_url: RPC endpoint URL. Falls back to DRIPS_RPC_URL env var.
            private_key: Private key for signing. Falls back to DRIPS_PRIVATE_KEY env var.
            chain_id: Chain ID (5 for Goerli)
            driver_address: Custom NFTDriver address (uses default if not provided)

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

        self.driver_address = AsyncWeb3.to_checksum_address(driver_address or self.network.nft_driver)
        self.contract = self.w3.eth.contract(address=self.driver_address, abi=NFT_DRIVER_ABI)

        self.hub = DripsHubClient(chain_id=chain_id, w3=self.w3)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.w3.provider.disconnect()

    async def __aenter__(self) -> "NFTDriverClient":
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
        """Get the ERC-20 allowance the wallet has granted the NFTDriver."""
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
        """Approve the NFTDriver to spend the wallet's ERC-20 tokens (unlimited by default)."""
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

    async def _mint(self, fn_name: str, transfer_to_address: str, gas: GasOptions | None) -> str:
        validate_address(transfer_to_address, "transfer_to_address")

        contract_call = getattr(self.contract.functions, fn_name)(AsyncWeb3.to_checksum_address(transfer_to_address))
        tx_hash = await self._send(contract_call, gas)
        receipt = await self.w3.eth.wait_for_transaction_receipt(tx_hash)

        events = self.contract.events.Transfer().process_receipt(receipt)
        if not events:
            raise ValueError(f"No Transfer event in {fn_name} receipt {tx_hash.hex()}")

        token_id = str(events[0]["args"]["tokenId"])
        logger.info("Minted token %s to %s", token_id, transfer_to_address)
        return token_id

    async def mint(self, transfer_to_address: str, gas: GasOptions | None = None) -> str:
        """
        Mint a new token, i.e. a new Drips user, and transfer it.

        Waits for the transaction to be mined.

        Returns:
            The minted token ID as a decimal string

        Raises:
            MissingArgumentError: If transfer_to_address is None
            InvalidArgumentError: If transfer_to_address is not a valid address
        """
        return await self._mint("mint", transfer_to_address, gas)

    async def safe_mint(self, transfer_to_address: str, gas: GasOptions | None = None) -> str:
        """
        Like `mint`, but checks that a contract recipient accepts ERC-721 tokens.

        Returns:
            The minted token ID as a decimal string
        """
        return await self._mint("safeMint", transfer_to_address, gas)

    async def collect(
        self,
        token_id: int | str,
        token_address: str,
        transfer_to_address: str,
        gas: GasOptions | None = None,
    ) -> HexBytes:
        """Collect the token user's split funds and transfer them."""
        token = validate_token_id(token_id)
        validate_collect_input(token_address, transfer_to_address)

        contract_call = self.contract.functions.collect(
            token,
            AsyncWeb3.to_checksum_address(token_address),
            AsyncWeb3.to_checksum_address(transfer_to_address),
        )
        return await self._send(contract_call, gas)

    async def give(
        self,
        token_id: int | str,
        receiver_user_id: int | str,
        token_address: str,
        amount: int,
        gas: GasOptions | None = None,
    ) -> HexBytes:
        """Give `amount` of a token from the token user to another user."""
        token = validate_token_id(token_id)
        validate_give_input(receiver_user_id, token_address, amount)

        contract_call = self.contract.functions.give(
            token,
            validate_user_id(receiver_user_id, "receiver_user_id"),
            AsyncWeb3.to_checksum_address(token_address),
            amount,
        )
        return await self._send(contract_call, gas)

    async def set_drips(
        self,
        token_id: int | str,
        token_address: str,
        current_receivers: list[DripsReceiver],
        new_receivers: list[DripsReceiver],
        transfer_to_address: str,
        balance_delta: int | None = 0,
        gas: GasOptions | None = None,
    ) -> HexBytes:
        """
        Replace the token user's drips receivers and top up or withdraw its balance.

        Args:
            token_id: The NFT identifying the user
            token_address: ERC-20 token being streamed
            current_receivers: Receivers currently set
            new_receivers: Receivers to set; an empty list stops all drips
            transfer_to_address: Address receiving withdrawn funds
            balance_delta: Amount to add (positive) or withdraw (negative); None means 0
            gas: Gas options

        Returns:
            Transaction hash
        """
        token = validate_token_id(token_id)
        validate_set_drips_input(token_address, current_receivers, new_receivers, transfer_to_address, balance_delta)

        contract_call = self.contract.functions.setDrips(
            token,
            AsyncWeb3.to_checksum_address(token_address),
            format_drips_receivers(current_receivers),
            balance_delta or 0,
            format_drips_receivers(new_receivers),
            AsyncWeb3.to_checksum_address(transfer_to_address),
        )
        return await self._send(contract_call, gas)

    async def set_splits(
        self,
        token_id: int | str,
        receivers: list[SplitsReceiver],
        gas: GasOptions | None = None,
    ) -> HexBytes:
        """Set the token user's splits receivers. An empty list clears them."""
        token = validate_token_id(token_id)
        validate_splits_receivers(receivers)

        contract_call = self.contract.functions.setSplits(token, format_splits_receivers(receivers))
        return await self._send(contract_call, gas)

    async def emit_user_metadata(
        self,
        token_id: int | str,
        key: int | str,
        value: str,
        gas: GasOptions | None = None,
    ) -> HexBytes:
        """Emit a metadata entry for the token user. `value` is sent as UTF-8 bytes."""
        token = validate_token_id(token_id)
        validate_emit_user_metadata_input(key, value)

        contract_call = self.contract.functions.emitUserMetadata(
            token,
            validate_user_id(key, "key"),
            value.encode("utf-8"),
        )
        return await self._send(contract_call, gas)
