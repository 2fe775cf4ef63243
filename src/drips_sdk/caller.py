"""Async client for the Caller contract (batched calls)."""

import logging

from eth_account import Account
from eth_account.signers.local import LocalAccount
from hexbytes import HexBytes
from web3 import AsyncWeb3

from ._exceptions import InvalidArgumentError, MissingArgumentError, UnsupportedNetworkError
from .abi import CALLER_ABI
from .async_helpers import DEFAULT_GAS_BATCH, resolve_private_key, resolve_rpc_url, send_transaction
from .constants import DEFAULT_CHAIN_ID, get_network_config, is_supported_chain
from .types import CallStruct, GasOptions
from .validators import validate_address

logger = logging.getLogger(__name__)


class CallerClient:
    """
    Client for the Caller contract, which runs a list of calls in one transaction.

    Build the call list by hand or with a preset:

        >>> calls = AddressDriverPresets.create_new_stream_flow(payload)
        >>> tx_hash = await caller.call_batched(calls)
    """

    def __init__(
        self,
        rpc_url: str | None = None,
        private_key: str | None = None,
        chain_id: int = DEFAULT_CHAIN_ID,
        caller_address: str | None = None,
    ) -> None:
        resolved_rpc = resolve_rpc_url(rpc_url)
        resolved_key = resolve_private_key(private_key)

        if not is_supported_chain(chain_id):
            raise UnsupportedNetworkError(chain_id)

        self.w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(resolved_rpc))
        self.account: LocalAccount = Account.from_key(resolved_key)
        self.chain_id = chain_id
        self.network = get_network_config(chain_id)

        self.caller_address = AsyncWeb3.to_checksum_address(caller_address or self.network.caller)
        self.contract = self.w3.eth.contract(address=self.caller_address, abi=CALLER_ABI)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.w3.provider.disconnect()

    async def __aenter__(self) -> "CallerClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def call_batched(self, calls: list[CallStruct], gas: GasOptions | None = None) -> HexBytes:
        """
        Execute `calls` in order, as the wallet, in a single transaction.

        The transaction's value is the sum of the calls' values.

        Raises:
            MissingArgumentError: If calls is None
            InvalidArgumentError: If calls is empty or contains an invalid call
        """
        if calls is None:
            raise MissingArgumentError("calls")
        if not isinstance(calls, list) or not calls:
            raise InvalidArgumentError("'calls' must be a non-empty list", "calls", calls)

        for call in calls:
            if not isinstance(call, CallStruct):
                raise InvalidArgumentError(f"'calls' contains a non-CallStruct: {call!r}", "calls", call)
            validate_address(call.to, "to")
            if call.value < 0:
                raise InvalidArgumentError(f"Call value must be non-negative, got {call.value}", "value", call.value)

        total_value = sum(call.value for call in calls)
        logger.debug("callBatched: %d calls, value %d", len(calls), total_value)

        contract_call = self.contract.functions.callBatched(
            [(AsyncWeb3.to_checksum_address(call.to), call.data, call.value) for call in calls]
        )
        return await send_transaction(
            self.w3,
            self.account,
            self.chain_id,
            contract_call,
            DEFAULT_GAS_BATCH,
            gas_options=gas,
            value=total_value,
        )
