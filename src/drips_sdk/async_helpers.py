"""Async helper functions for drips-sdk."""

import logging
import os
from typing import cast

from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress
from hexbytes import HexBytes
from web3 import AsyncWeb3
from web3.contract.async_contract import AsyncContractFunction

from ._exceptions import MissingArgumentError
from .abi import ERC20_ABI
from .types import GasOptions

logger = logging.getLogger(__name__)

# Type alias for transaction params
TxParams = dict[str, int | str]

# Default gas limits for operations
DEFAULT_GAS = 500_000
DEFAULT_GAS_APPROVE = 100_000
DEFAULT_GAS_BATCH = 1_500_000
DEFAULT_PRIORITY_FEE = 1_000_000_000  # 1 gwei

# Environment fallbacks
RPC_URL_ENV = "DRIPS_RPC_URL"
PRIVATE_KEY_ENV = "DRIPS_PRIVATE_KEY"
SUBGRAPH_URL_ENV = "DRIPS_SUBGRAPH_URL"


def _resolve(value: str | None, env_var: str, param: str) -> str:
    resolved = value or os.environ.get(env_var)
    if not resolved:
        raise MissingArgumentError(param, f"{param} required (or set {env_var})")
    return resolved


def resolve_rpc_url(rpc_url: str | None = None) -> str:
    """Return `rpc_url`, falling back to DRIPS_RPC_URL."""
    return _resolve(rpc_url, RPC_URL_ENV, "rpc_url")


def resolve_private_key(private_key: str | None = None) -> str:
    """Return `private_key`, falling back to DRIPS_PRIVATE_KEY."""
    return _resolve(private_key, PRIVATE_KEY_ENV, "private_key")


def resolve_subgraph_url(api_url: str | None = None) -> str:
    """Return `api_url`, falling back to DRIPS_SUBGRAPH_URL."""
    return _resolve(api_url, SUBGRAPH_URL_ENV, "api_url")


async def build_tx_params(
    w3: AsyncWeb3,
    sender: ChecksumAddress | str,
    chain_id: int,
    default_gas: int,
    gas_options: GasOptions | None = None,
    value: int = 0,
) -> TxParams:
    """
    Build transaction parameters with gas options.

    Handles:
    - Explicit gas limit override
    - EIP-1559 type 2 transactions when max_fee_per_gas is set
    - Fallback to legacy transactions otherwise

    Args:
        w3: AsyncWeb3 instance
        sender: Sender address
        chain_id: Chain ID
        default_gas: Default gas limit if not overridden
        gas_options: Optional gas configuration
        value: Wei to send along with the call

    Returns:
        Transaction parameters dict
    """
    nonce = await w3.eth.get_transaction_count(cast(ChecksumAddress, sender))

    tx_params: TxParams = {
        "from": sender,
        "nonce": nonce,
        "chainId": chain_id,
    }
    if value:
        tx_params["value"] = value

    opts = gas_options or GasOptions()

    tx_params["gas"] = opts.gas_limit if opts.gas_limit is not None else default_gas

    # EIP-1559 or legacy
    if opts.max_fee_per_gas is not None:
        tx_params["type"] = "0x2"
        tx_params["maxFeePerGas"] = opts.max_fee_per_gas
        tx_params["maxPriorityFeePerGas"] = (
            opts.max_priority_fee_per_gas if opts.max_priority_fee_per_gas is not None else DEFAULT_PRIORITY_FEE
        )

    return tx_params


async def send_transaction(
    w3: AsyncWeb3,
    account: LocalAccount,
    chain_id: int,
    contract_call: AsyncContractFunction,
    default_gas: int = DEFAULT_GAS,
    gas_options: GasOptions | None = None,
    value: int = 0,
) -> HexBytes:
    """
    Sign `contract_call` with `account` and broadcast it.

    Errors from the node (reverts, nonce or funding problems) propagate as
    raised by web3.

    Returns:
        The transaction hash
    """
    tx_params = await build_tx_params(
        w3,
        account.address,
        chain_id,
        default_gas,
        gas_options=gas_options,
        value=value,
    )
    logger.debug("Building %s with %s", contract_call.fn_name, tx_params)
    tx = await contract_call.build_transaction(tx_params)

    signed = account.sign_transaction(tx)
    tx_hash = await w3.eth.send_raw_transaction(signed.raw_transaction)

    logger.info("Submitted %s: %s", contract_call.fn_name, tx_hash.hex())
    return tx_hash


async def get_allowance(w3: AsyncWeb3, token_address: str, owner: str, spender: str) -> int:
    """Get the ERC-20 allowance `owner` has granted `spender`."""
    token = w3.eth.contract(address=AsyncWeb3.to_checksum_address(token_address), abi=ERC20_ABI)
    return await token.functions.allowance(
        AsyncWeb3.to_checksum_address(owner),
        AsyncWeb3.to_checksum_address(spender),
    ).call()


async def approve(
    w3: AsyncWeb3,
    account: LocalAccount,
    chain_id: int,
    token_address: str,
    spender: str,
    amount: int,
    gas_options: GasOptions | None = None,
) -> HexBytes:
    """Approve `spender` to transfer `amount` of `account`'s ERC-20 tokens."""
    token = w3.eth.contract(address=AsyncWeb3.to_checksum_address(token_address), abi=ERC20_ABI)
    contract_call = token.functions.approve(AsyncWeb3.to_checksum_address(spender), amount)
    return await send_transaction(w3, account, chain_id, contract_call, DEFAULT_GAS_APPROVE, gas_options)
