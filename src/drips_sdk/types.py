"""Type definitions for drips-sdk."""

from pydantic import BaseModel, Field


class DripsReceiverConfig(BaseModel):
    """
    Streaming parameters of a drips receiver.

    Field widths (drip_id: 32, amount_per_sec: 160, duration: 32, start: 32
    bits) are checked when the config is packed, not here.

    Example:
        DripsReceiverConfig(drip_id=1, amount_per_sec=10**9, duration=0, start=0)
    """

    drip_id: int
    amount_per_sec: int
    duration: int
    start: int

    model_config = {"frozen": True}


class DripsReceiver(BaseModel):
    """
    On-chain drips receiver.

    `config` is the packed uint256 produced by `to_packed()`.
    """

    user_id: str
    config: int

    model_config = {"frozen": True, "coerce_numbers_to_str": True}


class SplitsReceiver(BaseModel):
    """On-chain splits receiver. `weight` is out of TOTAL_SPLITS_WEIGHT."""

    user_id: str
    weight: int

    model_config = {"frozen": True, "coerce_numbers_to_str": True}


class DripsState(BaseModel):
    """A user's drips state for one ERC-20 token, as stored by DripsHub."""

    drips_hash: bytes
    update_time: int
    balance: int
    max_end: int

    model_config = {"frozen": True}


class SplitResult(BaseModel):
    """Outcome of splitting an amount among a user's splits receivers."""

    collectable_amt: int
    split_amt: int

    model_config = {"frozen": True}


class CollectableAllResult(BaseModel):
    """Funds a user would collect after receiving all drips and splitting."""

    collected_amt: int
    split_amt: int

    model_config = {"frozen": True}


class CallStruct(BaseModel):
    """A single call in a `Caller.callBatched` batch."""

    to: str
    data: bytes
    value: int = 0

    model_config = {"frozen": True}


class GasOptions(BaseModel):
    """
    Gas configuration for transactions.

    By default, uses fixed gas limits and lets the RPC set gas prices.

    Example:
        GasOptions(gas_limit=500_000)
        GasOptions(max_fee_per_gas=50_000_000_000)  # 50 gwei max fee
    """

    gas_limit: int | None = None
    """Override gas limit. If None, uses the operation's default."""

    max_fee_per_gas: int | None = None
    """EIP-1559 max fee per gas in wei. If set, uses type 2 transactions."""

    max_priority_fee_per_gas: int | None = None
    """EIP-1559 priority fee per gas in wei. Defaults to 1 gwei if max_fee is set."""

    model_config = {"frozen": True}


class NetworkConfig(BaseModel):
    """Deployed contract addresses and subgraph endpoint for one chain."""

    chain_id: int
    name: str
    drips_hub: str
    address_driver: str
    nft_driver: str
    caller: str
    subgraph_url: str

    model_config = {"frozen": True}


# Subgraph entities. The subgraph serializes BigInt fields as strings.


class DripsEntry(BaseModel):
    id: str
    user_id: str = Field(alias="userId")
    config: int

    model_config = {"frozen": True, "populate_by_name": True}


class UserAssetConfig(BaseModel):
    """A user's drips configuration for a single asset (ERC-20 token)."""

    id: str
    asset_id: str = Field(alias="assetId")
    drips_entries: list[DripsEntry] = Field(default_factory=list, alias="dripsEntries")
    balance: int
    amount_collected: int = Field(alias="amountCollected")
    last_updated_block_timestamp: int = Field(alias="lastUpdatedBlockTimestamp")

    model_config = {"frozen": True, "populate_by_name": True}


class SplitEntry(BaseModel):
    id: str
    user_id: str = Field(alias="userId")
    weight: int

    model_config = {"frozen": True, "populate_by_name": True}


# Batched-call preset payloads. Fields are optional here so that missing
# values are reported by the validators as MissingArgumentError.


class NewStreamFlowPayload(BaseModel):
    """Input of `create_new_stream_flow` (setDrips + emitUserMetadata)."""

    driver_address: str | None = None
    token_id: int | str | None = None
    token_address: str | None = None
    current_receivers: list[DripsReceiver] | None = None
    new_receivers: list[DripsReceiver] | None = None
    balance_delta: int | None = None
    transfer_to_address: str | None = None
    key: int | str | None = None
    value: str | None = None

    model_config = {"frozen": True}


class CollectFlowPayload(BaseModel):
    """Input of `create_collect_flow` (receiveDrips + split + collect)."""

    driver_address: str | None = None
    drips_hub_address: str | None = None
    token_id: int | str | None = None
    user_id: int | str | None = None
    token_address: str | None = None
    max_cycles: int | None = None
    current_receivers: list[SplitsReceiver] | None = None
    transfer_to_address: str | None = None

    model_config = {"frozen": True}
