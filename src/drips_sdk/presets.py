"""
Ready-made call batches for `CallerClient.call_batched`.

Presets only validate and ABI-encode; they make no network calls.

Example:
    >>> calls = AddressDriverPresets.create_collect_flow(
    ...     CollectFlowPayload(
    ...         driver_address=caller.network.address_driver,
    ...         drips_hub_address=caller.network.drips_hub,
    ...         user_id=user_id,
    ...         token_address=token,
    ...         max_cycles=10,
    ...         current_receivers=[],
    ...         transfer_to_address=wallet,
    ...     )
    ... )
    >>> tx_hash = await caller.call_batched(calls)
"""

from hexbytes import HexBytes
from web3 import Web3

from ._exceptions import MissingArgumentError
from .abi import ADDRESS_DRIVER_ABI, DRIPS_HUB_ABI, NFT_DRIVER_ABI
from .receivers import format_drips_receivers, format_splits_receivers
from .types import CallStruct, CollectFlowPayload, NewStreamFlowPayload
from .validators import (
    validate_address,
    validate_collect_input,
    validate_emit_user_metadata_input,
    validate_receive_drips_input,
    validate_set_drips_input,
    validate_split_input,
    validate_token_id,
    validate_user_id,
)

# Unbound contracts, used for calldata encoding only
_w3 = Web3()
_hub = _w3.eth.contract(abi=DRIPS_HUB_ABI)
_address_driver = _w3.eth.contract(abi=ADDRESS_DRIVER_ABI)
_nft_driver = _w3.eth.contract(abi=NFT_DRIVER_ABI)


def _call(to: str, contract, fn_name: str, args: list) -> CallStruct:
    return CallStruct(
        to=Web3.to_checksum_address(to),
        data=HexBytes(contract.encode_abi(fn_name, args=args)),
    )


def _require_payload(payload, flow: str) -> None:
    if payload is None:
        raise MissingArgumentError("payload", f"Could not create {flow}: 'payload' is missing")


def _hub_calls(payload: CollectFlowPayload) -> list[CallStruct]:
    validate_address(payload.drips_hub_address, "drips_hub_address")
    validate_collect_input(payload.token_address, payload.transfer_to_address)
    validate_split_input(payload.user_id, payload.token_address, payload.current_receivers)
    validate_receive_drips_input(payload.user_id, payload.token_address, payload.max_cycles)

    user_id = validate_user_id(payload.user_id)
    token = Web3.to_checksum_address(payload.token_address)

    return [
        _call(payload.drips_hub_address, _hub, "receiveDrips", [user_id, token, payload.max_cycles]),
        _call(
            payload.drips_hub_address,
            _hub,
            "split",
            [user_id, token, format_splits_receivers(payload.current_receivers)],
        ),
    ]


def _set_drips_args(payload: NewStreamFlowPayload) -> list:
    return [
        Web3.to_checksum_address(payload.token_address),
        format_drips_receivers(payload.current_receivers),
        payload.balance_delta or 0,
        format_drips_receivers(payload.new_receivers),
        Web3.to_checksum_address(payload.transfer_to_address),
    ]


def _validate_new_stream(payload: NewStreamFlowPayload) -> None:
    validate_address(payload.driver_address, "driver_address")
    validate_set_drips_input(
        payload.token_address,
        payload.current_receivers,
        payload.new_receivers,
        payload.transfer_to_address,
        payload.balance_delta,
    )
    validate_emit_user_metadata_input(payload.key, payload.value)


class AddressDriverPresets:
    """Call batches acting through the AddressDriver (as the caller's wallet)."""

    @staticmethod
    def create_new_stream_flow(payload: NewStreamFlowPayload) -> list[CallStruct]:
        """
        Build `[setDrips, emitUserMetadata]`.

        Raises:
            MissingArgumentError: If payload or a required field is missing
            InvalidArgumentError: If a field is malformed
        """
        _require_payload(payload, "stream flow")
        _validate_new_stream(payload)

        return [
            _call(payload.driver_address, _address_driver, "setDrips", _set_drips_args(payload)),
            _call(
                payload.driver_address,
                _address_driver,
                "emitUserMetadata",
                [validate_user_id(payload.key, "key"), payload.value.encode("utf-8")],
            ),
        ]

    @staticmethod
    def create_collect_flow(payload: CollectFlowPayload) -> list[CallStruct]:
        """
        Build `[receiveDrips, split, collect]`.

        `user_id` must be the AddressDriver user ID of the wallet that will
        send the batch.
        """
        _require_payload(payload, "collect flow")
        validate_address(payload.driver_address, "driver_address")
        calls = _hub_calls(payload)

        calls.append(
            _call(
                payload.driver_address,
                _address_driver,
                "collect",
                [
                    Web3.to_checksum_address(payload.token_address),
                    Web3.to_checksum_address(payload.transfer_to_address),
                ],
            )
        )
        return calls


class NFTDriverPresets:
    """Call batches acting through the NFTDriver, on behalf of `payload.token_id`."""

    @staticmethod
    def create_new_stream_flow(payload: NewStreamFlowPayload) -> list[CallStruct]:
        """Build `[setDrips, emitUserMetadata]` for the token user."""
        _require_payload(payload, "stream flow")
        token_id = validate_token_id(payload.token_id)
        _validate_new_stream(payload)

        return [
            _call(payload.driver_address, _nft_driver, "setDrips", [token_id, *_set_drips_args(payload)]),
            _call(
                payload.driver_address,
                _nft_driver,
                "emitUserMetadata",
                [token_id, validate_user_id(payload.key, "key"), payload.value.encode("utf-8")],
            ),
        ]

    @staticmethod
    def create_collect_flow(payload: CollectFlowPayload) -> list[CallStruct]:
        """Build `[receiveDrips, split, collect]` for the token user."""
        _require_payload(payload, "collect flow")
        token_id = validate_token_id(payload.token_id)
        validate_address(payload.driver_address, "driver_address")
        calls = _hub_calls(payload)

        calls.append(
            _call(
                payload.driver_address,
                _nft_driver,
                "collect",
                [
                    token_id,
                    Web3.to_checksum_address(payload.token_address),
                    Web3.to_checksum_address(payload.transfer_to_address),
                ],
            )
        )
        return calls
