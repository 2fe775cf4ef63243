"""
Input validation for drips-sdk operations.

Every public operation validates its arguments with these helpers before
any RPC or subgraph call is made, so a bad argument never results in a
partially submitted request.
"""

from typing import Any

from web3 import Web3

from ._exceptions import InvalidArgumentError, MissingArgumentError
from .constants import (
    MAX_DRIPS_RECEIVERS,
    MAX_SPLITS_RECEIVERS,
    MAX_UINT32,
    MAX_UINT128,
    MAX_UINT256,
    TOTAL_SPLITS_WEIGHT,
)
from .packing import from_packed
from .receivers import normalize_drips_receivers, normalize_splits_receivers, user_id_to_int
from .types import DripsReceiver, SplitsReceiver

MIN_INT128 = -(1 << 127)
MAX_INT128 = (1 << 127) - 1


def _require(value: Any, param: str) -> None:
    if value is None:
        raise MissingArgumentError(param)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_address(address: Any, param: str = "address") -> None:
    """Check that `address` is a well-formed EVM address."""
    _require(address, param)
    if not isinstance(address, str) or not Web3.is_address(address):
        raise InvalidArgumentError(f"'{param}' is not a valid address: {address!r}", param, address)


def validate_user_id(user_id: Any, param: str = "user_id") -> int:
    """Check a user ID (int or decimal string) and return it as an int."""
    _require(user_id, param)
    try:
        parsed = user_id_to_int(user_id)
    except InvalidArgumentError:
        raise InvalidArgumentError(
            f"'{param}' must be a non-negative integer or decimal string, got {user_id!r}",
            param,
            user_id,
        ) from None
    if parsed > MAX_UINT256:
        raise InvalidArgumentError(f"'{param}' does not fit in uint256: {user_id!r}", param, user_id)
    return parsed


def validate_token_id(token_id: Any) -> int:
    """Check an NFT driver token ID and return it as an int."""
    return validate_user_id(token_id, "token_id")


def validate_amount(amount: Any, param: str = "amount", max_value: int = MAX_UINT128) -> None:
    """Check that `amount` is positive and at most `max_value` (uint128 by default)."""
    _require(amount, param)
    if not _is_int(amount) or amount <= 0 or amount > max_value:
        raise InvalidArgumentError(
            f"'{param}' must be positive and at most {max_value}, got {amount!r}",
            param,
            amount,
        )


def validate_approve_amount(amount: Any) -> None:
    """ERC-20 allowances are uint256."""
    validate_amount(amount, max_value=MAX_UINT256)


def validate_drips_receivers(receivers: Any, param: str = "receivers") -> None:
    """
    Check a drips receivers list.

    Raises:
        MissingArgumentError: If `receivers` is None (an empty list is valid).
        InvalidArgumentError: If the list is too long, or a receiver has an
            invalid user ID or packed config.
    """
    _require(receivers, param)
    if not isinstance(receivers, list):
        raise InvalidArgumentError(f"'{param}' must be a list, got {type(receivers).__name__}", param, receivers)

    for receiver in receivers:
        if not isinstance(receiver, DripsReceiver):
            raise InvalidArgumentError(f"'{param}' contains a non-DripsReceiver: {receiver!r}", param, receiver)
        validate_user_id(receiver.user_id)
        config = from_packed(receiver.config)
        if config.amount_per_sec <= 0:
            raise InvalidArgumentError(
                f"Drips receiver {receiver.user_id} has a non-positive amount_per_sec",
                "amount_per_sec",
                config.amount_per_sec,
            )

    # duplicates are dropped on submission
    distinct = normalize_drips_receivers(receivers)
    if len(distinct) > MAX_DRIPS_RECEIVERS:
        raise InvalidArgumentError(
            f"'{param}': at most {MAX_DRIPS_RECEIVERS} drips receivers allowed, got {len(distinct)}",
            param,
            len(distinct),
        )


def validate_splits_receivers(receivers: Any, param: str = "receivers") -> None:
    """
    Check a splits receivers list.

    Raises:
        MissingArgumentError: If `receivers` is None (an empty list is valid).
        InvalidArgumentError: If the list is too long, a weight is not
            positive, or the weights sum past TOTAL_SPLITS_WEIGHT.
    """
    _require(receivers, param)
    if not isinstance(receivers, list):
        raise InvalidArgumentError(f"'{param}' must be a list, got {type(receivers).__name__}", param, receivers)

    for receiver in receivers:
        if not isinstance(receiver, SplitsReceiver):
            raise InvalidArgumentError(f"'{param}' contains a non-SplitsReceiver: {receiver!r}", param, receiver)
        validate_user_id(receiver.user_id)
        if receiver.weight <= 0:
            raise InvalidArgumentError(
                f"Splits receiver {receiver.user_id} has a non-positive weight: {receiver.weight}",
                "weight",
                receiver.weight,
            )

    distinct = normalize_splits_receivers(receivers)
    if len(distinct) > MAX_SPLITS_RECEIVERS:
        raise InvalidArgumentError(
            f"'{param}': at most {MAX_SPLITS_RECEIVERS} splits receivers allowed, got {len(distinct)}",
            param,
            len(distinct),
        )

    total_weight = sum(r.weight for r in distinct)
    if total_weight > TOTAL_SPLITS_WEIGHT:
        raise InvalidArgumentError(
            f"Splits weights sum to {total_weight}, max is {TOTAL_SPLITS_WEIGHT}",
            "weight",
            total_weight,
        )


def validate_uint32(value: Any, param: str) -> None:
    _require(value, param)
    if not _is_int(value) or not 0 <= value <= MAX_UINT32:
        raise InvalidArgumentError(f"'{param}' must be a uint32, got {value!r}", param, value)


def validate_max_cycles(max_cycles: Any) -> None:
    validate_uint32(max_cycles, "max_cycles")


def validate_collect_input(token_address: Any, transfer_to_address: Any) -> None:
    validate_address(token_address, "token_address")
    validate_address(transfer_to_address, "transfer_to_address")


def validate_give_input(receiver_user_id: Any, token_address: Any, amount: Any) -> None:
    validate_user_id(receiver_user_id, "receiver_user_id")
    validate_address(token_address, "token_address")
    validate_amount(amount)


def validate_set_drips_input(
    token_address: Any,
    current_receivers: Any,
    new_receivers: Any,
    transfer_to_address: Any,
    balance_delta: Any = None,
) -> None:
    """Check the arguments of a `setDrips` call. `balance_delta` may be None (means 0)."""
    validate_address(token_address, "token_address")
    validate_drips_receivers(current_receivers, "current_receivers")
    validate_drips_receivers(new_receivers, "new_receivers")
    validate_address(transfer_to_address, "transfer_to_address")
    if balance_delta is not None and (not _is_int(balance_delta) or not MIN_INT128 <= balance_delta <= MAX_INT128):
        raise InvalidArgumentError(
            f"'balance_delta' must be an int128, got {balance_delta!r}",
            "balance_delta",
            balance_delta,
        )


def validate_emit_user_metadata_input(key: Any, value: Any) -> None:
    validate_user_id(key, "key")
    _require(value, "value")
    if not isinstance(value, str):
        raise InvalidArgumentError(f"'value' must be a string, got {type(value).__name__}", "value", value)


def validate_split_input(user_id: Any, token_address: Any, current_receivers: Any) -> None:
    validate_user_id(user_id)
    validate_address(token_address, "token_address")
    validate_splits_receivers(current_receivers, "current_receivers")


def validate_receive_drips_input(user_id: Any, token_address: Any, max_cycles: Any) -> None:
    validate_user_id(user_id)
    validate_address(token_address, "token_address")
    validate_max_cycles(max_cycles)
