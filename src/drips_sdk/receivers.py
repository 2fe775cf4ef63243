"""
Receiver list normalization.

DripsHub only accepts receiver lists sorted by user ID with no duplicates.
User IDs are decimal strings, so ordering is numeric: "9" sorts before "10".

Duplicate policy: when several receivers share a user ID, the one that
appears first in the caller's list is kept and the rest are dropped.
"""

from typing import TypeVar

from ._exceptions import InvalidArgumentError
from .types import DripsReceiver, SplitsReceiver

_R = TypeVar("_R", DripsReceiver, SplitsReceiver)


def user_id_to_int(user_id: int | str) -> int:
    """Parse a decimal-string (or int) user ID."""
    if isinstance(user_id, bool):
        raise InvalidArgumentError(f"Invalid user ID: {user_id!r}", "user_id", user_id)
    if isinstance(user_id, int):
        parsed = user_id
    elif isinstance(user_id, str) and user_id.isascii() and user_id.isdigit():
        parsed = int(user_id)
    else:
        raise InvalidArgumentError(f"Invalid user ID: {user_id!r}", "user_id", user_id)
    if parsed < 0:
        raise InvalidArgumentError(f"Invalid user ID: {user_id!r}", "user_id", user_id)
    return parsed


def _sort_and_dedup(receivers: list[_R]) -> list[_R]:
    # sorted() is stable, so among equal IDs the first-seen receiver comes first
    ordered = sorted(receivers, key=lambda r: user_id_to_int(r.user_id))

    result: list[_R] = []
    for receiver in ordered:
        if result and user_id_to_int(result[-1].user_id) == user_id_to_int(receiver.user_id):
            continue
        result.append(receiver)
    return result


def normalize_splits_receivers(receivers: list[SplitsReceiver]) -> list[SplitsReceiver]:
    """
    Sort splits receivers by user ID and drop duplicate user IDs.

    Example:
        >>> normalize_splits_receivers([
        ...     SplitsReceiver(user_id="2", weight=100),
        ...     SplitsReceiver(user_id="1", weight=1),
        ...     SplitsReceiver(user_id="1", weight=1),
        ... ])
        [SplitsReceiver(user_id='1', weight=1), SplitsReceiver(user_id='2', weight=100)]
    """
    return _sort_and_dedup(receivers)


def normalize_drips_receivers(receivers: list[DripsReceiver]) -> list[DripsReceiver]:
    """
    Sort drips receivers by user ID and drop duplicate user IDs.

    Only the user ID is compared, so two receivers for the same user with
    different configs collapse to the first one in the input list.
    The packed `config` is passed through untouched. An empty list stays
    empty (callers use it to clear all receivers).
    """
    return _sort_and_dedup(receivers)


def format_splits_receivers(receivers: list[SplitsReceiver]) -> list[tuple[int, int]]:
    """Normalize splits receivers into `(userId, weight)` contract tuples."""
    return [(user_id_to_int(r.user_id), r.weight) for r in normalize_splits_receivers(receivers)]


def format_drips_receivers(receivers: list[DripsReceiver]) -> list[tuple[int, int]]:
    """Normalize drips receivers into `(userId, config)` contract tuples."""
    return [(user_id_to_int(r.user_id), r.config) for r in normalize_drips_receivers(receivers)]
