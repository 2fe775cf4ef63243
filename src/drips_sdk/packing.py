"""
Packing of drips receiver configs into a single uint256.

Layout, most to least significant bits:

    drip_id (32) | amount_per_sec (160) | start (32) | duration (32)

The layout is fixed by DripsHub; changing it breaks on-chain compatibility.
"""

from ._exceptions import InvalidArgumentError
from .constants import AMT_PER_SEC_BITS, DRIP_ID_BITS, DURATION_BITS, START_BITS
from .types import DripsReceiverConfig

DURATION_OFFSET = 0
START_OFFSET = DURATION_OFFSET + DURATION_BITS
AMT_PER_SEC_OFFSET = START_OFFSET + START_BITS
DRIP_ID_OFFSET = AMT_PER_SEC_OFFSET + AMT_PER_SEC_BITS
PACKED_BITS = DRIP_ID_OFFSET + DRIP_ID_BITS

# (field, bit width, offset)
_LAYOUT = (
    ("drip_id", DRIP_ID_BITS, DRIP_ID_OFFSET),
    ("amount_per_sec", AMT_PER_SEC_BITS, AMT_PER_SEC_OFFSET),
    ("start", START_BITS, START_OFFSET),
    ("duration", DURATION_BITS, DURATION_OFFSET),
)


def _mask(bits: int) -> int:
    return (1 << bits) - 1


def _check_width(name: str, value: object, bits: int) -> int:
    # bool is an int subclass but never a valid field value
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidArgumentError(f"'{name}' must be an integer, got {value!r}", name, value)
    if value < 0 or value > _mask(bits):
        raise InvalidArgumentError(
            f"'{name}' must fit in an unsigned {bits}-bit integer, got {value}",
            name,
            value,
        )
    return value


def to_packed(config: DripsReceiverConfig) -> int:
    """
    Pack a receiver config into its uint256 on-chain representation.

    Raises:
        InvalidArgumentError: If a field is negative or wider than its slot.

    Example:
        >>> config = DripsReceiverConfig(drip_id=1, amount_per_sec=2, duration=3, start=4)
        >>> to_packed(config) == (1 << 224) | (2 << 64) | (4 << 32) | 3
        True
    """
    packed = 0
    for name, bits, offset in _LAYOUT:
        packed |= _check_width(name, getattr(config, name), bits) << offset
    return packed


def from_packed(value: int) -> DripsReceiverConfig:
    """
    Unpack a uint256 receiver config.

    Raises:
        InvalidArgumentError: If the value is negative or wider than 256 bits.
    """
    _check_width("config", value, PACKED_BITS)
    fields = {name: (value >> offset) & _mask(bits) for name, bits, offset in _LAYOUT}
    return DripsReceiverConfig(**fields)
