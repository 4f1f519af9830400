"""Byte-size rounding helpers for volume capacities."""

KIB = 1024
GIB = 1024 * 1024 * 1024

_UNIT = 1024
_PREFIXES = "KMGTPE"


def _trunc_divmod(dividend: int, divisor: int) -> tuple[int, int]:
    """Divide with truncation toward zero, remainder taking the dividend's sign."""
    quotient = abs(dividend) // abs(divisor)
    if (dividend < 0) != (divisor < 0):
        quotient = -quotient
    return quotient, dividend - quotient * divisor


def byte_count(b: int) -> str:
    """Format a byte count with a binary unit suffix, e.g. ``1Ki`` or ``3Gi``."""
    if b < 0:
        raise ValueError(f"byte count must not be negative: {b}")
    if b < _UNIT:
        return f"{b}B"
    div, index = _UNIT, 0
    value = b // _UNIT
    while value >= _UNIT:
        div *= _UNIT
        index += 1
        value //= _UNIT
    return f"{b // div}{_PREFIXES[index]}i"


def round_up_size(volume_size_bytes: int, allocation_unit_bytes: int) -> int:
    """Return how many allocation units are needed to hold the given size."""
    rounded_up, remainder = _trunc_divmod(volume_size_bytes, allocation_unit_bytes)
    if remainder > 0:
        rounded_up += 1
    return rounded_up


def round_up_bytes(volume_size_bytes: int) -> int:
    """Round a size in bytes up to a whole number of GiB, in bytes."""
    return round_up_size(volume_size_bytes, GIB) * GIB


def round_up_gib(volume_size_bytes: int) -> int:
    """Round a size in bytes up to a whole number of GiB, in GiB."""
    return round_up_size(volume_size_bytes, GIB)


def bytes_to_gib(volume_size_bytes: int) -> int:
    """Convert bytes to whole GiB, truncating."""
    return _trunc_divmod(volume_size_bytes, GIB)[0]


def gib_to_bytes(volume_size_gib: int) -> int:
    """Convert GiB to bytes."""
    return volume_size_gib * GIB