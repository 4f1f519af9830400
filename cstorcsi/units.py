"""Parsing of human-readable sizes and durations, and the ping period."""

import re

KB = 1000
MB = 1000 * KB
GB = 1000 * MB
TB = 1000 * GB
PB = 1000 * TB

_DECIMAL_UNITS = {"k": KB, "m": MB, "g": GB, "t": TB, "p": PB}
_SIZE_RE = re.compile(r"([0-9]+(?:\.[0-9]+)*) ?([kKmMgGtTpP])?[iI]?[bB]?")

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

_DURATION_UNITS = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "\u00b5s": MICROSECOND,
    "\u03bcs": MICROSECOND,
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}
_MAX_MAGNITUDE = 1 << 63
_INT64_MAX = (1 << 63) - 1
_DIGITS_RE = re.compile(r"[0-9]*")
_UNIT_RE = re.compile(r"[^0-9.]*")

DEFAULT_PING_PERIOD = 24 * HOUR
MINIMUM_PING_PERIOD = 1 * HOUR
_DEFAULT_PING_PERIOD_TEXT = "24h0m0s"


def from_human_size(size: str) -> int:
    """Parse a size such as ``"10 GB"`` into bytes using decimal (1000) units."""
    match = _SIZE_RE.fullmatch(size)
    if match is None:
        raise ValueError(f"invalid size: '{size}'")
    try:
        value = float(match.group(1))
    except ValueError as exc:
        raise ValueError(f"invalid size: '{size}'") from exc
    prefix = (match.group(2) or "").lower()
    value *= _DECIMAL_UNITS.get(prefix, 1)
    try:
        return int(value)
    except OverflowError as exc:
        raise ValueError(f"invalid size: '{size}'") from exc


def to_giga_units(size: str) -> int:
    """Return the whole number of gigabytes (10**9 bytes) in a human size."""
    return from_human_size(size) // GB


def _leading_fraction(digits: str) -> tuple[int, float]:
    value, scale, overflow = 0, 1.0, False
    for char in digits:
        if overflow:
            continue
        if value > _INT64_MAX // 10:
            overflow = True
            continue
        candidate = value * 10 + int(char)
        if candidate > _MAX_MAGNITUDE:
            overflow = True
            continue
        value = candidate
        scale *= 10
    return value, scale


def parse_duration(text: str) -> int:
    """Parse a duration such as ``"1h30m"`` or ``"-1.5s"`` into nanoseconds."""

    def invalid(reason: str = "invalid duration") -> ValueError:
        return ValueError(f'time: {reason} "{text}"')

    rest = text
    negative = False
    if rest and rest[0] in "+-":
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return 0
    if not rest:
        raise invalid()

    total = 0
    while rest:
        if not (rest[0] == "." or rest[0].isascii() and rest[0].isdigit()):
            raise invalid()

        whole_digits = _DIGITS_RE.match(rest).group()
        rest = rest[len(whole_digits):]
        whole = int(whole_digits) if whole_digits else 0
        if whole > _MAX_MAGNITUDE:
            raise invalid()

        fraction, scale, has_fraction = 0, 1.0, False
        if rest.startswith("."):
            rest = rest[1:]
            fraction_digits = _DIGITS_RE.match(rest).group()
            rest = rest[len(fraction_digits):]
            fraction, scale = _leading_fraction(fraction_digits)
            has_fraction = bool(fraction_digits)
        if not whole_digits and not has_fraction:
            raise invalid()

        unit_text = _UNIT_RE.match(rest).group()
        if not unit_text:
            raise invalid("missing unit in duration")
        rest = rest[len(unit_text):]
        unit = _DURATION_UNITS.get(unit_text)
        if unit is None:
            raise invalid(f'unknown unit "{unit_text}" in duration')

        if whole > _MAX_MAGNITUDE // unit:
            raise invalid()
        value = whole * unit
        if fraction > 0:
            value += int(float(fraction) * (float(unit) / scale))
            if value > _MAX_MAGNITUDE:
                raise invalid()
        total += value
        if total > _MAX_MAGNITUDE:
            raise invalid()

    if negative:
        return -total
    if total > _INT64_MAX:
        raise invalid()
    return total


def get_ping_period(value: str | None = None) -> int:
    """Return the ping interval in nanoseconds for a configured value.

    ``None`` means nothing is configured. Values that fail to parse or are
    below one hour fall back to the 24 hour default.
    """
    if value is None:
        value = _DEFAULT_PING_PERIOD_TEXT
    try:
        duration = parse_duration(value)
    except ValueError:
        duration = 0
    if duration < MINIMUM_PING_PERIOD:
        return DEFAULT_PING_PERIOD
    return duration