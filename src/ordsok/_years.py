"""Year parsing, year-bin labels and percentage arithmetic."""

from __future__ import annotations

import math
import re

UNKNOWN_YEAR_BIN = "Unknown"

# Sort position of unusable years: below any real year.
MISSING_YEAR = -math.inf

_YEAR_RE = re.compile(r"^\s*(-?\d+)(?:\.0*)?\s*$")
_BIN_START_RE = re.compile(r"^(-?\d+)")


def parse_year(value: object) -> int | None:
    """Return ``value`` as an integer year, or None if it is not one.

    Accepts ints, integral floats and numeric strings ("1994", " 1994 ",
    "1994.0"). Booleans, NaN and anything else are not years.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return None
    if isinstance(value, str):
        m = _YEAR_RE.match(value)
        if m:
            return int(m.group(1))
    return None


def coerce_bin_size(value: object) -> int:
    """Positive integer bin size; anything else falls back to 1."""
    if isinstance(value, bool):
        return 1
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and value > 0:
        return value
    return 1


def year_bin(year: object, size: int = 1) -> str:
    """Bin label for ``year``: "1994" for size 1, "1990-1999" for size 10."""
    y = parse_year(year)
    if y is None:
        return UNKNOWN_YEAR_BIN
    size = coerce_bin_size(size)
    if size == 1:
        return str(y)
    start = y - (y % size)
    return f"{start}-{start + size - 1}"


def bin_start(label: str) -> float:
    """First year covered by a bin label, MISSING_YEAR for the Unknown bin."""
    if label == UNKNOWN_YEAR_BIN:
        return MISSING_YEAR
    m = _BIN_START_RE.match(label)
    return int(m.group(1)) if m else MISSING_YEAR


def percent(count: float, denominator: float) -> float:
    """``100 * count / denominator``, 0 when the denominator is zero."""
    if not denominator:
        return 0.0
    return 100.0 * count / denominator
