from __future__ import annotations

import math
import re
from typing import Any, NamedTuple

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")

NAN = float("nan")


class Offset(NamedTuple):
    x: float = 0
    y: float = 0

    def shifted(self, dx: float, dy: float) -> "Offset":
        return Offset(self.x + dx, self.y + dy)


ORIGIN = Offset(0, 0)


def parse_int(value: Any) -> float:
    """Parse a geometry value the way wireframe documents encode them.

    Documents store geometry as decimal strings. Only the leading integer
    part is significant (``"12.7"`` -> 12). Anything without leading digits,
    including ``None``, yields NaN, which is then carried through arithmetic
    untouched.
    """
    if value is None or isinstance(value, bool):
        return NAN
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value):
            return math.trunc(value)
        return NAN
    match = _INT_PREFIX.match(str(value))
    if match is None:
        return NAN
    return int(match.group(1))


def parse_number(value: Any, default: float = 0.0) -> float:
    """Full numeric conversion used for sort keys and bezier factors."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return value
    try:
        return float(str(value).strip())
    except ValueError:
        return default


def format_number(value: float) -> str:
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    return repr(value)


__all__ = ["NAN", "ORIGIN", "Offset", "format_number", "parse_int", "parse_number"]
