from __future__ import annotations

from typing import Any

from .geometry import parse_int


def decimal_to_rgb(color: int) -> str:
    """Decode a packed 24-bit ``0xRRGGBB`` integer into an ``rgb()`` string."""
    red = (color >> 16) & 255
    green = (color >> 8) & 255
    blue = color & 255
    return f"rgb({red},{green},{blue})"


def parse_color(color: Any, default_color: str) -> str:
    """Resolve a control color property.

    Args:
        color: Packed color value from the control properties, or None
        default_color: ``"r,g,b"`` triple used when the property is missing

    Returns:
        An ``rgb(r,g,b)`` string
    """
    if color is None:
        return f"rgb({default_color})"
    packed = parse_int(color)
    if packed != packed:
        packed = 0
    return decimal_to_rgb(int(packed))


__all__ = ["decimal_to_rgb", "parse_color"]
