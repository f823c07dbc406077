"""
Color transformation from simplestyle hex values to KML colors.

simplestyle stores colors as CSS-like hex strings (`#RRGGBB` or `#RGB`) with a
separate opacity value. KML packs both into a single `aabbggrr` hex string:
alpha first, then the channels in reverse order.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Tuple

_HEX_DIGITS = frozenset("0123456789abcdef")

# Fully opaque alpha byte used when no usable opacity is supplied.
OPAQUE_ALPHA = "ff"


def parse_hex_color(hex_color: Any) -> Optional[Tuple[str, str, str]]:
    """
    Split a hex color into lowercase (r, g, b) byte strings.

    Accepts 3 or 6 hex digits with an optional leading '#'. Short form is
    expanded by doubling each digit.

    Returns:
        Tuple of 2-character hex strings, or None if the value is not a valid
        hex color.

    Example:
        >>> parse_hex_color("#F00")
        ('ff', '00', '00')
        >>> parse_hex_color("red") is None
        True
    """
    if not isinstance(hex_color, str):
        return None

    value = hex_color.lower()
    if value.startswith("#"):
        value = value[1:]

    if not value or any(c not in _HEX_DIGITS for c in value):
        return None

    if len(value) == 3:
        r, g, b = (c * 2 for c in value)
    elif len(value) == 6:
        r, g, b = value[0:2], value[2:4], value[4:6]
    else:
        return None

    return r, g, b


def opacity_to_alpha(opacity: Any) -> str:
    """
    Convert a 0..1 opacity to a 2-digit hex alpha byte.

    Anything that is not a number within [0, 1] yields fully opaque.

    Example:
        >>> opacity_to_alpha(0.5)
        '7f'
        >>> opacity_to_alpha("0.5")
        'ff'
    """
    if isinstance(opacity, bool) or not isinstance(opacity, (int, float)):
        return OPAQUE_ALPHA
    if not 0.0 <= opacity <= 1.0:
        return OPAQUE_ALPHA
    return f"{math.floor(opacity * 255):02x}"


def hex_to_kml_color(hex_color: Any, opacity: Any = None) -> str:
    """
    Convert a hex color and opacity into KML's `aabbggrr` encoding.

    Args:
        hex_color: Hex color string such as "#ff0000", "F00" or "00ff00"
        opacity: Number in [0, 1]; other values fall back to opaque

    Returns:
        8-character lowercase KML color, or "" when `hex_color` is invalid
        (callers supply their own fallback)

    Example:
        >>> hex_to_kml_color("#F00", 0.5)
        '7f0000ff'
        >>> hex_to_kml_color("zzz", 1)
        ''
    """
    rgb = parse_hex_color(hex_color)
    if rgb is None:
        return ""
    r, g, b = rgb
    return opacity_to_alpha(opacity) + b + g + r
