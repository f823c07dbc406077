"""
simplestyle extraction and style deduplication.

simplestyle (https://github.com/mapbox/simplestyle-spec/tree/master/1.1.0)
stores styling hints as feature properties:

- Points (Point, MultiPoint): `marker-size`, `marker-symbol`, `marker-color`
  (plus the obsolete `marker-shape`, which is stripped but never read).
- Lines and polygons (LineString, MultiLineString, Polygon, MultiPolygon):
  `stroke`, `stroke-width`, `stroke-opacity`, `fill`, `fill-opacity`.

GeometryCollection features are never styled.

Identical style values share one `<Style>` per document. The registry that
remembers which styles were already written is created per conversion and
passed explicitly to `extract_style()`.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Set, Tuple

from tokml.core.color_mapper import hex_to_kml_color
from tokml.core.geometry import is_line, is_point, is_polygon
from tokml.core.xml_text import encode, tag, to_text

logger = logging.getLogger(__name__)

MARKER_BASE_URL = "https://api.tiles.mapbox.com/v3/marker/"

DEFAULT_MARKER_SIZE = "medium"
DEFAULT_MARKER_COLOR = "7e7e7e"
DEFAULT_LINE_COLOR = "ff555555"
DEFAULT_LINE_WIDTH = 2
DEFAULT_POLY_COLOR = "88555555"

MARKER_STYLE_KEYS: Tuple[str, ...] = ("marker-symbol", "marker-color", "marker-size")
MARKER_STRIPPED_KEYS: Tuple[str, ...] = ("marker-shape",) + MARKER_STYLE_KEYS

POLYGON_AND_LINE_STYLE_KEYS: Tuple[str, ...] = (
    "stroke",
    "stroke-width",
    "stroke-opacity",
    "fill",
    "fill-opacity",
)

# Short tags used to build readable style ids, e.g. "mcff0000mzsmall".
_ID_TAGS: Dict[str, str] = {
    "marker-symbol": "ms",
    "marker-color": "mc",
    "marker-size": "mz",
    "stroke": "s",
    "stroke-width": "sw",
    "stroke-opacity": "so",
    "fill": "f",
    "fill-opacity": "fo",
}

_ID_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_-]")

StyleSignature = Tuple[Tuple[str, str], ...]


def style_signature(properties: Mapping[str, Any], keys: Tuple[str, ...]) -> StyleSignature:
    """
    Build the dedup key for the style-relevant values of a feature.

    The signature lists `(key, json-value)` pairs for every non-null key in
    `keys`, always in the order of `keys`, so equal values give equal
    signatures regardless of property order.

    Example:
        >>> style_signature({"fill": "#f00", "stroke": "#000"}, POLYGON_AND_LINE_STYLE_KEYS)
        (('stroke', '"#000"'), ('fill', '"#f00"'))
    """
    return tuple(
        (key, json.dumps(properties[key], sort_keys=True))
        for key in keys
        if properties.get(key) is not None
    )


def readable_style_id(properties: Mapping[str, Any], keys: Tuple[str, ...]) -> str:
    """Human-readable id derived from the style values (not guaranteed unique)."""
    parts = []
    for key in keys:
        value = properties.get(key)
        if value is None:
            continue
        text = to_text(value).replace("#", "").replace(".", "")
        parts.append(_ID_TAGS[key] + _ID_UNSAFE_RE.sub("", text))
    return "".join(parts) or "style"


class StyleRegistry:
    """
    Styles already written during one conversion.

    Maps each signature to the id of its `<Style>` element. Entries are only
    ever added. Ids are unique within the registry: when two different
    signatures produce the same readable id, later ones get a numeric suffix.
    """

    def __init__(self) -> None:
        self._ids: Dict[StyleSignature, str] = {}
        self._taken: Set[str] = set()

    def __contains__(self, signature: object) -> bool:
        return signature in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def get(self, signature: StyleSignature) -> Optional[str]:
        return self._ids.get(signature)

    def register(self, signature: StyleSignature, preferred_id: str) -> str:
        """Record a new signature and return the id assigned to it."""
        existing = self._ids.get(signature)
        if existing is not None:
            return existing

        style_id = preferred_id
        n = 2
        while style_id in self._taken:
            style_id = f"{preferred_id}-{n}"
            n += 1

        self._ids[signature] = style_id
        self._taken.add(style_id)
        logger.debug(f"Registered style '{style_id}' for {signature}")
        return style_id


# region marker style


def has_marker_style(properties: Mapping[str, Any]) -> bool:
    return any(properties.get(key) for key in MARKER_STYLE_KEYS)


def icon_url(properties: Mapping[str, Any]) -> str:
    """
    Build the marker tile URL, e.g. `.../pin-l-bus+ff0000.png`.

    Size defaults to "medium" and color to 7e7e7e; only the first letter of
    the size is used.
    """
    size = to_text(properties.get("marker-size") or DEFAULT_MARKER_SIZE)
    symbol = properties.get("marker-symbol")
    symbol_part = "-" + to_text(symbol) if symbol else ""
    color = to_text(properties.get("marker-color") or DEFAULT_MARKER_COLOR).replace("#", "", 1)
    return f"{MARKER_BASE_URL}pin-{size[:1]}{symbol_part}+{color}.png"


def marker_style(properties: Mapping[str, Any], style_id: str) -> str:
    hot_spot = tag(
        "hotSpot",
        {"xunits": "fraction", "yunits": "fraction", "x": 0.5, "y": 0.5},
        "",
    )
    icon = tag("Icon", tag("href", encode(icon_url(properties))))
    return tag("Style", {"id": style_id}, tag("IconStyle", icon) + hot_spot)


# endregion

# region polygon and line style


def has_polygon_and_line_style(properties: Mapping[str, Any]) -> bool:
    return any(properties.get(key) for key in POLYGON_AND_LINE_STYLE_KEYS)


def polygon_and_line_style(properties: Mapping[str, Any], style_id: str) -> str:
    """
    Build a `<Style>` with a LineStyle and, when fill is set, a PolyStyle.

    Invalid or missing colors fall back to gray: opaque for the line, and
    semi-transparent (88) for the fill.
    """
    line_color = (
        hex_to_kml_color(properties.get("stroke"), properties.get("stroke-opacity"))
        or DEFAULT_LINE_COLOR
    )
    width = properties.get("stroke-width")
    if width is None:
        width = DEFAULT_LINE_WIDTH
    line_style = tag("LineStyle", tag("color", line_color) + tag("width", encode(width)))

    poly_style = ""
    if properties.get("fill") or properties.get("fill-opacity"):
        fill_color = (
            hex_to_kml_color(properties.get("fill"), properties.get("fill-opacity"))
            or DEFAULT_POLY_COLOR
        )
        poly_style = tag("PolyStyle", tag("color", fill_color))

    return tag("Style", {"id": style_id}, line_style + poly_style)


# endregion


@dataclass
class StyleResult:
    """
    Outcome of simplestyle extraction for one feature.

    - definition: `<Style>` markup to emit before the Placemark ("" if the
      style was already written or none applies)
    - reference: `<styleUrl>` markup for inside the Placemark ("" if no style)
    - properties: properties with consumed style keys removed (a copy; the
      caller's mapping is never modified)
    """

    definition: str = ""
    reference: str = ""
    properties: Dict[str, Any] = field(default_factory=dict)


def _without(properties: Mapping[str, Any], keys: Tuple[str, ...]) -> Dict[str, Any]:
    return {k: v for k, v in properties.items() if k not in keys}


def extract_style(
    geometry: Any, properties: Mapping[str, Any], registry: StyleRegistry
) -> StyleResult:
    """
    Apply simplestyle to one feature.

    Args:
        geometry: The feature's GeoJSON geometry
        properties: The feature's properties
        registry: Styles already written in this conversion (updated in place)

    Returns:
        StyleResult with the style definition, reference and remaining
        properties. When no style path applies the properties come back
        unchanged (as a copy).
    """
    if is_point(geometry) and has_marker_style(properties):
        keys = MARKER_STYLE_KEYS
        build = marker_style
        stripped = MARKER_STRIPPED_KEYS
    elif (is_polygon(geometry) or is_line(geometry)) and has_polygon_and_line_style(properties):
        keys = POLYGON_AND_LINE_STYLE_KEYS
        build = polygon_and_line_style
        stripped = POLYGON_AND_LINE_STYLE_KEYS
    else:
        return StyleResult(properties=dict(properties))

    signature = style_signature(properties, keys)
    definition = ""
    style_id = registry.get(signature)
    if style_id is None:
        style_id = registry.register(signature, readable_style_id(properties, keys))
        definition = build(properties, style_id)

    return StyleResult(
        definition=definition,
        reference=tag("styleUrl", encode("#" + style_id)),
        properties=_without(properties, stripped),
    )
