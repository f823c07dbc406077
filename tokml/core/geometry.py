"""
GeoJSON geometry to KML markup.

Each of the seven GeoJSON geometry types maps to one converter; multi-part
types and GeometryCollection reuse the single-part converters and wrap the
result in `<MultiGeometry>`. Unknown types convert to an empty string.

Coordinates are written exactly as they arrive: no rounding, no ring closing,
no winding-order changes.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from tokml.core.xml_text import encode, tag


class GeometryKind(str, Enum):
    POINT = "Point"
    LINE_STRING = "LineString"
    POLYGON = "Polygon"
    MULTI_POINT = "MultiPoint"
    MULTI_POLYGON = "MultiPolygon"
    MULTI_LINE_STRING = "MultiLineString"
    GEOMETRY_COLLECTION = "GeometryCollection"


POINT_KINDS = frozenset({GeometryKind.POINT, GeometryKind.MULTI_POINT})
LINE_KINDS = frozenset({GeometryKind.LINE_STRING, GeometryKind.MULTI_LINE_STRING})
POLYGON_KINDS = frozenset({GeometryKind.POLYGON, GeometryKind.MULTI_POLYGON})


def geometry_kind(geometry: Any) -> Optional[GeometryKind]:
    """Return the GeometryKind of a GeoJSON geometry dict, or None if unrecognized."""
    if not isinstance(geometry, Mapping):
        return None
    try:
        return GeometryKind(geometry.get("type"))
    except ValueError:
        return None


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _items(value: Any) -> Sequence[Any]:
    return value if _is_sequence(value) else ()


def is_valid_geometry(geometry: Any) -> bool:
    """
    Check that a geometry can be rendered.

    A geometry is valid when its type is recognized and, for
    GeometryCollection, every member is valid; other types need a coordinate
    list (an empty list is fine).
    """
    kind = geometry_kind(geometry)
    if kind is None:
        return False
    if kind is GeometryKind.GEOMETRY_COLLECTION:
        members = geometry.get("geometries")
        return _is_sequence(members) and all(is_valid_geometry(m) for m in members)
    return _is_sequence(geometry.get("coordinates"))


def is_point(geometry: Any) -> bool:
    return geometry_kind(geometry) in POINT_KINDS


def is_line(geometry: Any) -> bool:
    return geometry_kind(geometry) in LINE_KINDS


def is_polygon(geometry: Any) -> bool:
    return geometry_kind(geometry) in POLYGON_KINDS


# region coordinate formatting


def position(coords: Any) -> str:
    """Format one position as `x,y[,z]`."""
    return ",".join(encode(c) for c in _items(coords))


def linear_ring(coords: Any) -> str:
    """Format a sequence of positions, space separated."""
    return " ".join(position(c) for c in _items(coords))


def _boundary(name: str, ring: Any) -> str:
    return tag(name, tag("LinearRing", tag("coordinates", linear_ring(ring))))


# endregion


def point(coords: Any) -> str:
    return tag("Point", tag("coordinates", position(coords)))


def line_string(coords: Any) -> str:
    return tag("LineString", tag("coordinates", linear_ring(coords)))


def polygon(coords: Any) -> str:
    """First ring is the outer boundary; every later ring is its own inner boundary."""
    rings = _items(coords)
    if not rings:
        return ""
    outer = _boundary("outerBoundaryIs", rings[0])
    inner = "".join(_boundary("innerBoundaryIs", ring) for ring in rings[1:])
    return tag("Polygon", outer + inner)


def _multi(convert_part: Callable[[Any], str]) -> Callable[[Any], str]:
    def convert(coords: Any) -> str:
        parts = _items(coords)
        if not parts:
            return ""
        return tag("MultiGeometry", "".join(convert_part(p) for p in parts))

    return convert


multi_point = _multi(point)
multi_line_string = _multi(line_string)
multi_polygon = _multi(polygon)


def geometry_collection(geometry: Mapping[str, Any]) -> str:
    members = _items(geometry.get("geometries"))
    return tag("MultiGeometry", "".join(convert_geometry(m) for m in members))


_COORDINATE_CONVERTERS: Dict[GeometryKind, Callable[[Any], str]] = {
    GeometryKind.POINT: point,
    GeometryKind.LINE_STRING: line_string,
    GeometryKind.POLYGON: polygon,
    GeometryKind.MULTI_POINT: multi_point,
    GeometryKind.MULTI_LINE_STRING: multi_line_string,
    GeometryKind.MULTI_POLYGON: multi_polygon,
}


def convert_geometry(geometry: Any) -> str:
    """
    Convert a GeoJSON geometry dict to KML markup.

    Args:
        geometry: GeoJSON geometry object

    Returns:
        KML geometry markup, or "" for unknown types and empty multi-part or
        polygon coordinates

    Example:
        >>> convert_geometry({"type": "Point", "coordinates": [1, 2]})
        '<Point><coordinates>1,2</coordinates></Point>'
    """
    kind = geometry_kind(geometry)
    if kind is None:
        return ""
    if kind is GeometryKind.GEOMETRY_COLLECTION:
        return geometry_collection(geometry)
    return _COORDINATE_CONVERTERS[kind](geometry.get("coordinates"))
