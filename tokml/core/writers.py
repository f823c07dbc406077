"""
KML document writer.

Turns a parsed GeoJSON object (FeatureCollection, Feature or bare geometry)
into a KML 2.2 document string. Features that cannot be rendered are skipped
silently; the writer never raises for bad data.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from tokml.core.config import ConvertOptions, resolve_options
from tokml.core.geometry import convert_geometry, is_valid_geometry
from tokml.core.styles import StyleRegistry, extract_style
from tokml.core.xml_text import encode, tag, to_text

logger = logging.getLogger(__name__)

KML_NAMESPACE = "http://www.opengis.net/kml/2.2"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def _property_element(
    element: str, properties: Mapping[str, Any], key: Optional[str]
) -> str:
    if not key:
        return ""
    value = properties.get(key)
    return tag(element, encode(value)) if value else ""


def name(properties: Mapping[str, Any], options: ConvertOptions) -> str:
    return _property_element("name", properties, options.name)


def description(properties: Mapping[str, Any], options: ConvertOptions) -> str:
    return _property_element("description", properties, options.description)


def timestamp(properties: Mapping[str, Any], options: ConvertOptions) -> str:
    if not options.timestamp:
        return ""
    value = properties.get(options.timestamp)
    return tag("TimeStamp", tag("when", encode(value))) if value else ""


def extended_data(properties: Mapping[str, Any]) -> str:
    """One `<Data>` per property, in the order the properties arrive."""
    return tag(
        "ExtendedData",
        "".join(
            tag("Data", {"name": key}, tag("value", encode(value)))
            for key, value in properties.items()
        ),
    )


def placemark(
    feature: Mapping[str, Any], options: ConvertOptions, registry: StyleRegistry
) -> str:
    """
    Convert one GeoJSON Feature to a Placemark.

    Args:
        feature: GeoJSON Feature dict
        options: Resolved conversion options
        registry: Styles already written in this document

    Returns:
        Optional `<Style>` followed by the `<Placemark>`, or "" when the
        feature has no properties mapping, an invalid geometry, or a geometry
        that converts to nothing
    """
    if not isinstance(feature, Mapping):
        return ""

    properties = feature.get("properties")
    geometry = feature.get("geometry")
    if not isinstance(properties, Mapping) or not is_valid_geometry(geometry):
        logger.debug(f"Skipping feature {feature.get('id')!r}: missing properties or invalid geometry")
        return ""

    geometry_markup = convert_geometry(geometry)
    if not geometry_markup:
        logger.debug(f"Skipping feature {feature.get('id')!r}: empty geometry")
        return ""

    style_definition = ""
    style_reference = ""
    if options.simplestyle:
        style = extract_style(geometry, properties, registry)
        style_definition = style.definition
        style_reference = style.reference
        properties = style.properties

    attributes: Dict[str, str] = {}
    feature_id = feature.get("id")
    if feature_id:
        attributes["id"] = to_text(feature_id)

    return style_definition + tag(
        "Placemark",
        attributes,
        name(properties, options)
        + description(properties, options)
        + extended_data(properties)
        + timestamp(properties, options)
        + geometry_markup
        + style_reference,
    )


def document_body(geojson: Any, options: ConvertOptions) -> str:
    """
    Convert the root GeoJSON object to the concatenated Placemark markup.

    A fresh StyleRegistry is created per call so styles are deduplicated
    within one document only.
    """
    if not isinstance(geojson, Mapping) or not geojson.get("type"):
        logger.debug("GeoJSON root has no type; writing an empty document")
        return ""

    registry = StyleRegistry()
    root_type = geojson.get("type")

    if root_type == "FeatureCollection":
        features = geojson.get("features")
        if not isinstance(features, list):
            return ""
        return "".join(placemark(f, options, registry) for f in features)

    if root_type == "Feature":
        return placemark(geojson, options, registry)

    # Bare geometry: treat as an anonymous feature without properties.
    return placemark(
        {"type": "Feature", "geometry": geojson, "properties": {}}, options, registry
    )


def document_name(options: ConvertOptions) -> str:
    if options.document_name is None:
        return ""
    return tag("name", encode(options.document_name))


def document_description(options: ConvertOptions) -> str:
    if options.document_description is None:
        return ""
    return tag("description", encode(options.document_description))


def tokml(
    geojson: Any,
    options: Union[ConvertOptions, Mapping[str, Any], None] = None,
) -> str:
    """
    Convert a GeoJSON object into a KML document string.

    Args:
        geojson: Parsed GeoJSON (FeatureCollection, Feature or geometry)
        options: ConvertOptions or a mapping of overrides such as
            {"documentName": "My KML", "name": "title", "simplestyle": True}

    Returns:
        The complete KML document, starting with the XML declaration

    Example:
        >>> tokml({"type": "Point", "coordinates": [0, 0]})[:38]
        '<?xml version="1.0" encoding="UTF-8"?>'
    """
    resolved = resolve_options(options)
    body = (
        document_name(resolved)
        + document_description(resolved)
        + document_body(geojson, resolved)
    )
    return XML_DECLARATION + tag("kml", {"xmlns": KML_NAMESPACE}, tag("Document", body))
