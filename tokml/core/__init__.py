"""Core conversion modules for tokml."""

__all__ = [
    "xml_text",
    "color_mapper",
    "geometry",
    "styles",
    "writers",
    "config",
]
