"""
Text and element helpers for building KML markup as plain strings.

The converter assembles KML by concatenating element strings rather than
building an ElementTree, so every piece of user data must pass through
`encode()` before it lands between tags or inside an attribute value.
"""

from __future__ import annotations

import json
import re
from typing import Any, Mapping, Optional

_ESCAPE_MAP = {
    ">": "&gt;",
    "<": "&lt;",
    "'": "&apos;",
    '"': "&quot;",
    "&": "&amp;",
}

_ESCAPE_RE = re.compile(r"[&\"<>']")


def to_text(value: Any) -> str:
    """
    Stringify a scalar the way it reads in JSON.

    Example:
        >>> to_text(True)
        'true'
        >>> to_text(None)
        ''
        >>> to_text(1.5)
        '1.5'
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def encode(value: Any) -> str:
    """
    Escape the five XML special characters in `value`.

    Each character is replaced exactly once:

        >>> encode("&<>\\"'")
        '&amp;&lt;&gt;&quot;&apos;'
    """
    return _ESCAPE_RE.sub(lambda m: _ESCAPE_MAP[m.group(0)], to_text(value))


def attr(attributes: Optional[Mapping[str, Any]]) -> str:
    """Render an attribute map as ` key="value" ...` (leading space included)."""
    if not attributes:
        return ""
    return " " + " ".join(f'{key}="{encode(value)}"' for key, value in attributes.items())


def tag(name: str, *args: Any) -> str:
    """
    Serialize one element.

    Called either as `tag(name, contents)` or `tag(name, attributes, contents)`.
    Contents are inserted as-is, so callers escape text themselves. Missing
    contents produce an empty-bodied element, never a self-closing one.

    Example:
        >>> tag("name", "Trail")
        '<name>Trail</name>'
        >>> tag("Data", {"name": "a"}, "")
        '<Data name="a"></Data>'
    """
    attributes: Optional[Mapping[str, Any]] = None
    contents: Any = ""
    if len(args) == 1:
        if isinstance(args[0], Mapping):
            attributes = args[0]
        else:
            contents = args[0]
    elif len(args) >= 2:
        attributes, contents = args[0], args[1]

    body = "" if contents is None else to_text(contents)
    return f"<{name}{attr(attributes)}>{body}</{name}>"
