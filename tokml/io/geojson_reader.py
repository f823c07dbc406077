"""
GeoJSON input adapter.

Reads JSON text from a file or standard input and hands the parsed object to
the converter. Unlike the converter, this layer fails loudly: a missing file
or malformed JSON is an error for the caller to report.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Optional, TextIO, Union

STDIN_MARKER = "-"


def parse_geojson_text(text: str, source: str = "<input>") -> Any:
    """
    Parse GeoJSON text.

    Raises:
        ValueError: If the text is not valid JSON
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {source}: {e}")


def read_geojson(
    input_file: Union[Path, str, None] = None, *, stdin: Optional[TextIO] = None
) -> Any:
    """
    Read and parse GeoJSON from a path, or from stdin when the path is
    None or "-".

    Args:
        input_file: Path to a .geojson/.json file
        stdin: Stream to read instead of sys.stdin

    Returns:
        The parsed JSON value

    Raises:
        FileNotFoundError: If the path does not exist
        ValueError: If the content is not valid JSON
    """
    if input_file is None or str(input_file) == STDIN_MARKER:
        stream = stdin or sys.stdin
        return parse_geojson_text(stream.read(), "<stdin>")

    path = Path(input_file)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    return parse_geojson_text(path.read_text(encoding="utf-8"), path.name)
