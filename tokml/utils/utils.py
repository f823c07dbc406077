"""
Utility functions for tokml: output file helpers and document statistics.
"""

from typing import Dict
from pathlib import Path


_SIZE_UNITS = ("KB", "MB", "GB")


def format_file_size(size_bytes: int) -> str:
    """Size of a written KML file for the summary line, e.g. "512 B" or "1.5 KB"."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    size = float(size_bytes)
    for unit in _SIZE_UNITS:
        size /= 1024
        if size < 1024:
            break
    return f"{size:.1f} {unit}"


def ensure_parent_dir(output_path: Path) -> Path:
    """
    Ensure the directory holding `output_path` exists.

    Returns:
        The resolved absolute output path
    """
    output_path = Path(output_path).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path


def kml_summary(kml: str) -> Dict[str, int]:
    """
    Count the top-level pieces of a generated KML string.

    Returns:
        {"placemarks": n, "styles": n, "bytes": n}
    """
    return {
        "placemarks": kml.count("<Placemark"),
        "styles": kml.count("<Style "),
        "bytes": len(kml.encode("utf-8")),
    }
