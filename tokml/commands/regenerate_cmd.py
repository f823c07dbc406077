"""
Regenerate KML fixtures from GeoJSON fixtures.

Each `<name>.geojson` in a directory is converted to `<name>.kml`. Options
come from `<name>.options.json` when present; otherwise files named
`simplestyle_*` are converted with simplestyle enabled.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from tokml.core.writers import tokml
from tokml.io.geojson_reader import read_geojson

console = Console()

SIMPLESTYLE_PREFIX = "simplestyle_"


def fixture_options(geojson_path: Path) -> Optional[Dict[str, Any]]:
    """
    Options for one fixture.

    Raises:
        ValueError: If the options file exists but is not valid JSON
    """
    options_path = geojson_path.with_name(geojson_path.stem + ".options.json")
    if options_path.exists():
        try:
            return json.loads(options_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {options_path.name}: {e}")
    if geojson_path.name.startswith(SIMPLESTYLE_PREFIX):
        return {"simplestyle": True}
    return None


def regenerate_fixtures(directory: Path) -> List[Path]:
    """
    Rewrite every `.kml` fixture in `directory` from its `.geojson` source.

    Returns:
        Paths of the KML files written, in file-name order
    """
    written: List[Path] = []
    for geojson_path in sorted(directory.glob("*.geojson")):
        options = fixture_options(geojson_path)
        kml = tokml(read_geojson(geojson_path), options)
        kml_path = geojson_path.with_suffix(".kml")
        kml_path.write_text(kml, encoding="utf-8")
        written.append(kml_path)
    return written


def regenerate(
    directory: Path = typer.Argument(
        Path("tests/data"), help="Directory holding *.geojson fixtures"
    ),
):
    """Regenerate *.kml fixtures from *.geojson fixtures."""
    if not directory.is_dir():
        console.print(f"[bold red]❌ Error:[/] Directory not found: {directory}")
        raise typer.Exit(1)

    try:
        written = regenerate_fixtures(directory)
    except ValueError as e:
        console.print(f"[bold red]❌ Error:[/] {e}")
        raise typer.Exit(1)

    if not written:
        console.print(f"[yellow]No .geojson fixtures found in {directory}[/]")
        return

    table = Table(title="Regenerated fixtures")
    table.add_column("KML file", style="cyan")
    table.add_column("Bytes", justify="right")
    for path in written:
        table.add_row(path.name, str(path.stat().st_size))
    console.print(table)
