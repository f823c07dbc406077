"""Convert command for tokml CLI."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from tokml.core.config import ConvertOptions, load_config, resolve_options
from tokml.core.writers import tokml
from tokml.io.geojson_reader import read_geojson
from tokml.utils.utils import ensure_parent_dir, format_file_size, kml_summary

console = Console(stderr=True)

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    """Route log records through rich; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def build_options(
    config_file: Optional[Path],
    flags: Dict[str, Any],
) -> ConvertOptions:
    """
    Resolve options: defaults < config file < command-line flags.

    Flags left as None were not given on the command line and do not
    override anything.

    Raises:
        ValueError: If the config file cannot be loaded
    """
    base = load_config(config_file)
    given = {k: v for k, v in flags.items() if v is not None}
    return resolve_options(given, base=base)


def convert(
    input_file: Optional[Path] = typer.Argument(
        None, help="GeoJSON file to convert (omit or '-' to read standard input)"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write KML to this file instead of standard output"
    ),
    document_name: Optional[str] = typer.Option(
        None, "--document-name", help="<name> of the KML Document"
    ),
    document_description: Optional[str] = typer.Option(
        None, "--document-description", help="<description> of the KML Document"
    ),
    name: Optional[str] = typer.Option(
        None, "--name", help="Feature property used for each Placemark <name> (default: name)"
    ),
    description: Optional[str] = typer.Option(
        None,
        "--description",
        help="Feature property used for each Placemark <description> (default: description)",
    ),
    timestamp: Optional[str] = typer.Option(
        None,
        "--timestamp",
        help="Feature property used for each Placemark <TimeStamp> (default: timestamp)",
    ),
    simplestyle: Optional[bool] = typer.Option(
        None,
        "--simplestyle/--no-simplestyle",
        help="Convert simplestyle properties (marker-color, stroke, fill, ...) into KML styles",
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML configuration file (default: ./tokml_config.yaml)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    Convert a GeoJSON file to KML.

    Reads a FeatureCollection, Feature or bare geometry and writes a KML 2.2
    document. Features without properties or with unsupported geometry are
    skipped.
    """
    configure_logging(verbose)

    reading_stdin = input_file is None or str(input_file) == "-"
    if reading_stdin and sys.stdin.isatty():
        ctx = typer.get_current_context()
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(1)

    try:
        options = build_options(
            config_file,
            {
                "document_name": document_name,
                "document_description": document_description,
                "name": name,
                "description": description,
                "timestamp": timestamp,
                "simplestyle": simplestyle,
            },
        )
    except ValueError as e:
        console.print(f"[bold red]❌ Error:[/] {e}")
        raise typer.Exit(1)

    try:
        geojson = read_geojson(None if reading_stdin else input_file)
    except FileNotFoundError as e:
        console.print(f"[bold red]❌ Error:[/] {e}")
        raise typer.Exit(1)
    except ValueError as e:
        console.print("[bold red]❌ Error reading GeoJSON:[/]")
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)

    logger.debug(f"Converting with options: {options.to_dict()}")
    kml = tokml(geojson, options)

    if output is None:
        sys.stdout.write(kml)
        sys.stdout.flush()
        return

    out_path = ensure_parent_dir(output)
    out_path.write_text(kml, encoding="utf-8")

    summary = kml_summary(kml)
    console.print(
        f"[bold green]✔[/] Wrote {summary['placemarks']} placemark(s), "
        f"{summary['styles']} style(s) to [underline]{out_path.name}[/] "
        f"[dim]({format_file_size(summary['bytes'])})[/]"
    )
