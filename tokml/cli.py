#!/usr/bin/env python3
"""
tokml - GeoJSON to KML converter
Main CLI entry point
"""

from __future__ import annotations

import typer

from tokml.commands import config_cmd, convert_cmd, regenerate_cmd

app = typer.Typer(
    name="tokml",
    help="Convert GeoJSON to KML",
    no_args_is_help=True,
    add_completion=False,
)

app.command(name="convert", help="Convert a GeoJSON file to KML")(convert_cmd.convert)
app.command(
    name="regenerate", help="Regenerate KML test fixtures from GeoJSON fixtures"
)(regenerate_cmd.regenerate)

app.add_typer(config_cmd.app, name="config", help="Manage configuration settings")


@app.callback()
def callback() -> None:
    """
    tokml - GeoJSON to KML converter

    Primary workflow:
      convert                 - Convert GeoJSON (file or stdin) into a KML document

    Utilities:
      config                  - Manage configuration settings
      regenerate              - Rebuild KML fixtures from GeoJSON fixtures
    """
    pass


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
