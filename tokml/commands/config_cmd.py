"""Config command for tokml CLI."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from tokml.core.config import export_template, load_config

app = typer.Typer()
console = Console()


@app.command("show")
def show(
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file (default: ./tokml_config.yaml)"
    ),
):
    """Show the effective conversion options."""
    try:
        options = load_config(config_file)
    except ValueError as e:
        console.print(f"[bold red]❌ Invalid configuration:[/] {e}")
        raise typer.Exit(1)

    table = Table(title="Current Configuration")
    table.add_column("Option", style="cyan")
    table.add_column("Value")
    for key, value in options.to_dict().items():
        table.add_row(key, "[dim]unset[/]" if value is None else repr(value))
    console.print(table)


@app.command("export")
def export(
    output_path: Path = typer.Argument(
        Path("tokml_config.yaml"), help="Where to write the template"
    ),
):
    """Export configuration template."""
    export_template(output_path)
    console.print(f"[bold green]✔[/] Configuration template exported to [underline]{output_path}[/]")
    console.print("[dim]Edit this file to change the default conversion options[/]")


@app.command("validate")
def validate(config_file: Path = typer.Argument(..., help="Config file to validate")):
    """Validate a configuration file."""
    if not config_file.exists():
        console.print(f"[bold red]❌ Error:[/] File not found: {config_file}")
        raise typer.Exit(1)
    try:
        load_config(config_file)
        console.print(f"[bold green]✔[/] Configuration file is valid: [underline]{config_file}[/]")
    except ValueError as e:
        console.print(f"[bold red]❌ Invalid configuration:[/] {e}")
        raise typer.Exit(1)
