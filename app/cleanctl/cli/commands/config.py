"""Configuration commands.

Provides commands to locate, display, and create the cleanctl
configuration file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from cleanctl.cli.display import create_targets_table
from cleanctl.core.config import CleanConfig, ConfigError, load_config, save_config
from cleanctl.core.paths import get_config_path
from cleanctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and create the cleanctl configuration.",
    no_args_is_help=True,
)


def _config_path(ctx: typer.Context) -> Path:
    """Get the config file path selected on the root command."""
    explicit: Path | None = (ctx.obj or {}).get("config_path")
    return explicit or get_config_path()


@app.command("path")
def show_path(ctx: typer.Context) -> None:
    """Print the configuration file path."""
    typer.echo(str(_config_path(ctx)))


@app.command("show")
def show(ctx: typer.Context) -> None:
    """Show the effective configuration."""
    path = _config_path(ctx)
    try:
        settings = load_config((ctx.obj or {}).get("config_path"))
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    source = str(path) if path.exists() else "built-in defaults"
    table = Table(
        title="Settings",
        show_header=False,
        border_style="border",
    )
    table.add_column("Key", style="bold_header")
    table.add_column("Value")
    table.add_row("Source", source)
    table.add_row("Manifest", settings.manifest)
    table.add_row("Excluded", ", ".join(sorted(settings.resolve_exclusions())))
    table.add_row("Skipped", ", ".join(settings.skip) or "-")

    console.print(table)
    console.print(create_targets_table(settings.resolve_targets()))


@app.command("init")
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing configuration file."),
    ] = False,
) -> None:
    """Write a configuration file with the default settings."""
    path = _config_path(ctx)
    if path.exists() and not force:
        print_info(f"Configuration already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        saved = save_config(CleanConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Configuration written to {saved}")
