"""Main CLI application entry point.

Defines the Typer application. Invoked without a subcommand, it runs a
cleanup pass in the current directory.
"""

from pathlib import Path
from typing import Annotated

import typer

from cleanctl import __version__
from cleanctl.cli.commands import config
from cleanctl.cli.display import ConsoleReporter
from cleanctl.core.cleaner import CleanupError, run_cleanup
from cleanctl.core.config import ConfigError, load_config
from cleanctl.models.run import RunOptions
from cleanctl.utils.formatting import configure_logging, console, err_console, print_error

# Create main Typer app
app = typer.Typer(
    name="cleanctl",
    help="Clean build artifacts and caches from Node.js projects.",
    invoke_without_command=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"cleanctl version {__version__}")
        raise typer.Exit()


def ask_confirmation(prompt: str) -> bool:
    """Ask a yes/no question on the terminal, defaulting to no."""
    return typer.confirm(prompt, default=False)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-d",
            envvar="CLEANCTL_DRY_RUN",
            help="Preview what would be deleted without deleting.",
        ),
    ] = False,
    confirm: Annotated[
        bool,
        typer.Option(
            "--confirm",
            "-c",
            envvar="CLEANCTL_CONFIRM",
            help="Delete without asking for confirmation.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="Read configuration from this file.",
        ),
    ] = None,
) -> None:
    """cleanctl - Clean build artifacts and caches from Node.js projects.

    Finds every directory containing a package.json below the current
    directory, removes their node_modules, and removes build output and
    cache directories anywhere in the tree.
    """
    configure_logging(verbose=verbose, quiet=quiet)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path

    if ctx.invoked_subcommand is not None:
        return

    if not dry_run and not confirm:
        print_error("Either --dry-run or --confirm must be specified.")
        err_console.print("Use --help for more information.")
        raise typer.Exit(code=1)

    try:
        settings = load_config(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    options = RunOptions(
        dry_run=dry_run,
        skip_confirmation=confirm,
        verbose=verbose,
        quiet=quiet,
    )

    if not quiet:
        prefix = "DRY RUN: " if dry_run else ""
        console.print(f"[bold_header]{prefix}Starting project cleanup...[/]")

    try:
        run_cleanup(
            options,
            targets=settings.resolve_targets(),
            manifest_name=settings.manifest,
            excluded=settings.resolve_exclusions(),
            confirm=ask_confirmation,
            reporter=ConsoleReporter(options),
        )
    except CleanupError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


# Register commands
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
