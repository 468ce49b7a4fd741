"""Rich rendering of cleanup progress.

Provides the console reporter used by the CLI to display the cleanup
summary, per-target progress, and the completion message.
"""

from collections.abc import Sequence
from pathlib import Path

from rich.panel import Panel
from rich.table import Table

from cleanctl.core.cleaner import Reporter
from cleanctl.filesystem.operator import RemovalResult
from cleanctl.models.run import RunOptions, RunResult, TargetResult
from cleanctl.models.target import CleanupTarget
from cleanctl.utils.formatting import console, print_info, print_warning


def _plural(count: int) -> str:
    return "directory" if count == 1 else "directories"


def create_projects_table(projects: Sequence[Path]) -> Table:
    """Create a Rich table listing discovered project directories.

    Args:
        projects: Project directories in discovery order.

    Returns:
        Rich Table with one numbered row per project.
    """
    table = Table(
        title=f"Found {len(projects)} project(s)",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", width=4, justify="right")
    table.add_column("Project", style="path", overflow="fold")

    for index, project in enumerate(projects, start=1):
        table.add_row(str(index), str(project))

    return table


def create_targets_table(targets: Sequence[CleanupTarget]) -> Table:
    """Create a Rich table listing the directory types to clean.

    Args:
        targets: Cleanup targets in processing order.

    Returns:
        Rich Table with name, scope and description columns.
    """
    table = Table(
        title="Directory types to clean",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", width=4, justify="right")
    table.add_column("Directory", no_wrap=True)
    table.add_column("Scope", width=8)
    table.add_column("Description", style="muted")

    for index, target in enumerate(targets, start=1):
        table.add_row(str(index), target.name, target.scope.value, target.description)

    return table


class ConsoleReporter(Reporter):
    """Prints cleanup progress to the shared Rich consoles.

    Quiet mode suppresses everything but errors. Verbose mode adds a
    line for every directory handled.

    Args:
        options: Run options controlling verbosity.
    """

    def __init__(self, options: RunOptions) -> None:
        self._quiet = options.quiet
        self._verbose = options.verbose and not options.quiet

    def nothing_to_clean(self, root: Path, manifest_name: str) -> None:
        if self._quiet:
            return
        console.print(f"[warning]No {manifest_name} files found in {root}. Nothing to clean.[/]")

    def summary(
        self,
        projects: Sequence[Path],
        targets: Sequence[CleanupTarget],
        options: RunOptions,
    ) -> None:
        if self._quiet:
            return
        console.print(create_projects_table(projects))
        console.print(create_targets_table(targets))
        if options.dry_run:
            console.print("[muted]Dry run: nothing will be deleted.[/]")

    def cancelled(self) -> None:
        if not self._quiet:
            print_info("Cleanup cancelled.")

    def target_started(self, target: CleanupTarget, found: Sequence[Path]) -> None:
        if self._quiet:
            return
        console.print(f"\n[bold_header]Cleaning {target.name}[/] [muted]({target.description})[/]")
        if found:
            console.print(f"Found {len(found)} {target.name} {_plural(len(found))}")

    def path_removed(self, result: RemovalResult) -> None:
        if not self._verbose:
            return
        if result.dry_run:
            console.print(f"  [muted]Would remove:[/] [path]{result.path}[/]")
        elif result.already_gone:
            console.print(f"  [muted]Already gone:[/] [path]{result.path}[/]")
        else:
            console.print(f"  [removed]Removed:[/] [path]{result.path}[/]")

    def removal_failed(self, result: RemovalResult) -> None:
        if self._quiet:
            return
        print_warning(f"Could not remove {result.path}: {result.error or 'Unknown error'}")

    def target_finished(self, result: TargetResult) -> None:
        if self._quiet:
            return
        if result.found_count == 0:
            console.print(f"[muted]No {result.target.name} directories found[/]")
            return
        verb = "would be removed" if result.dry_run else "removed"
        line = (
            f"{result.target.description} cleanup: "
            f"{result.removed_count}/{result.found_count} {_plural(result.found_count)} {verb}"
        )
        style = "warning" if result.failed_count else "success"
        console.print(f"[{style}]{line}[/]")

    def completed(self, result: RunResult) -> None:
        if self._quiet:
            return
        if result.dry_run:
            title = "DRY RUN COMPLETE"
            body = (
                f"{result.found_count} {_plural(result.found_count)} would be removed.\n"
                "This was a dry run. No files were deleted.\n"
                "Run without --dry-run to perform the actual cleanup."
            )
            style = "info"
        else:
            title = "CLEANUP COMPLETE"
            body = (
                f"{result.removed_count} {_plural(result.removed_count)} removed.\n"
                "Your project directories have been cleaned.\n"
                'You may need to run "npm install" or equivalent to reinstall dependencies.'
            )
            style = "success"
            if result.failed_count:
                body += f"\n{result.failed_count} {_plural(result.failed_count)} could not be removed."
                style = "warning"
        console.print()
        console.print(Panel(body, title=title, border_style=style))
