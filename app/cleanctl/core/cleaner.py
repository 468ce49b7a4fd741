"""Cleanup orchestration.

Drives a complete cleanup pass: locates project directories once,
collects the directories of every configured target, asks for
confirmation, and routes each removal through the directory eraser.
Every step is reported to a Reporter, which has no influence on the run.

Targets are discovered before anything is removed, so the paths found
for one target never depend on another target's removals and a dry run
finds exactly what a real run would.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from pathlib import Path

from cleanctl.core.targets import DEFAULT_MANIFEST, DEFAULT_TARGETS
from cleanctl.filesystem.exclusions import EXCLUDED_DIRECTORIES
from cleanctl.filesystem.models import DirectoryLister
from cleanctl.filesystem.operator import DirectoryEraser, RemovalResult, TreeRemover
from cleanctl.filesystem.scanner import ProjectLocator, TargetFinder, list_directory
from cleanctl.models.run import RunOptions, RunOutcome, RunResult, TargetResult
from cleanctl.models.target import CleanupTarget

logger = logging.getLogger(__name__)

CONFIRM_PROMPT = "Are you sure you want to proceed with cleanup?"

# Asks the user a yes/no question; blocks until answered.
ConfirmFunc = Callable[[str], bool]


class CleanupError(Exception):
    """Raised when a cleanup pass cannot run at all."""


class Reporter(ABC):
    """Receives progress events from a cleanup pass.

    Implementations render output only; they cannot change the run.
    """

    @abstractmethod
    def nothing_to_clean(self, root: Path, manifest_name: str) -> None:
        """No project directory was found under root."""

    @abstractmethod
    def summary(
        self,
        projects: Sequence[Path],
        targets: Sequence[CleanupTarget],
        options: RunOptions,
    ) -> None:
        """Project directories and targets are known, nothing removed yet."""

    @abstractmethod
    def cancelled(self) -> None:
        """The user declined the confirmation prompt."""

    @abstractmethod
    def target_started(self, target: CleanupTarget, found: Sequence[Path]) -> None:
        """Removal of a target's directories is about to start."""

    @abstractmethod
    def path_removed(self, result: RemovalResult) -> None:
        """A directory was removed (or would be, in dry-run)."""

    @abstractmethod
    def removal_failed(self, result: RemovalResult) -> None:
        """A directory could not be removed."""

    @abstractmethod
    def target_finished(self, result: TargetResult) -> None:
        """All directories of a target were processed."""

    @abstractmethod
    def completed(self, result: RunResult) -> None:
        """The pass finished processing every target."""


class NullReporter(Reporter):
    """Reporter that discards every event."""

    def nothing_to_clean(self, root: Path, manifest_name: str) -> None:
        pass

    def summary(
        self,
        projects: Sequence[Path],
        targets: Sequence[CleanupTarget],
        options: RunOptions,
    ) -> None:
        pass

    def cancelled(self) -> None:
        pass

    def target_started(self, target: CleanupTarget, found: Sequence[Path]) -> None:
        pass

    def path_removed(self, result: RemovalResult) -> None:
        pass

    def removal_failed(self, result: RemovalResult) -> None:
        pass

    def target_finished(self, result: TargetResult) -> None:
        pass

    def completed(self, result: RunResult) -> None:
        pass


def _resolve_root(root: Path | None, lister: DirectoryLister) -> Path:
    """Resolve and validate the working root.

    Raises:
        CleanupError: If the root cannot be determined or read.
    """
    try:
        resolved = (root if root is not None else Path.cwd()).absolute()
    except OSError as e:
        raise CleanupError(f"Cannot resolve working directory: {e}") from e

    try:
        lister(resolved)
    except OSError as e:
        raise CleanupError(f"Cannot read directory {resolved}: {e}") from e

    return resolved


def _has_subdirectory(directory: Path, name: str, lister: DirectoryLister) -> bool:
    """Check if directory directly contains a real subdirectory called name."""
    try:
        entries = lister(directory)
    except OSError as e:
        logger.debug("Skipping unreadable directory %s: %s", directory, e)
        return False
    return any(e.name == name and e.is_dir for e in entries)


def collect_target_paths(
    target: CleanupTarget,
    root: Path,
    projects: Sequence[Path],
    finder: TargetFinder,
    lister: DirectoryLister,
) -> list[Path]:
    """Collect the directories a target would remove.

    Scoped targets are looked up directly beneath each project directory;
    global targets are searched for across the whole tree.

    Args:
        target: Cleanup target to collect for.
        root: Working root of the pass.
        projects: Project directories found under root.
        finder: Target finder used for global targets.
        lister: Directory listing function.

    Returns:
        Candidate directories in discovery order.
    """
    if target.is_scoped:
        return [p / target.name for p in projects if _has_subdirectory(p, target.name, lister)]
    return finder.find(root, target.name)


def remove_target_paths(
    target: CleanupTarget,
    paths: Sequence[Path],
    eraser: DirectoryEraser,
    reporter: Reporter,
    attempted: set[Path],
) -> TargetResult:
    """Remove a target's directories and count the outcome.

    Paths already attempted earlier in the pass are skipped, so no
    directory is removed twice.

    Args:
        target: Cleanup target being processed.
        paths: Directories found for the target.
        eraser: Directory eraser performing (or simulating) removal.
        reporter: Receives per-path events.
        attempted: Paths attempted so far in this pass; updated in place.

    Returns:
        TargetResult with found, removed and failed directories.
    """
    found = [p for p in dict.fromkeys(paths) if p not in attempted]
    reporter.target_started(target, found)

    removed: list[Path] = []
    failed: list[RemovalResult] = []
    for path in found:
        attempted.add(path)
        result = eraser.remove(path)
        if result.success:
            removed.append(path)
            reporter.path_removed(result)
        else:
            failed.append(result)
            reporter.removal_failed(result)

    target_result = TargetResult(
        target=target,
        found=tuple(found),
        removed=tuple(removed),
        failed=tuple(failed),
        dry_run=eraser.dry_run,
    )
    reporter.target_finished(target_result)
    return target_result


def run_cleanup(
    options: RunOptions,
    *,
    root: Path | None = None,
    targets: Sequence[CleanupTarget] = DEFAULT_TARGETS,
    manifest_name: str = DEFAULT_MANIFEST,
    excluded: frozenset[str] = EXCLUDED_DIRECTORIES,
    confirm: ConfirmFunc | None = None,
    reporter: Reporter | None = None,
    remover: TreeRemover | None = None,
    lister: DirectoryLister | None = None,
) -> RunResult:
    """Run a complete cleanup pass.

    Args:
        options: Run options (dry-run, confirmation, verbosity).
        root: Working root. Defaults to the current working directory.
        targets: Cleanup targets, processed in order.
        manifest_name: Manifest file marking a project directory.
        excluded: Directory names never descended into.
        confirm: Asks the user to confirm deletion. Without it, a run that
            needs confirmation is cancelled.
        reporter: Receives progress events. Defaults to NullReporter.
        remover: Tree removal primitive. Defaults to the platform's remover.
        lister: Directory listing function. Defaults to the real filesystem.

    Returns:
        RunResult describing how the pass ended and what it removed.

    Raises:
        CleanupError: If the working root cannot be resolved or read.
    """
    reporter = reporter or NullReporter()
    lister = lister or list_directory

    resolved_root = _resolve_root(root, lister)
    logger.debug("Root directory: %s", resolved_root)

    projects = ProjectLocator(manifest_name, excluded=excluded, lister=lister).find(resolved_root)
    if not projects:
        reporter.nothing_to_clean(resolved_root, manifest_name)
        return RunResult(
            root=resolved_root,
            outcome=RunOutcome.NOTHING_FOUND,
            dry_run=options.dry_run,
        )

    reporter.summary(projects, targets, options)

    if options.needs_confirmation:
        if confirm is None or not confirm(CONFIRM_PROMPT):
            reporter.cancelled()
            return RunResult(
                root=resolved_root,
                outcome=RunOutcome.CANCELLED,
                dry_run=options.dry_run,
                projects=tuple(projects),
            )

    finder = TargetFinder(excluded=excluded, lister=lister)
    discovered = [
        (target, collect_target_paths(target, resolved_root, projects, finder, lister))
        for target in targets
    ]

    eraser = DirectoryEraser(dry_run=options.dry_run, remover=remover)
    attempted: set[Path] = set()
    results = [
        remove_target_paths(target, paths, eraser, reporter, attempted)
        for target, paths in discovered
    ]

    run_result = RunResult(
        root=resolved_root,
        outcome=RunOutcome.COMPLETED,
        dry_run=options.dry_run,
        projects=tuple(projects),
        targets=tuple(results),
    )
    reporter.completed(run_result)
    return run_result
