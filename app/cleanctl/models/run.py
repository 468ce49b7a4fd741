"""Run models for a cleanup pass.

This module defines the options a cleanup pass is started with and the
per-target and overall results it produces.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cleanctl.filesystem.operator import RemovalResult
    from cleanctl.models.target import CleanupTarget


@dataclass(frozen=True, slots=True)
class RunOptions:
    """Options controlling a single cleanup pass.

    Attributes:
        dry_run: Report what would be removed without touching the filesystem.
        skip_confirmation: Do not ask before deleting (ignored in dry-run).
        verbose: Report every removed path and traversal problem.
        quiet: Suppress all non-error output.
    """

    dry_run: bool = False
    skip_confirmation: bool = False
    verbose: bool = False
    quiet: bool = False

    @property
    def needs_confirmation(self) -> bool:
        """Check if the user must confirm before deletion starts."""
        return not (self.dry_run or self.skip_confirmation)


class RunOutcome(str, Enum):
    """How a cleanup pass ended.

    Attributes:
        NOTHING_FOUND: No project directory was found under the root.
        CANCELLED: The user declined the confirmation prompt.
        COMPLETED: Every configured target was processed.
    """

    NOTHING_FOUND = "nothing_found"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


@dataclass(frozen=True, slots=True)
class TargetResult:
    """Outcome of processing one cleanup target.

    Attributes:
        target: The cleanup target that was processed.
        found: Directories discovered for this target.
        removed: Directories removed (or that would be removed in dry-run).
        failed: Removal results for directories that could not be removed.
        dry_run: Whether removal was only simulated.
    """

    target: CleanupTarget
    found: tuple[Path, ...] = ()
    removed: tuple[Path, ...] = ()
    failed: tuple[RemovalResult, ...] = ()
    dry_run: bool = False

    @property
    def found_count(self) -> int:
        """Number of directories found."""
        return len(self.found)

    @property
    def removed_count(self) -> int:
        """Number of directories removed."""
        return len(self.removed)

    @property
    def failed_count(self) -> int:
        """Number of directories that could not be removed."""
        return len(self.failed)


@dataclass(frozen=True, slots=True)
class RunResult:
    """Outcome of a complete cleanup pass.

    Attributes:
        root: Working root the pass ran against.
        outcome: How the pass ended.
        dry_run: Whether the pass was a dry run.
        projects: Project directories discovered, in pre-order.
        targets: Per-target results, in target order.
    """

    root: Path
    outcome: RunOutcome
    dry_run: bool = False
    projects: tuple[Path, ...] = ()
    targets: tuple[TargetResult, ...] = ()

    @property
    def found_count(self) -> int:
        """Total number of directories found across all targets."""
        return sum(t.found_count for t in self.targets)

    @property
    def removed_count(self) -> int:
        """Total number of directories removed across all targets."""
        return sum(t.removed_count for t in self.targets)

    @property
    def failed_count(self) -> int:
        """Total number of directories that could not be removed."""
        return sum(t.failed_count for t in self.targets)

    def for_target(self, name: str) -> TargetResult | None:
        """Get the result for a target by directory name.

        Args:
            name: Target directory name.

        Returns:
            Matching TargetResult, or None if the target was not processed.
        """
        for result in self.targets:
            if result.target.name == name:
                return result
        return None
