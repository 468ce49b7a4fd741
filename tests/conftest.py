"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from cleanctl.core.cleaner import Reporter
from cleanctl.filesystem.models import DirectoryEntry, DirectoryLister
from cleanctl.filesystem.operator import RemovalResult
from cleanctl.models.run import RunOptions, RunResult, TargetResult
from cleanctl.models.target import CleanupTarget


class RecordingReporter(Reporter):
    """Reporter that records every event as (name, payload) tuples."""

    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def nothing_to_clean(self, root: Path, manifest_name: str) -> None:
        self.events.append(("nothing_to_clean", root))

    def summary(
        self,
        projects: Sequence[Path],
        targets: Sequence[CleanupTarget],
        options: RunOptions,
    ) -> None:
        self.events.append(("summary", list(projects)))

    def cancelled(self) -> None:
        self.events.append(("cancelled", None))

    def target_started(self, target: CleanupTarget, found: Sequence[Path]) -> None:
        self.events.append(("target_started", target.name))

    def path_removed(self, result: RemovalResult) -> None:
        self.events.append(("path_removed", result.path))

    def removal_failed(self, result: RemovalResult) -> None:
        self.events.append(("removal_failed", result.path))

    def target_finished(self, result: TargetResult) -> None:
        self.events.append(("target_finished", result))

    def completed(self, result: RunResult) -> None:
        self.events.append(("completed", result))


@pytest.fixture
def reporter() -> RecordingReporter:
    """Reporter that records orchestrator events."""
    return RecordingReporter()


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[..., Path]:
    """Build a directory tree under tmp_path.

    Entries ending in "/" are created as directories; any other entry is
    created as a file (with parent directories). Returns the tree root.
    """

    def _make(*entries: str) -> Path:
        for entry in entries:
            path = tmp_path / entry
            if entry.endswith("/"):
                path.mkdir(parents=True, exist_ok=True)
            else:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text("{}")
        return tmp_path

    return _make


@pytest.fixture
def memory_lister() -> Callable[[dict[str, list[str] | None]], DirectoryLister]:
    """Build an in-memory directory lister.

    The tree maps absolute directory paths to their child names; a child
    ending in "/" is a directory. Directories mapped to None raise
    PermissionError when listed.
    """

    def _build(tree: dict[str, list[str] | None]) -> DirectoryLister:
        def _list(path: Path) -> list[DirectoryEntry]:
            key = str(path)
            if key not in tree:
                raise FileNotFoundError(key)
            children = tree[key]
            if children is None:
                raise PermissionError(f"Permission denied: {key}")
            return [
                DirectoryEntry(name=child.rstrip("/"), is_dir=child.endswith("/"))
                for child in children
            ]

        return _list

    return _build
