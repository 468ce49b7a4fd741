"""Directory scanners for project roots and cleanup targets.

Walks a working tree to find project directories (those directly
containing a manifest file) and every directory matching a cleanup
target name. Both walks prune descent into excluded directories and
skip directories that cannot be read. Symbolic links are never followed.
"""

import logging
import os
from pathlib import Path

from cleanctl.filesystem.exclusions import EXCLUDED_DIRECTORIES, is_excluded
from cleanctl.filesystem.models import DirectoryEntry, DirectoryLister

logger = logging.getLogger(__name__)


def list_directory(path: Path) -> list[DirectoryEntry]:
    """List the children of a directory in name order.

    Entries whose type cannot be determined are skipped.

    Args:
        path: Directory to list.

    Returns:
        DirectoryEntry for each child, sorted by name.

    Raises:
        OSError: If the directory itself cannot be read.
    """
    entries: list[DirectoryEntry] = []
    with os.scandir(path) as it:
        for entry in it:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                logger.debug("Cannot determine type of %s: %s", entry.path, e)
                continue
            entries.append(DirectoryEntry(name=entry.name, is_dir=is_dir))
    entries.sort(key=lambda e: e.name)
    return entries


class ProjectLocator:
    """Finds project directories beneath a root.

    A project directory is one that directly contains the manifest file.
    Results are in pre-order: a parent always precedes its children.

    Args:
        manifest_name: Basename of the manifest file marking a project.
        excluded: Directory names never descended into.
        lister: Directory listing function (defaults to the real filesystem).
    """

    def __init__(
        self,
        manifest_name: str = "package.json",
        *,
        excluded: frozenset[str] = EXCLUDED_DIRECTORIES,
        lister: DirectoryLister | None = None,
    ) -> None:
        self._manifest_name = manifest_name
        self._excluded = excluded
        self._lister = lister or list_directory

    def find(self, root: Path) -> list[Path]:
        """Find every project directory under root, root included.

        Args:
            root: Directory to start from.

        Returns:
            Project directories in pre-order. Empty if none found.
        """
        projects: list[Path] = []
        pending: list[Path] = [root]

        while pending:
            current = pending.pop()
            try:
                entries = self._lister(current)
            except OSError as e:
                logger.debug("Skipping unreadable directory %s: %s", current, e)
                continue

            if any(e.name == self._manifest_name and not e.is_dir for e in entries):
                projects.append(current)

            children = [
                current / e.name
                for e in entries
                if e.is_dir and not is_excluded(e.name, self._excluded)
            ]
            # Reversed so the first child is walked next
            pending.extend(reversed(children))

        return projects


class TargetFinder:
    """Finds every directory with a given name beneath a base directory.

    A matched directory is recorded and not searched further, so nested
    instances inside a match are never reported. Excluded directories are
    not descended into but are still matched when their name is the target.

    Args:
        excluded: Directory names never descended into.
        lister: Directory listing function (defaults to the real filesystem).
    """

    def __init__(
        self,
        *,
        excluded: frozenset[str] = EXCLUDED_DIRECTORIES,
        lister: DirectoryLister | None = None,
    ) -> None:
        self._excluded = excluded
        self._lister = lister or list_directory

    def find(self, base: Path, target_name: str) -> list[Path]:
        """Find all directories named target_name below base.

        The base directory itself is never matched.

        Args:
            base: Directory to search in.
            target_name: Directory basename to find.

        Returns:
            Matching directories in depth-first order. Empty if none found.
        """
        found: list[Path] = []
        pending: list[Path] = [base]

        while pending:
            current = pending.pop()
            try:
                entries = self._lister(current)
            except OSError as e:
                logger.debug("Error reading directory %s: %s", current, e)
                continue

            children: list[Path] = []
            for entry in entries:
                if not entry.is_dir:
                    continue
                if entry.name == target_name:
                    found.append(current / entry.name)
                elif not is_excluded(entry.name, self._excluded):
                    children.append(current / entry.name)
            pending.extend(reversed(children))

        return found


def find_project_directories(
    root: Path,
    manifest_name: str = "package.json",
    *,
    excluded: frozenset[str] = EXCLUDED_DIRECTORIES,
) -> list[Path]:
    """Find all project directories under root on the real filesystem."""
    return ProjectLocator(manifest_name, excluded=excluded).find(root)


def find_target_directories(
    base: Path,
    target_name: str,
    *,
    excluded: frozenset[str] = EXCLUDED_DIRECTORIES,
) -> list[Path]:
    """Find all directories named target_name under base on the real filesystem."""
    return TargetFinder(excluded=excluded).find(base, target_name)
