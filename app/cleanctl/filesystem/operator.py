"""Directory removal operator.

Handles removal of discovered cleanup directories with dry-run support.
The platform-specific recursive removal primitive is selected once at
startup; the operator only depends on the TreeRemover interface.
"""

import logging
import shutil
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from cleanctl.utils.shell import run_command

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RemovalResult:
    """Result of a single directory removal.

    Attributes:
        path: Absolute path that was operated on.
        success: Whether the directory is gone (or would be, in dry-run).
        error: Error message if the removal failed, None otherwise.
        dry_run: Whether this was a dry-run (no actual deletion).
        already_gone: The directory had disappeared before removal started.
    """

    path: Path
    success: bool
    error: str | None = None
    dry_run: bool = False
    already_gone: bool = False


class TreeRemover(ABC):
    """Removes a directory and everything beneath it."""

    @abstractmethod
    def remove_tree(self, path: Path) -> None:
        """Remove path recursively.

        Args:
            path: Directory to remove.

        Raises:
            OSError: If the directory could not be removed.
        """


def _ignore_vanished(func: object, path: str, exc: BaseException) -> None:
    """Skip entries removed by someone else while the tree is being deleted."""
    if isinstance(exc, FileNotFoundError):
        return
    raise exc


class ShutilTreeRemover(TreeRemover):
    """Removes directory trees with shutil.rmtree (POSIX)."""

    def remove_tree(self, path: Path) -> None:
        shutil.rmtree(path, onexc=_ignore_vanished)


class WindowsTreeRemover(TreeRemover):
    """Removes directory trees with ``rmdir /s /q`` (Windows)."""

    def remove_tree(self, path: Path) -> None:
        result = run_command(["cmd.exe", "/c", "rmdir", "/s", "/q", str(path)])
        if not result.success:
            msg = result.stderr.strip() or f"rmdir failed with exit code {result.returncode}"
            raise OSError(msg)


def get_tree_remover(platform: str | None = None) -> TreeRemover:
    """Select the tree remover for a platform.

    Args:
        platform: Platform identifier as in sys.platform. Defaults to the
            running platform.

    Returns:
        TreeRemover implementation for the platform.
    """
    platform = platform or sys.platform
    if platform == "win32":
        return WindowsTreeRemover()
    return ShutilTreeRemover()


class DirectoryEraser:
    """Removes cleanup directories, or simulates removal in dry-run mode.

    Failures are reported through RemovalResult and never raised, so a
    single undeletable directory does not abort a cleanup pass.

    Args:
        dry_run: If True, report what would be removed without removing.
        remover: Tree removal primitive. Defaults to the platform's remover.
    """

    def __init__(self, dry_run: bool = False, remover: TreeRemover | None = None) -> None:
        self._dry_run = dry_run
        self._remover = remover or get_tree_remover()

    @property
    def dry_run(self) -> bool:
        """Check if eraser is in dry-run mode."""
        return self._dry_run

    def remove(self, path: Path) -> RemovalResult:
        """Remove a directory and everything beneath it.

        A directory that no longer exists counts as removed. Paths that
        are not real directories (files, symlinks) are refused.

        Args:
            path: Absolute directory path to remove.

        Returns:
            RemovalResult indicating success or failure.
        """
        if self._dry_run:
            logger.debug("Dry-run: would remove %s", path)
            return RemovalResult(path=path, success=True, dry_run=True)

        if path.is_symlink() or (path.exists() and not path.is_dir()):
            return RemovalResult(
                path=path,
                success=False,
                error=f"Not a directory: {path}",
            )

        if not path.exists():
            logger.debug("Already gone: %s", path)
            return RemovalResult(path=path, success=True, already_gone=True)

        try:
            self._remover.remove_tree(path)
        except OSError as e:
            logger.debug("Error removing %s: %s", path, e)
            return RemovalResult(path=path, success=False, error=str(e))

        logger.debug("Removed %s", path)
        return RemovalResult(path=path, success=True)


def remove_directory(path: Path, dry_run: bool = False) -> bool:
    """Remove a directory tree, returning whether it succeeded.

    Args:
        path: Directory to remove.
        dry_run: If True, nothing is removed and True is returned.

    Returns:
        True if the directory was (or would be) removed.
    """
    return DirectoryEraser(dry_run=dry_run).remove(path).success
