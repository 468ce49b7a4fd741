"""Filesystem models for directory traversal.

This module defines the listing entry the project locator and target
finder walk over, independent of the real filesystem.
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    """A single child entry of a listed directory.

    Attributes:
        name: Basename of the entry.
        is_dir: True if the entry is a real directory (symlinks are not).
    """

    name: str
    is_dir: bool

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.name:
            msg = "Entry name cannot be empty"
            raise ValueError(msg)


# Lists the children of a directory; raises OSError if it cannot be read.
DirectoryLister = Callable[[Path], list[DirectoryEntry]]
