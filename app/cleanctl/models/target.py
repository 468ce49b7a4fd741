"""Cleanup target models.

This module defines what kind of directory a cleanup pass removes and
how it is located within the working tree.
"""

from dataclasses import dataclass
from enum import Enum


class TargetScope(str, Enum):
    """How a cleanup target is located.

    Attributes:
        PROJECTS: Only directly beneath each discovered project directory
            (one level, non-recursive). Used for dependency folders.
        GLOBAL: Anywhere in the working tree, independent of project
            boundaries. Used for build outputs and caches.
    """

    PROJECTS = "projects"
    GLOBAL = "global"


@dataclass(frozen=True, slots=True)
class CleanupTarget:
    """A directory name removed during a cleanup pass.

    Attributes:
        name: Directory basename to match (e.g., "node_modules").
        description: Human-readable description for reporting.
        scope: Whether the target is scoped to projects or searched globally.
    """

    name: str
    description: str
    scope: TargetScope = TargetScope.GLOBAL

    def __post_init__(self) -> None:
        """Validate target data after initialization."""
        if not self.name:
            msg = "Target name cannot be empty"
            raise ValueError(msg)
        if "/" in self.name or "\\" in self.name or self.name in (".", ".."):
            msg = f"Target name must be a plain directory name, got {self.name!r}"
            raise ValueError(msg)

    @property
    def is_scoped(self) -> bool:
        """Check if this target is removed only beneath project directories."""
        return self.scope == TargetScope.PROJECTS
