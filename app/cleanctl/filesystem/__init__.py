"""Filesystem traversal and removal module.

This module provides the exclusion policy, the project and target
scanners, and the directory removal operator.
"""

from cleanctl.filesystem.exclusions import EXCLUDED_DIRECTORIES, build_exclusions, is_excluded
from cleanctl.filesystem.models import DirectoryEntry, DirectoryLister
from cleanctl.filesystem.operator import (
    DirectoryEraser,
    RemovalResult,
    ShutilTreeRemover,
    TreeRemover,
    WindowsTreeRemover,
    get_tree_remover,
    remove_directory,
)
from cleanctl.filesystem.scanner import (
    ProjectLocator,
    TargetFinder,
    find_project_directories,
    find_target_directories,
    list_directory,
)

__all__ = [
    "EXCLUDED_DIRECTORIES",
    "DirectoryEntry",
    "DirectoryEraser",
    "DirectoryLister",
    "ProjectLocator",
    "RemovalResult",
    "ShutilTreeRemover",
    "TargetFinder",
    "TreeRemover",
    "WindowsTreeRemover",
    "build_exclusions",
    "find_project_directories",
    "find_target_directories",
    "get_tree_remover",
    "is_excluded",
    "list_directory",
    "remove_directory",
]
