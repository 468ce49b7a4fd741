"""Directory names that traversal never descends into.

Dependency trees, version-control metadata and IDE state are never
searched for projects or nested cleanup targets. A directory with an
excluded name can still be matched as a target itself; exclusion only
prevents descent.
"""

from collections.abc import Iterable

EXCLUDED_DIRECTORIES: frozenset[str] = frozenset(
    {
        # Dependencies
        "node_modules",
        # Build caches and outputs
        ".turbo",
        ".BUILD",
        ".dist",
        ".test-report",
        # Version control
        ".git",
        # IDE state
        ".vscode",
        ".idea",
    }
)


def is_excluded(name: str, excluded: frozenset[str] = EXCLUDED_DIRECTORIES) -> bool:
    """Check if a directory basename must not be descended into.

    Args:
        name: Directory basename (not a path).
        excluded: Exclusion set to check against.

    Returns:
        True if traversal must skip the directory's contents.
    """
    return name in excluded


def build_exclusions(extra: Iterable[str] = ()) -> frozenset[str]:
    """Combine the default exclusion set with additional names.

    Args:
        extra: Additional directory basenames to exclude.

    Returns:
        Frozen set containing the defaults and the extra names.
    """
    return EXCLUDED_DIRECTORIES | frozenset(extra)
