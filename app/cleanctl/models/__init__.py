"""Data models for cleanctl.

This module exports the immutable values passed between the scanner,
the operator and the cleanup orchestrator.
"""

from cleanctl.models.run import RunOptions, RunOutcome, RunResult, TargetResult
from cleanctl.models.target import CleanupTarget, TargetScope

__all__ = [
    "CleanupTarget",
    "RunOptions",
    "RunOutcome",
    "RunResult",
    "TargetResult",
    "TargetScope",
]
