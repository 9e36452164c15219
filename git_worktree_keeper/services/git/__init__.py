"""Git-related services for git-worktree-keeper."""

from .operations import GitOperations
from .worktrees import parse_worktree_list
from .merge_detector import MergeDetector

__all__ = [
    "GitOperations",
    "parse_worktree_list",
    "MergeDetector",
]
