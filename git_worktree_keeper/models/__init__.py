"""Data models for git-worktree-keeper."""

from .worktree import WorktreeRecord, Stats, CopyResult, RemoveResult

__all__ = ["WorktreeRecord", "Stats", "CopyResult", "RemoveResult"]
