"""Formatting utilities for git-worktree-keeper.

- date: Date and relative time formatting
- status: Worktree status, changes and divergence formatting
"""

from .date import format_time_ago
from .status import (
    format_ahead_behind,
    format_changes,
    format_selection_line,
    format_status,
    format_status_symbol,
    get_worktree_style_type,
    truncate,
)

__all__ = [
    # Date
    "format_time_ago",
    # Status
    "format_ahead_behind",
    "format_changes",
    "format_selection_line",
    "format_status",
    "format_status_symbol",
    "get_worktree_style_type",
    "truncate",
]
