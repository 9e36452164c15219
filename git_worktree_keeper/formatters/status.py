"""Worktree status formatting utilities."""

from git_worktree_keeper.constants import (
    LAST_COMMIT_MAX_LEN,
    SYMBOL_CLEAN,
    SYMBOL_DIRTY,
    SYMBOL_MAIN,
    SYMBOL_WORKTREE,
    WorktreeStyleType,
)
from git_worktree_keeper.models.worktree import WorktreeRecord


def format_status(wt: WorktreeRecord) -> str:
    """
    Format the one-word status column of the compact table.

    Args:
        wt: Worktree record

    Returns:
        "🏠 main", "⚠️  dirty" or "✅ clean"
    """
    if wt.is_main:
        return f"{SYMBOL_MAIN} main"
    if not wt.is_clean:
        return f"{SYMBOL_DIRTY}  dirty"
    return f"{SYMBOL_CLEAN} clean"


def format_status_symbol(wt: WorktreeRecord) -> str:
    """Single symbol status used by the verbose table."""
    if wt.is_main:
        return SYMBOL_MAIN
    if not wt.is_clean:
        return SYMBOL_DIRTY
    return SYMBOL_WORKTREE


def format_changes(wt: WorktreeRecord) -> str:
    """Format change counts as "M:1 A:0 D:2", or "clean"."""
    if wt.is_clean:
        return "clean"
    return f"M:{wt.modified} A:{wt.added} D:{wt.deleted}"


def format_ahead_behind(wt: WorktreeRecord, compact: bool = False) -> str:
    """
    Format divergence from the upstream branch.

    Args:
        wt: Worktree record
        compact: Return an empty string instead of "up-to-date"

    Returns:
        "+ahead/-behind" or "up-to-date"
    """
    if wt.has_divergence:
        return f"+{wt.ahead}/-{wt.behind}"
    return "" if compact else "up-to-date"


def truncate(text: str, max_len: int = LAST_COMMIT_MAX_LEN) -> str:
    """Shorten ``text`` to ``max_len`` characters, ending in "..." when cut."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def get_worktree_style_type(wt: WorktreeRecord) -> str:
    """
    Determine the row style for a worktree.

    Args:
        wt: Worktree record

    Returns:
        WorktreeStyleType constant
    """
    if wt.is_main:
        return WorktreeStyleType.MAIN
    if not wt.is_clean:
        return WorktreeStyleType.DIRTY
    return WorktreeStyleType.CLEAN


def format_selection_line(wt: WorktreeRecord) -> str:
    """Status summary shown next to a branch in the numbered selector."""
    parts = [f"{SYMBOL_MAIN} main" if wt.is_main else SYMBOL_WORKTREE]

    if not wt.is_clean:
        parts.append(f"{SYMBOL_DIRTY}  {wt.total_changes} changes")

    if wt.has_divergence:
        parts.append(f"📡 {format_ahead_behind(wt)}")

    parts.append(f"📁 {wt.path}")
    return " ".join(parts)
