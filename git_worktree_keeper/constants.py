"""Shared constants for git-worktree-keeper."""

from dataclasses import dataclass
from typing import List


# Branch value assigned to worktrees checked out at a bare commit
DETACHED_BRANCH = "HEAD"

# Directory under the repository root that holds managed worktrees
WORKTREE_DIR_NAME = ".worktree"

DEFAULT_REMOTE = "origin"

DEFAULT_PROTECTED_BRANCHES: List[str] = ["main", "master", "develop", "dev"]

# Base branches tried, in order, when looking for merged branches
DEFAULT_MERGE_BASE_CANDIDATES: List[str] = ["main", "master"]

# Candidates tried when the default branch cannot be read from GitHub
DEFAULT_BRANCH_FALLBACKS: List[str] = ["main", "master", "develop"]

# Dotfiles copied from the repository root into new worktrees
CONFIG_FILES: List[str] = [
    ".editorconfig",
    ".env",
    ".env.local",
    ".gitignore",
    ".prettierrc",
    ".rgignore",
]

# Names forbidden anywhere inside a branch name
INVALID_BRANCH_SUBSTRINGS: List[str] = ["..", "~", "^", ":", "?", "*", "[", "\\"]

FALLBACK_BRANCH_NAME = "unnamed-branch"

OUTPUT_FORMATS = ["table", "json", "simple"]

# Fuzzy finder result caps
FUZZY_MAX_SHOW = 10
FUZZY_MAX_COLLECT = FUZZY_MAX_SHOW * 2

QUIT_INPUTS = {"q", "quit"}

LOG_DIR_NAME = ".git-worktree-keeper"
LOG_FILE_NAME = "git-worktree-keeper.log"

LAST_COMMIT_MAX_LEN = 50


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("branch", "Branch", 30),
    ColumnDefinition("path", "Path"),
    ColumnDefinition("status", "Status", 12),
]

VERBOSE_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("branch", "Branch", 30),
    ColumnDefinition("path", "Path"),
    ColumnDefinition("status", "Status", 8),
    ColumnDefinition("sync", "Ahead/Behind", 12),
    ColumnDefinition("changes", "Changes", 14),
    ColumnDefinition("last_commit", "Last Commit", LAST_COMMIT_MAX_LEN),
    ColumnDefinition("age", "Age", 10),
]


# Symbol constants
SYMBOL_MAIN = "🏠"
SYMBOL_WORKTREE = "🌱"
SYMBOL_DIRTY = "⚠️"
SYMBOL_CLEAN = "✅"


# Row colors (Rich color names)
class WorktreeStyleType:
    """Style types for worktree rows."""

    MAIN = "main"
    DIRTY = "dirty"
    CLEAN = "clean"


CLI_COLORS = {
    WorktreeStyleType.MAIN: "cyan",
    WorktreeStyleType.DIRTY: "yellow",
    WorktreeStyleType.CLEAN: None,  # Default color
}
