"""Command-line interface for git-worktree-keeper.

This package provides the CLI entry point, argument parsing and command handlers.
"""

from .main import main
from .args import parse_args

__all__ = ["main", "parse_args"]
