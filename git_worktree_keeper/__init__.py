"""
git-worktree-keeper - Manage several git worktrees of one repository side by side
"""

from .__version__ import __version__
from .core import WorktreeKeeper
from .cli.main import main

__all__ = ["WorktreeKeeper", "main", "__version__"]
