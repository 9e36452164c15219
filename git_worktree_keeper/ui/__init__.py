"""Interactive worktree selection for git-worktree-keeper."""

from .selector import Selector
from .fuzzy import FuzzyFinder, fuzzy_match

__all__ = ["Selector", "FuzzyFinder", "fuzzy_match"]
