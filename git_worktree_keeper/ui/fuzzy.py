"""Incremental fuzzy search over worktree branch names."""

from typing import List, Optional, Sequence

from rich.console import Console
from rich.markup import escape

from git_worktree_keeper.constants import (
    FUZZY_MAX_COLLECT,
    FUZZY_MAX_SHOW,
    QUIT_INPUTS,
    SYMBOL_DIRTY,
    SYMBOL_MAIN,
    SYMBOL_WORKTREE,
)
from git_worktree_keeper.exceptions import NoWorktreesError
from git_worktree_keeper.formatters import format_ahead_behind
from git_worktree_keeper.models.worktree import WorktreeRecord
from git_worktree_keeper.ui.selector import Prompt
from git_worktree_keeper.logging_config import get_logger

console = Console(stderr=True)  # keep stdout free for --print
logger = get_logger(__name__)

HEADER = (
    "🔍 Fuzzy search for worktrees (type to filter, Enter to select)\n"
    "   Use numbers to select directly, 'q' to quit"
)


def fuzzy_match(target: str, query: str) -> bool:
    """Check that every character of ``query`` appears in ``target`` in order.

    Both arguments are compared as given; callers lowercase them first.
    """
    if not query:
        return True

    position = 0
    for char in target:
        if char == query[position]:
            position += 1
            if position == len(query):
                return True
    return False


def highlight_match(branch: str, query: str) -> str:
    """Rich markup for ``branch`` with the first substring match of ``query`` highlighted."""
    if not query:
        return escape(branch)

    index = branch.lower().find(query.lower())
    if index < 0:
        return escape(branch)

    end = index + len(query)
    return (
        escape(branch[:index])
        + "[bold yellow]"
        + escape(branch[index:end])
        + "[/bold yellow]"
        + escape(branch[end:])
    )


class FuzzyFinder:
    """Interactive fuzzy finder for worktrees.

    Reads queries until the user picks a worktree or quits. A bare number
    picks from the full, unfiltered list.
    """

    def __init__(
        self,
        worktrees: Sequence[WorktreeRecord],
        output: Optional[Console] = None,
        prompt: Optional[Prompt] = None,
        max_show: int = FUZZY_MAX_SHOW,
        max_collect: int = FUZZY_MAX_COLLECT,
    ):
        self.worktrees = list(worktrees)
        self.console = output or console
        self.prompt = prompt or self.console.input
        self.max_show = max_show
        self.max_collect = max_collect

    def fuzzy_search(self, query: str) -> List[WorktreeRecord]:
        """Rank worktrees for ``query``.

        Substring matches come first in listing order. Subsequence matches
        are appended only while fewer than ``max_show`` were found, and
        collection stops once ``max_collect`` results are reached.
        """
        if not query:
            return list(self.worktrees)

        query = query.lower()
        matches = [wt for wt in self.worktrees if query in wt.branch.lower()]

        if len(matches) < self.max_show:
            matched_paths = {wt.path for wt in matches}
            for wt in self.worktrees:
                if wt.path in matched_paths:
                    continue
                if fuzzy_match(wt.branch.lower(), query):
                    matches.append(wt)
                    if len(matches) >= self.max_collect:
                        break

        return matches

    def search(self) -> Optional[WorktreeRecord]:
        """Run the interactive loop.

        Returns:
            The accepted worktree, or None when the user quits

        Raises:
            NoWorktreesError: If there is nothing to search
        """
        if not self.worktrees:
            raise NoWorktreesError()

        if len(self.worktrees) == 1:
            return self.worktrees[0]

        self.console.print(HEADER)
        self.console.print()

        pending: Optional[str] = None
        while True:
            if pending is not None:
                query, pending = pending, None
            else:
                query = self._read("> ")
                if query is None:
                    return None
            query = query.strip()

            if query.lower() in QUIT_INPUTS:
                return None

            if query.isdecimal():
                number = int(query)
                if 1 <= number <= len(self.worktrees):
                    return self.worktrees[number - 1]
                self.console.print(
                    f"Invalid selection: {number} (range: 1-{len(self.worktrees)})"
                )
                continue

            matches = self.fuzzy_search(query)
            self._show_results(query, matches)

            if len(matches) != 1:
                continue

            answer = self._read(
                f"Press Enter to select '{escape(matches[0].branch)}' or continue typing: "
            )
            if answer is None:
                return None
            if not answer.strip():
                return matches[0]
            pending = answer

    def _read(self, message: str) -> Optional[str]:
        """Prompt once; None at end of input."""
        try:
            return self.prompt(message)
        except EOFError:
            return None

    def _show_results(self, query: str, matches: List[WorktreeRecord]) -> None:
        self.console.clear()
        self.console.print(HEADER)
        self.console.print()

        if not matches:
            self.console.print(f"No matches for: {escape(query)}")
            self.console.print()
            return

        # Numbers refer to the full list so they can be typed back in
        positions = {id(wt): i for i, wt in enumerate(self.worktrees, start=1)}
        for wt in matches[: self.max_show]:
            self.console.print(f"  {positions[id(wt)]}) {self.format_result(wt, query)}")

        if len(matches) > self.max_show:
            self.console.print(
                f"  ... and {len(matches) - self.max_show} more (refine search to see more)"
            )
        self.console.print()

    def format_result(self, wt: WorktreeRecord, query: str) -> str:
        """Rich markup line for one search result."""
        parts = [highlight_match(wt.branch, query)]
        parts.append(SYMBOL_MAIN if wt.is_main else SYMBOL_WORKTREE)

        if not wt.is_clean:
            parts.append(f"{SYMBOL_DIRTY}{wt.total_changes}")

        divergence = format_ahead_behind(wt, compact=True)
        if divergence:
            parts.append(divergence)

        return " ".join(parts)
