"""Numbered and filtered worktree selection."""

from typing import Callable, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape

from git_worktree_keeper.constants import QUIT_INPUTS
from git_worktree_keeper.exceptions import NoMatchError, NoWorktreesError, SelectionError
from git_worktree_keeper.formatters import format_selection_line
from git_worktree_keeper.models.worktree import WorktreeRecord
from git_worktree_keeper.logging_config import get_logger

console = Console(stderr=True)  # keep stdout free for --print
logger = get_logger(__name__)

Prompt = Callable[[str], str]


def filter_worktrees(worktrees: Sequence[WorktreeRecord], query: str) -> List[WorktreeRecord]:
    """Worktrees whose branch contains ``query``, ignoring case."""
    query = query.lower()
    return [wt for wt in worktrees if query in wt.branch.lower()]


class Selector:
    """Pick one worktree from a numbered list.

    Selection methods return the chosen record, or None when the user
    cancels (quit, empty answer or end of input).
    """

    def __init__(
        self,
        worktrees: Sequence[WorktreeRecord],
        output: Optional[Console] = None,
        prompt: Optional[Prompt] = None,
    ):
        self.worktrees = list(worktrees)
        self.console = output or console
        self.prompt = prompt or self.console.input

    def select(self) -> Optional[WorktreeRecord]:
        """Show every worktree numbered from 1 and read the user's choice.

        Raises:
            NoWorktreesError: If there is nothing to choose from
            SelectionError: If the answer is not a number in range
        """
        if not self.worktrees:
            raise NoWorktreesError()

        if len(self.worktrees) == 1:
            return self.worktrees[0]

        self.console.print("📂 Available worktrees:")
        self.console.print()
        for i, wt in enumerate(self.worktrees, start=1):
            self.console.print(f"  {i}) {escape(wt.branch)} {escape(format_selection_line(wt))}")
        self.console.print()

        try:
            answer = self.prompt(f"Select worktree (1-{len(self.worktrees)}, q to quit): ")
        except EOFError:
            return None

        answer = answer.strip()
        if not answer or answer.lower() in QUIT_INPUTS:
            return None

        try:
            selection = int(answer)
        except ValueError:
            raise SelectionError(f"Invalid selection: {answer}")

        if selection < 1 or selection > len(self.worktrees):
            raise SelectionError(
                f"Selection out of range: {selection} (range: 1-{len(self.worktrees)})"
            )

        selected = self.worktrees[selection - 1]
        logger.debug(f"Selected worktree {selected}")
        return selected

    def select_with_filter(self, query: str) -> Optional[WorktreeRecord]:
        """Narrow the list by branch substring, prompting only when needed.

        Raises:
            NoMatchError: If no branch contains ``query``
        """
        if not query:
            return self.select()

        if not self.worktrees:
            raise NoWorktreesError()

        if len(self.worktrees) == 1:
            return self.worktrees[0]

        filtered = filter_worktrees(self.worktrees, query)
        if not filtered:
            raise NoMatchError(query)

        if len(filtered) == 1:
            return filtered[0]

        self.console.print(f"🔍 Filtered worktrees (matching '{escape(query)}'):")
        self.console.print()
        return Selector(filtered, output=self.console, prompt=self.prompt).select()
