"""Display and formatting service for worktree information"""
import json
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from git_worktree_keeper.constants import CLI_COLORS, COLUMNS, VERBOSE_COLUMNS
from git_worktree_keeper.formatters import (
    format_ahead_behind,
    format_changes,
    format_status,
    format_status_symbol,
    get_worktree_style_type,
    truncate,
)
from git_worktree_keeper.models.worktree import Stats, WorktreeRecord
from git_worktree_keeper.logging_config import get_logger

console = Console()
logger = get_logger(__name__)


class DisplayService:
    def __init__(self, verbose: bool = False, output: Optional[Console] = None):
        self.verbose = verbose
        self.console = output or console

    def display_worktrees(self, worktrees: List[WorktreeRecord], output_format: str = "table") -> None:
        """Render a worktree listing in the requested format."""
        if output_format == "json":
            self.display_json(worktrees)
        elif output_format == "simple":
            self.display_simple(worktrees)
        else:
            self.display_table(worktrees)

    def display_table(self, worktrees: List[WorktreeRecord]) -> None:
        """Display a table of worktree information."""
        table = Table()
        columns = VERBOSE_COLUMNS if self.verbose else COLUMNS
        for col in columns:
            if col.width:
                table.add_column(col.label, max_width=col.width)
            else:
                table.add_column(col.label)

        for wt in worktrees:
            row_style = CLI_COLORS.get(get_worktree_style_type(wt))
            if self.verbose:
                table.add_row(
                    escape(wt.branch),
                    escape(wt.path),
                    format_status_symbol(wt),
                    format_ahead_behind(wt),
                    format_changes(wt),
                    escape(truncate(wt.last_commit)),
                    wt.commit_age,
                    style=row_style,
                )
            else:
                table.add_row(
                    escape(wt.branch),
                    escape(wt.path),
                    format_status(wt),
                    style=row_style,
                )

        self.console.print(table)

    def display_simple(self, worktrees: List[WorktreeRecord]) -> None:
        """Print ``branch<TAB>path`` lines for scripts."""
        # Console.print expands tabs, so write to the underlying stream
        for wt in worktrees:
            self.console.file.write(f"{wt.branch}\t{wt.path}\n")
        self.console.file.flush()

    def display_json(self, worktrees: List[WorktreeRecord]) -> None:
        """Print the records as an indented JSON array."""
        payload = json.dumps([wt.to_dict() for wt in worktrees], indent=2, ensure_ascii=False)
        self.console.print(payload, markup=False, highlight=False, soft_wrap=True)

    def display_stats(self, stats: Stats, merged_branches: Optional[List[str]] = None) -> None:
        """Display worktree statistics and recommended actions."""
        self.console.print("📊 Worktree Statistics")
        self.console.print(f"  Total worktrees: {stats.total}")
        self.console.print(f"  Active worktrees: {stats.active}")
        self.console.print(f"  Dirty worktrees: {stats.dirty}")
        self.console.print(f"  Main worktree: {'✅ exists' if stats.main_exists else '❌ missing'}")

        if stats.dirty > 0:
            self.console.print(
                f"\n[yellow]⚠️  {stats.dirty} worktree(s) have uncommitted changes[/yellow]"
            )

        if merged_branches:
            self.console.print(f"\n🧹 {len(merged_branches)} merged branch(es) can be cleaned up:")
            for branch in merged_branches:
                self.console.print(f"  - {escape(branch)}")
            self.console.print("\n💡 Run 'gwk clean' to remove merged worktrees")

        if stats.total == 1 and stats.main_exists:
            self.console.print("\n💡 Run 'gwk create <branch-name>' to create your first worktree")

    def display_removal_candidates(self, worktrees: List[WorktreeRecord]) -> None:
        """List worktrees that clean would remove."""
        self.console.print(f"🧹 Found {len(worktrees)} worktree(s) for merged branches:")
        for wt in worktrees:
            status = "clean" if wt.is_clean else "[yellow]⚠️  dirty[/yellow]"
            self.console.print(f"  - {escape(wt.branch)} ({status})")
