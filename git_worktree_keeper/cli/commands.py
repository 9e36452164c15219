"""Command handlers for git-worktree-keeper.

Each handler receives the WorktreeKeeper and the invocation's Config and
returns the process exit code.
"""

import os
import subprocess

from rich.console import Console
from rich.markup import escape

from git_worktree_keeper.config import Config
from git_worktree_keeper.core import WorktreeKeeper
from git_worktree_keeper.exceptions import GitOperationError
from git_worktree_keeper.services.display_service import DisplayService
from git_worktree_keeper.ui import FuzzyFinder, Selector
from git_worktree_keeper.logging_config import get_logger

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)


def confirm(question: str) -> bool:
    """Ask a yes/no question, defaulting to no."""
    try:
        response = console.input(f"{question} [y/N]: ")
    except EOFError:
        return False
    return response.strip().lower() == "y"


def run_create(keeper: WorktreeKeeper, config: Config, branch: str) -> int:
    base = config.base_branch or keeper.resolve_base_branch()
    console.print(f"🌱 Creating worktree '{escape(branch)}' based on '{escape(base)}'...")

    path = keeper.create_worktree(branch, base_branch=base, force=config.force)

    console.print(f"[green]✅ Worktree created successfully at: {escape(path)}[/green]")
    console.print(f"💡 Run 'cd {escape(path)}' to switch to the new worktree")
    return 0


def run_remove(keeper: WorktreeKeeper, config: Config, branch: str) -> int:
    path = keeper.worktree_path(branch)
    if not config.force and not confirm(f"Remove worktree '{escape(branch)}' at {escape(path)}?"):
        console.print("Operation cancelled")
        return 0

    console.print(f"🗑️  Removing worktree '{escape(branch)}'...")
    result = keeper.remove_worktree(branch, keep_branch=config.keep_branch)

    if result.branch_error:
        console.print(
            f"[yellow]⚠️  Warning: failed to delete branch '{escape(branch)}': "
            f"{escape(result.branch_error)}[/yellow]"
        )
        console.print("[green]✅ Worktree removed successfully (branch kept)[/green]")
    elif config.keep_branch:
        console.print("[green]✅ Worktree removed successfully (branch kept)[/green]")
    else:
        console.print("[green]✅ Worktree and branch removed successfully[/green]")
    return 0


def run_list(keeper: WorktreeKeeper, config: Config) -> int:
    worktrees = keeper.list_worktrees()
    if not worktrees:
        console.print("No worktrees found")
        return 0

    DisplayService(verbose=config.verbose).display_worktrees(worktrees, config.output_format)
    return 0


def run_status(keeper: WorktreeKeeper, config: Config) -> int:
    worktrees = keeper.list_worktrees()
    stats = keeper.get_stats(worktrees)

    try:
        merged = keeper.get_merged_branches()
    except GitOperationError as e:
        logger.info(f"Skipping merged branch summary: {e}")
        merged = []

    DisplayService(verbose=config.verbose).display_stats(stats, merged)
    return 0


def run_clean(keeper: WorktreeKeeper, config: Config) -> int:
    merged = keeper.get_merged_branches()
    if not merged:
        console.print("🧹 No merged branches found to clean up")
        return 0

    to_remove = keeper.find_merged_worktrees(merged=merged)
    if not to_remove:
        console.print("🧹 No worktrees found for merged branches")
        return 0

    DisplayService().display_removal_candidates(to_remove)

    if config.dry_run:
        console.print("\n💡 Run without --dry-run to actually remove these worktrees")
        return 0

    if not config.force and not confirm(f"\nRemove {len(to_remove)} worktree(s)?"):
        console.print("Operation cancelled")
        return 0

    removed = 0
    for wt in to_remove:
        console.print(f"🗑️  Removing worktree '{escape(wt.branch)}'...")
        try:
            result = keeper.remove_worktree(wt.branch, keep_branch=config.keep_branch)
        except GitOperationError as e:
            console.print(f"[yellow]⚠️  Failed to remove '{escape(wt.branch)}': {escape(str(e))}[/yellow]")
            continue
        if result.branch_error:
            console.print(
                f"[yellow]⚠️  Warning: failed to delete branch '{escape(wt.branch)}': "
                f"{escape(result.branch_error)}[/yellow]"
            )
        removed += 1

    console.print(f"[green]✅ Successfully removed {removed} worktree(s)[/green]")
    return 0


def run_prune(keeper: WorktreeKeeper, config: Config) -> int:
    console.print("🧹 Pruning orphaned worktree administrative files...")
    output = keeper.prune()
    if output:
        console.print(output, markup=False, highlight=False)
    else:
        console.print("[green]✅ No orphaned administrative files found[/green]")
    return 0


def run_switch(keeper: WorktreeKeeper, config: Config) -> int:
    # --print output is captured by shell helpers; notices go to stderr
    notices = err_console if config.print_path else console

    worktrees = keeper.list_worktrees()
    if not worktrees:
        notices.print("No worktrees found. Use 'gwk create <branch-name>' to create one.")
        return 0

    if config.fuzzy:
        selected = FuzzyFinder(worktrees).search()
    else:
        selected = Selector(worktrees).select_with_filter(config.filter)

    if selected is None:
        notices.print("Operation cancelled.")
        return 0

    if config.print_path:
        print(selected.path)
        return 0

    if os.path.realpath(os.getcwd()) == os.path.realpath(selected.path):
        console.print(f"Already in worktree '{escape(selected.branch)}'")
        return 0

    console.print(f"🔄 Switching to worktree '{escape(selected.branch)}' at {escape(selected.path)}")
    console.print(f"💡 Run: cd {escape(selected.path)}")

    try:
        open_shell_in_directory(selected.path)
    except OSError as e:
        console.print(f"[yellow]⚠️  Could not open new shell: {escape(str(e))}[/yellow]")
        console.print(f"📝 You can also copy and run: cd {escape(selected.path)}")
    return 0


def open_shell_in_directory(path: str) -> int:
    """Run the user's shell inside ``path`` until it exits."""
    shell = os.environ.get("SHELL") or "/bin/sh"
    console.print(f"🐚 Opening new shell in {escape(path)} (exit to return)")
    return subprocess.run([shell], cwd=path, check=False).returncode
