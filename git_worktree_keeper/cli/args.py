"""Command-line argument parsing for git-worktree-keeper."""

import argparse
from typing import List, Optional

from git_worktree_keeper.__version__ import __version__
from git_worktree_keeper.constants import DEFAULT_PROTECTED_BRANCHES, DEFAULT_REMOTE, OUTPUT_FORMATS


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="gwk",
        description="Manage git worktrees: several branches checked out side by side",
        epilog="Worktrees are created in <repo>/.worktree/<branch-name>. "
        "Set GITHUB_TOKEN to let 'create' read the default branch from GitHub.",
    )
    parser.add_argument("--version", action="version", version=f"git-worktree-keeper {__version__}")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "--protected",
        nargs="*",
        default=list(DEFAULT_PROTECTED_BRANCHES),
        metavar="BRANCH",
        help="Branches never cleaned up (default: %(default)s)",
    )
    parser.add_argument(
        "--remote", default=DEFAULT_REMOTE, help="Remote holding upstream branches (default: origin)"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    create = subparsers.add_parser("create", help="Create a new worktree and branch")
    create.add_argument("branch", help="Name of the new branch")
    create.add_argument(
        "--base", default=None, help="Base branch to create from (default: current branch)"
    )
    create.add_argument(
        "--force", action="store_true", help="Create even if the directory already exists"
    )

    remove = subparsers.add_parser(
        "remove", aliases=["rm", "delete"], help="Remove a worktree and its branch"
    )
    remove.add_argument("branch", help="Branch whose worktree should be removed")
    remove.add_argument("--force", action="store_true", help="Skip confirmation")
    remove.add_argument(
        "--keep-branch", action="store_true", help="Keep the local branch after removing the worktree"
    )

    list_cmd = subparsers.add_parser("list", aliases=["ls"], help="List all worktrees")
    list_cmd.add_argument(
        "-v", "--verbose", action="store_true", help="Show detailed information"
    )
    list_cmd.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default="table",
        help="Output format (default: table)",
    )

    subparsers.add_parser("status", help="Show worktree statistics")

    clean = subparsers.add_parser("clean", help="Remove worktrees of merged branches")
    clean.add_argument(
        "--dry-run", action="store_true", help="Show what would be removed without removing"
    )
    clean.add_argument("--force", action="store_true", help="Skip confirmation")

    subparsers.add_parser("prune", help="Remove administrative files of orphaned worktrees")

    switch = subparsers.add_parser("switch", aliases=["sw"], help="Switch to a worktree interactively")
    switch.add_argument("query", nargs="?", default="", help="Filter worktrees by branch name")
    switch.add_argument("-f", "--filter", default="", help="Filter worktrees by branch name")
    switch.add_argument(
        "-p", "--print", dest="print_path", action="store_true",
        help="Print the selected worktree path instead of switching",
    )
    switch.add_argument("--fuzzy", action="store_true", help="Use interactive fuzzy search")

    return parser


COMMAND_ALIASES = {
    "rm": "remove",
    "delete": "remove",
    "ls": "list",
    "sw": "switch",
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments, normalising command aliases."""
    args = build_parser().parse_args(argv)
    args.command = COMMAND_ALIASES.get(args.command, args.command)
    return args
