"""Command-line entry point for git-worktree-keeper"""

import os
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from git_worktree_keeper.cli import commands
from git_worktree_keeper.cli.args import parse_args
from git_worktree_keeper.config import Config
from git_worktree_keeper.core import WorktreeKeeper
from git_worktree_keeper.logging_config import get_logger, setup_logging

console = Console(stderr=True)
logger = get_logger(__name__)


def build_config(parsed_args) -> Config:
    """Build the invocation's Config from parsed arguments."""
    return Config(
        protected_branches=parsed_args.protected,
        remote_name=parsed_args.remote,
        base_branch=getattr(parsed_args, "base", None),
        output_format=getattr(parsed_args, "output_format", "table"),
        verbose=getattr(parsed_args, "verbose", False),
        debug=parsed_args.debug,
        dry_run=getattr(parsed_args, "dry_run", False),
        force=getattr(parsed_args, "force", False),
        keep_branch=getattr(parsed_args, "keep_branch", False),
        filter=getattr(parsed_args, "query", "") or getattr(parsed_args, "filter", ""),
        print_path=getattr(parsed_args, "print_path", False),
        fuzzy=getattr(parsed_args, "fuzzy", False),
    )


def dispatch(keeper: WorktreeKeeper, config: Config, parsed_args) -> int:
    """Run the handler for the parsed command."""
    command = parsed_args.command
    if command == "create":
        return commands.run_create(keeper, config, parsed_args.branch)
    if command == "remove":
        return commands.run_remove(keeper, config, parsed_args.branch)
    if command == "list":
        return commands.run_list(keeper, config)
    if command == "status":
        return commands.run_status(keeper, config)
    if command == "clean":
        return commands.run_clean(keeper, config)
    if command == "prune":
        return commands.run_prune(keeper, config)
    if command == "switch":
        return commands.run_switch(keeper, config)
    raise ValueError(f"Unknown command: {command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)
    setup_logging(verbose=getattr(parsed_args, "verbose", False), debug=parsed_args.debug)

    try:
        config = build_config(parsed_args)

        if config.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                if key == "github_token" and value:
                    value = "***"
                console.print(f"  {key}: {value}", markup=False)

        keeper = WorktreeKeeper(os.getcwd(), config)
        return dispatch(keeper, config, parsed_args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
