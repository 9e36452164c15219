"""Custom exceptions for git-worktree-keeper"""

from typing import Optional, Sequence


class GitWorktreeKeeperError(Exception):
    """Base exception for all git-worktree-keeper errors."""
    pass


class NotARepositoryError(GitWorktreeKeeperError):
    """Raised when no git repository encloses the working directory."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        error_msg = f"Not in a git repository: {path}"
        if message:
            error_msg += f" ({message})"
        super().__init__(error_msg)


class ValidationError(GitWorktreeKeeperError):
    """Exception raised when user input fails validation."""

    def __init__(self, field: str, value: str, message: str = "invalid value"):
        self.field = field
        self.value = value
        self.message = message
        super().__init__(f"Validation failed for {field}={value!r}: {message}")


class WorktreeExistsError(GitWorktreeKeeperError):
    """Raised when the target worktree directory already exists."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Worktree already exists: {path}")


class GitOperationError(GitWorktreeKeeperError):
    """Exception raised for errors in Git operations."""

    def __init__(
        self,
        operation: str,
        args: Optional[Sequence[str]] = None,
        message: Optional[str] = None,
    ):
        self.operation = operation
        self.args_list = list(args or [])
        self.message = message

        error_msg = f"git {operation}"
        if self.args_list:
            error_msg += " " + " ".join(self.args_list)
        error_msg += " failed"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class SelectionError(GitWorktreeKeeperError):
    """Exception raised when an interactive selection is invalid."""
    pass


class NoMatchError(SelectionError):
    """Raised when a filter matches no worktree."""

    def __init__(self, query: str):
        self.query = query
        super().__init__(f"No worktrees match filter: {query}")


class NoWorktreesError(SelectionError):
    """Raised when there is nothing to select from."""

    def __init__(self):
        super().__init__("No worktrees available")
