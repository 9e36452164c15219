"""Git operations service"""

import os
from typing import List, Sequence, Tuple

import git

from git_worktree_keeper.constants import DEFAULT_REMOTE
from git_worktree_keeper.exceptions import GitOperationError, NotARepositoryError
from git_worktree_keeper.logging_config import get_logger

logger = get_logger(__name__)


def _command_error(operation: str, args: Sequence[str], e: Exception) -> GitOperationError:
    """Build a GitOperationError from a failed GitPython call."""
    if isinstance(e, git.exc.GitCommandError):
        # Extract detailed error information from GitCommandError
        stderr = (e.stderr if hasattr(e, "stderr") else str(e)).strip()
        status = e.status if hasattr(e, "status") else "unknown"
        if stderr:
            message = f"exit {status}: {stderr}"
        else:
            message = f"exit code {status}"
    else:
        message = str(e)
    return GitOperationError(operation, args, message)


class GitOperations:
    """Thin wrapper around the git command line.

    Every call blocks on a git subprocess and either returns its text output
    or raises GitOperationError naming the operation and its arguments.
    Calls that belong to one worktree run there with ``git -C <path>``.
    """

    def __init__(self, repo_root: str, remote_name: str = DEFAULT_REMOTE):
        """Initialize the service.

        Args:
            repo_root: Root working directory of the main worktree
            remote_name: Remote used for upstream refs and fetches
        """
        self.repo_root = repo_root
        self.remote_name = remote_name
        logger.debug(f"Git operations initialized for {repo_root}")

    @staticmethod
    def find_repo_root(path: str) -> str:
        """Return the main working tree root for the repository containing ``path``.

        When ``path`` lies inside a linked worktree the root of the original
        clone is returned, not the linked worktree's own top level.
        """
        try:
            repo = git.Repo(path, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise NotARepositoryError(path) from e

        try:
            if repo.working_tree_dir is None:
                raise NotARepositoryError(path, "bare repository")

            common_dir = os.path.realpath(repo.common_dir)
            if os.path.basename(common_dir) == ".git":
                return os.path.dirname(common_dir)
            return os.path.realpath(repo.working_tree_dir)
        finally:
            repo.close()

    def _get_repo(self) -> git.Repo:
        """Open the repository at the root.

        GitPython repos are lightweight - they don't clone, just open the existing repo.
        """
        return git.Repo(self.repo_root)

    def _run(self, operation: str, *args: str) -> str:
        """Run ``git <operation> <args>`` in the repository root."""
        try:
            repo = self._get_repo()
            return repo.git.execute(["git", operation, *args])
        except (git.exc.GitCommandError, git.exc.GitError, OSError) as e:
            raise _command_error(operation, args, e) from e

    def _run_in(self, path: str, operation: str, *args: str) -> str:
        """Run ``git -C <path> <operation> <args>``."""
        try:
            repo = self._get_repo()
            return repo.git.execute(["git", "-C", path, operation, *args])
        except (git.exc.GitCommandError, git.exc.GitError, OSError) as e:
            raise _command_error(operation, [f"-C {path}", *args], e) from e

    # Read-only queries

    def list_worktrees(self) -> str:
        """Raw ``git worktree list --porcelain`` output."""
        return self._run("worktree", "list", "--porcelain")

    def status(self, path: str) -> str:
        """Raw ``git status --porcelain`` output for one worktree."""
        return self._run_in(path, "status", "--porcelain")

    def last_commit(self, path: str) -> str:
        """``<subject>|<unix-timestamp>`` of the newest commit in a worktree."""
        return self._run_in(path, "log", "-1", "--format=%s|%ct")

    def divergence(self, path: str, upstream: str, local: str = "HEAD") -> Tuple[int, int]:
        """Commit counts ``(behind, ahead)`` of ``local`` relative to ``upstream``."""
        output = self._run_in(
            path, "rev-list", "--count", "--left-right", f"{upstream}...{local}"
        )
        parts = output.split()
        if len(parts) < 2:
            raise GitOperationError(
                "rev-list", [f"{upstream}...{local}"], f"unexpected output: {output!r}"
            )
        try:
            return int(parts[0]), int(parts[1])
        except ValueError as e:
            raise GitOperationError(
                "rev-list", [f"{upstream}...{local}"], f"unexpected output: {output!r}"
            ) from e

    def merged_branches(self, base_ref: str) -> str:
        """Raw ``git branch --merged <base_ref>`` output."""
        return self._run("branch", "--merged", base_ref)

    def current_branch(self) -> str:
        """Name of the branch checked out in the repository root.

        In detached HEAD state the nearest symbolic name is used instead.
        """
        branch = self._run("rev-parse", "--abbrev-ref", "HEAD").strip()
        if branch != "HEAD":
            return branch

        described = self._run("describe", "--contains", "--all", "HEAD").strip()
        if described.startswith("heads/"):
            described = described[len("heads/"):]
        return described

    def ref_exists(self, ref: str) -> bool:
        """Check whether ``ref`` resolves to a commit."""
        try:
            self._run("rev-parse", "--verify", "--quiet", ref)
            return True
        except GitOperationError:
            return False

    def remote_url(self) -> str:
        """URL of the configured remote."""
        return self._run("remote", "get-url", self.remote_name).strip()

    # Mutating operations

    def fetch(self) -> None:
        """Fetch and prune the configured remote."""
        logger.debug(f"Fetching {self.remote_name}...")
        self._run("fetch", "--prune", self.remote_name)

    def add_worktree(self, path: str, branch: str, start_point: str) -> None:
        """Create ``branch`` at ``start_point`` checked out in a new worktree."""
        self._run("worktree", "add", "-b", branch, path, start_point)
        logger.info(f"Added worktree at {path} for branch {branch}")

    def remove_worktree(self, path: str, force: bool = False) -> None:
        """Remove a worktree at the specified path."""
        args: List[str] = ["remove"]
        if force:
            args.append("--force")
        args.append(path)
        self._run("worktree", *args)
        logger.info(f"Removed worktree at {path}")

    def delete_branch(self, branch: str) -> None:
        """Force delete a local branch."""
        self._run("branch", "-D", branch)
        logger.info(f"Deleted branch {branch}")

    def prune_worktrees(self) -> str:
        """Prune orphaned worktree metadata and return git's verbose report."""
        # git reports pruned entries on stderr
        try:
            repo = self._get_repo()
            _, stdout, stderr = repo.git.execute(
                ["git", "worktree", "prune", "-v"], with_extended_output=True
            )
        except (git.exc.GitCommandError, git.exc.GitError, OSError) as e:
            raise _command_error("worktree", ["prune", "-v"], e) from e
        output = "\n".join(part for part in (stdout, stderr) if part)
        logger.info("Pruned orphaned worktree metadata")
        return output

