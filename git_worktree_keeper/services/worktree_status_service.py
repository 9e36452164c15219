"""Service that fills in working-tree, commit and remote status for worktrees"""

import os
from datetime import datetime, timezone
from typing import Callable, List, Optional, TYPE_CHECKING, Union

from git_worktree_keeper.exceptions import GitOperationError
from git_worktree_keeper.formatters.date import format_time_ago
from git_worktree_keeper.models.worktree import WorktreeRecord
from git_worktree_keeper.logging_config import get_logger

if TYPE_CHECKING:
    from git_worktree_keeper.config import Config
    from git_worktree_keeper.services.git.operations import GitOperations

logger = get_logger(__name__)

UNTRACKED_CODE = "??"


def count_status_changes(status_output: str) -> tuple[int, int, int]:
    """Count changed paths in ``git status --porcelain`` output.

    The two-character code has separate index and worktree columns, so a
    path can count in more than one category (``MD`` is modified and deleted).
    Untracked paths count as added; codes without M, A or D (renames,
    copies, conflicts, type changes) count as modified.

    Returns:
        Tuple of (modified, added, deleted)
    """
    modified = added = deleted = 0

    for line in status_output.split("\n"):
        if len(line) < 2:
            continue

        code = line[:2]
        counted = False
        if "M" in code:
            modified += 1
            counted = True
        if "A" in code:
            added += 1
            counted = True
        if "D" in code:
            deleted += 1
            counted = True

        if not counted:
            if code == UNTRACKED_CODE:
                added += 1
            elif code.strip():
                modified += 1

    return modified, added, deleted


class WorktreeStatusService:
    """Service for enriching parsed worktree records."""

    def __init__(
        self,
        git_ops: "GitOperations",
        config: Union["Config", dict],
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize the service.

        Args:
            git_ops: Git collaborator answering status, log and rev-list queries
            config: Configuration dictionary or Config object
            clock: Returns "now" for commit ages (defaults to the UTC wall clock)
        """
        self.git_ops = git_ops
        self.config = config
        self.remote_name = config.get("remote_name", git_ops.remote_name)
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def enrich_all(self, worktrees: List[WorktreeRecord], repo_root: str) -> List[WorktreeRecord]:
        """Enrich every record in order; a failing record never stops the rest."""
        for wt in worktrees:
            self.enrich(wt, repo_root)
        return worktrees

    def enrich(self, wt: WorktreeRecord, repo_root: str) -> WorktreeRecord:
        """Populate status fields of ``wt`` in place and return it.

        Each step is independent: a failed step is logged, noted on the
        record and the remaining steps still run.
        """
        wt.is_main = os.path.realpath(wt.path) == os.path.realpath(repo_root)

        for step in (self._apply_git_status, self._apply_commit_info, self._apply_remote_status):
            try:
                step(wt)
            except GitOperationError as e:
                logger.warning(f"Could not read status for worktree {wt.path}: {e}")
                wt.error = str(e)

        return wt

    def _apply_git_status(self, wt: WorktreeRecord) -> None:
        """Set cleanliness and change counts."""
        status_output = self.git_ops.status(wt.path)

        wt.modified, wt.added, wt.deleted = count_status_changes(status_output)
        wt.is_clean = not status_output.strip()
        logger.debug(
            f"{wt.path}: M:{wt.modified} A:{wt.added} D:{wt.deleted} clean={wt.is_clean}"
        )

    def _apply_commit_info(self, wt: WorktreeRecord) -> None:
        """Set last commit subject, time and age."""
        output = self.git_ops.last_commit(wt.path).strip()
        if "|" not in output:
            # No commits yet
            return

        subject, _, timestamp = output.rpartition("|")
        wt.last_commit = subject
        try:
            commit_time = datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            logger.debug(f"Unparseable commit timestamp {timestamp!r} in {wt.path}")
            return

        wt.commit_time = commit_time
        wt.commit_age = format_time_ago(commit_time, now=self.clock())

    def _apply_remote_status(self, wt: WorktreeRecord) -> None:
        """Set ahead/behind counts against the upstream counterpart."""
        if wt.is_detached:
            return

        upstream = f"{self.remote_name}/{wt.branch}"
        try:
            wt.behind, wt.ahead = self.git_ops.divergence(wt.path, upstream)
        except GitOperationError as e:
            # Not an error if remote branch doesn't exist
            logger.debug(f"No divergence info for {wt.branch} against {upstream}: {e}")
            wt.ahead = wt.behind = 0
