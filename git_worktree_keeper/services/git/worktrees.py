"""Parsing of ``git worktree list --porcelain`` output."""

from typing import List, Optional

from git_worktree_keeper.constants import DETACHED_BRANCH
from git_worktree_keeper.models.worktree import WorktreeRecord
from git_worktree_keeper.logging_config import get_logger

logger = get_logger(__name__)

BRANCH_REF_PREFIX = "refs/heads/"


def _finish(record: WorktreeRecord) -> WorktreeRecord:
    if not record.branch:
        record.branch = DETACHED_BRANCH
    return record


def parse_worktree_list(output: str) -> List[WorktreeRecord]:
    """Parse porcelain worktree listing into records.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name
        (blank line between worktrees)

    A record without a ``branch`` line is detached. Lines the parser does not
    know (``HEAD``, ``bare``, ``detached``, ``locked``, ``prunable``...) are
    skipped.

    Args:
        output: Raw text from ``git worktree list --porcelain``

    Returns:
        Records in listing order; the first one is normally the main worktree
    """
    worktrees: List[WorktreeRecord] = []
    current: Optional[WorktreeRecord] = None

    for line in output.split("\n"):
        line = line.strip()

        if not line:
            # Empty line marks end of worktree entry
            if current is not None:
                worktrees.append(_finish(current))
                current = None
            continue

        if line.startswith("worktree "):
            if current is not None:
                # Missing separator, keep the previous entry anyway
                worktrees.append(_finish(current))
            current = WorktreeRecord(path=line[len("worktree "):])
        elif current is not None and line.startswith("branch "):
            branch = line[len("branch "):]
            if branch.startswith(BRANCH_REF_PREFIX):
                branch = branch[len(BRANCH_REF_PREFIX):]
            current.branch = branch

    # Handle last entry if no trailing blank line
    if current is not None:
        worktrees.append(_finish(current))

    logger.debug(f"Parsed {len(worktrees)} worktrees")
    return worktrees
