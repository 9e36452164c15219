"""Worktree data models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from git_worktree_keeper.constants import DETACHED_BRANCH


@dataclass
class WorktreeRecord:
    """A git worktree together with its working-tree and remote status."""

    path: str
    branch: str = ""

    is_main: bool = False  # Is this the repository root working tree?
    is_clean: bool = True

    # Sync status with remote
    ahead: int = 0
    behind: int = 0

    # Local change counts
    added: int = 0
    modified: int = 0
    deleted: int = 0

    # Commit information
    last_commit: str = ""
    commit_age: str = ""
    commit_time: Optional[datetime] = None

    error: Optional[str] = None  # Last enrichment failure, display only

    @property
    def is_detached(self) -> bool:
        return self.branch in ("", DETACHED_BRANCH)

    @property
    def total_changes(self) -> int:
        return self.added + self.modified + self.deleted

    @property
    def has_divergence(self) -> bool:
        return self.ahead > 0 or self.behind > 0

    def to_dict(self) -> dict:
        """Serializable representation used by the JSON output format."""
        return {
            "path": self.path,
            "branch": self.branch,
            "is_main": self.is_main,
            "is_clean": self.is_clean,
            "ahead": self.ahead,
            "behind": self.behind,
            "added": self.added,
            "modified": self.modified,
            "deleted": self.deleted,
            "last_commit": self.last_commit,
            "commit_age": self.commit_age,
            "commit_time": self.commit_time.isoformat() if self.commit_time else None,
        }

    def __str__(self) -> str:
        status = "clean" if self.is_clean else "dirty"
        main_marker = " (main)" if self.is_main else ""
        return f"{self.branch} @ {self.path}{main_marker} [{status}]"


@dataclass
class Stats:
    """Aggregate figures for one worktree listing."""

    total: int = 0
    active: int = 0
    dirty: int = 0
    main_exists: bool = False

    @classmethod
    def from_worktrees(cls, worktrees: List[WorktreeRecord]) -> "Stats":
        stats = cls(total=len(worktrees))
        for wt in worktrees:
            if wt.is_main:
                stats.main_exists = True
            else:
                stats.active += 1
            if not wt.is_clean:
                stats.dirty += 1
        return stats


@dataclass
class CopyResult:
    """Outcome of copying dotfiles into a new worktree."""

    copied: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass
class RemoveResult:
    """Outcome of removing a worktree and, optionally, its branch."""

    path: str
    branch: str
    branch_deleted: bool = False
    branch_error: Optional[str] = None
