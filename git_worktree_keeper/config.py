"""Configuration handling for git-worktree-keeper"""

import os
from dataclasses import dataclass, field
from typing import Optional, List

from git_worktree_keeper.constants import (
    CONFIG_FILES,
    DEFAULT_MERGE_BASE_CANDIDATES,
    DEFAULT_PROTECTED_BRANCHES,
    DEFAULT_REMOTE,
    OUTPUT_FORMATS,
    WORKTREE_DIR_NAME,
)


@dataclass
class Config:
    """Per-invocation configuration for git-worktree-keeper with validation."""

    # Branch policy
    protected_branches: List[str] = field(default_factory=lambda: list(DEFAULT_PROTECTED_BRANCHES))
    merge_base_candidates: List[str] = field(
        default_factory=lambda: list(DEFAULT_MERGE_BASE_CANDIDATES)
    )
    remote_name: str = DEFAULT_REMOTE

    # Layout
    worktree_dir_name: str = WORKTREE_DIR_NAME
    config_files: List[str] = field(default_factory=lambda: list(CONFIG_FILES))
    base_branch: Optional[str] = None  # None = current branch

    # Output
    output_format: str = "table"  # table, json, simple
    verbose: bool = False
    debug: bool = False

    # Execution modes
    dry_run: bool = False
    force: bool = False
    keep_branch: bool = False

    # Switching
    filter: str = ""
    print_path: bool = False
    fuzzy: bool = False

    # GitHub integration
    github_token: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_output_format()
        self._validate_remote_name()
        self._validate_worktree_dir_name()
        self._validate_protected_branches()
        self._validate_merge_base_candidates()
        if self.github_token is None:
            self.github_token = os.environ.get("GITHUB_TOKEN") or None

    def _validate_output_format(self):
        """Validate output_format is one of allowed values."""
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"output_format must be one of {OUTPUT_FORMATS}, got '{self.output_format}'"
            )

    def _validate_remote_name(self):
        """Validate remote_name is not empty."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        self.remote_name = self.remote_name.strip()

    def _validate_worktree_dir_name(self):
        """Validate the worktree directory is a plain relative name."""
        name = (self.worktree_dir_name or "").strip()
        if not name or os.path.isabs(name) or name in (".", ".."):
            raise ValueError(f"worktree_dir_name must be a relative directory name, got '{name}'")
        self.worktree_dir_name = name

    def _validate_protected_branches(self):
        """Validate protected_branches list."""
        if not isinstance(self.protected_branches, list):
            raise ValueError("protected_branches must be a list")

    def _validate_merge_base_candidates(self):
        """Validate there is at least one base branch to check merges against."""
        if not isinstance(self.merge_base_candidates, list) or not self.merge_base_candidates:
            raise ValueError("merge_base_candidates must be a non-empty list")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "protected_branches": self.protected_branches,
            "merge_base_candidates": self.merge_base_candidates,
            "remote_name": self.remote_name,
            "worktree_dir_name": self.worktree_dir_name,
            "config_files": self.config_files,
            "base_branch": self.base_branch,
            "output_format": self.output_format,
            "verbose": self.verbose,
            "debug": self.debug,
            "dry_run": self.dry_run,
            "force": self.force,
            "keep_branch": self.keep_branch,
            "filter": self.filter,
            "print_path": self.print_path,
            "fuzzy": self.fuzzy,
            "github_token": self.github_token,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = set(cls.__dataclass_fields__)
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
