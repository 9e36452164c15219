"""Core functionality for git-worktree-keeper"""

import os
import shutil
from typing import List, Optional, Union

from git_worktree_keeper.config import Config
from git_worktree_keeper.exceptions import GitOperationError, WorktreeExistsError
from git_worktree_keeper.models.worktree import CopyResult, RemoveResult, Stats, WorktreeRecord
from git_worktree_keeper.services.branch_validation_service import BranchValidationService
from git_worktree_keeper.services.git import GitOperations, MergeDetector, parse_worktree_list
from git_worktree_keeper.services.github_service import GitHubService
from git_worktree_keeper.services.worktree_status_service import WorktreeStatusService
from git_worktree_keeper.logging_config import get_logger

logger = get_logger(__name__)


class WorktreeKeeper:
    """Manage the worktrees of one repository.

    Worktrees live in ``<repo root>/<worktree_dir_name>/<branch>``. All git
    access goes through ``git_ops``, which tests replace with a fake.
    """

    def __init__(
        self,
        repo_path: str,
        config: Union[Config, dict],
        git_ops: Optional[GitOperations] = None,
    ):
        """Initialize WorktreeKeeper.

        Args:
            repo_path: Any path inside the repository
            config: Configuration dict or Config object
            git_ops: Git collaborator; built for the discovered root when omitted

        Raises:
            NotARepositoryError: If ``repo_path`` is not inside a git repository
        """
        if isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config

        if git_ops is None:
            repo_root = GitOperations.find_repo_root(repo_path)
            git_ops = GitOperations(repo_root, self.config.remote_name)
        self.git_ops = git_ops
        self.repo_root = git_ops.repo_root
        self.worktree_dir = os.path.join(self.repo_root, self.config.worktree_dir_name)

        self.status_service = WorktreeStatusService(self.git_ops, self.config)
        self.merge_detector = MergeDetector(self.git_ops, self.config)
        self.github_service = GitHubService(self.git_ops, self.config)

        logger.debug(f"Managing worktrees of {self.repo_root} in {self.worktree_dir}")

    def worktree_path(self, branch_name: str) -> str:
        """On-disk location of the worktree for ``branch_name``."""
        return os.path.join(self.worktree_dir, branch_name)

    def list_worktrees(self) -> List[WorktreeRecord]:
        """All worktrees with their current status.

        Raises:
            GitOperationError: If the worktree listing itself fails
        """
        output = self.git_ops.list_worktrees()
        worktrees = parse_worktree_list(output)
        return self.status_service.enrich_all(worktrees, self.repo_root)

    def get_stats(self, worktrees: Optional[List[WorktreeRecord]] = None) -> Stats:
        """Statistics for the given listing, or a fresh one."""
        if worktrees is None:
            worktrees = self.list_worktrees()
        return Stats.from_worktrees(worktrees)

    def is_protected(self, branch_name: str) -> bool:
        return BranchValidationService.is_protected(branch_name, self.config.protected_branches)

    def get_merged_branches(self) -> List[str]:
        """Unprotected local branches merged into the upstream main branch.

        Raises:
            GitOperationError: If no base branch candidate could be queried
        """
        return self.merge_detector.get_merged_branches(self.config.merge_base_candidates)

    def find_merged_worktrees(
        self,
        worktrees: Optional[List[WorktreeRecord]] = None,
        merged: Optional[List[str]] = None,
    ) -> List[WorktreeRecord]:
        """Linked worktrees whose branch has been merged, in merged-branch order.

        ``merged`` skips the merged-branch query when the caller already ran it.
        """
        if merged is None:
            merged = self.get_merged_branches()
        if not merged:
            return []

        if worktrees is None:
            worktrees = self.list_worktrees()
        by_branch = {wt.branch: wt for wt in worktrees if not wt.is_main}
        return [by_branch[branch] for branch in merged if branch in by_branch]

    def resolve_base_branch(self) -> str:
        """Branch a new worktree starts from when none is configured.

        The current branch wins; otherwise the repository default branch,
        otherwise "main".
        """
        if self.config.base_branch:
            return self.config.base_branch

        try:
            return self.git_ops.current_branch()
        except GitOperationError as e:
            logger.warning(f"Failed to get current branch, trying repository default: {e}")

        return self.github_service.get_default_branch()

    def create_worktree(
        self, branch_name: str, base_branch: Optional[str] = None, force: bool = False
    ) -> str:
        """Create ``branch_name`` from the remote base branch in a new worktree.

        Validation and the existence check happen before anything is changed.

        Returns:
            Path of the new worktree

        Raises:
            ValidationError: If the branch name is invalid
            WorktreeExistsError: If the target directory exists and ``force`` is off
            GitOperationError: If fetching or adding the worktree fails
        """
        BranchValidationService.validate_branch_name(branch_name)

        path = self.worktree_path(branch_name)
        if not force and os.path.exists(path):
            raise WorktreeExistsError(path)

        base = base_branch or self.resolve_base_branch()

        os.makedirs(self.worktree_dir, exist_ok=True)
        self.git_ops.fetch()
        self.git_ops.add_worktree(path, branch_name, f"{self.config.remote_name}/{base}")

        result = self.copy_config_files(path)
        for name, error in result.failed.items():
            logger.warning(f"Failed to copy {name} into {path}: {error}")

        return path

    def copy_config_files(self, dest_path: str) -> CopyResult:
        """Copy configured dotfiles from the repository root, best effort."""
        result = CopyResult()
        for name in self.config.config_files:
            src = os.path.join(self.repo_root, name)
            if not os.path.isfile(src):
                continue
            try:
                shutil.copy2(src, os.path.join(dest_path, name))
                result.copied.append(name)
            except OSError as e:
                result.failed[name] = str(e)
        logger.debug(f"Copied {result.copied} into {dest_path}")
        return result

    def remove_worktree(self, branch_name: str, keep_branch: bool = False) -> RemoveResult:
        """Remove the worktree of ``branch_name`` and, unless kept, the branch.

        A plain removal that git refuses is retried with ``--force``.
        Failure to delete the branch afterwards is reported in the result.

        Raises:
            GitOperationError: If the worktree cannot be removed
        """
        path = self.worktree_path(branch_name)

        try:
            self.git_ops.remove_worktree(path)
        except GitOperationError as e:
            logger.info(f"Retrying removal of {path} with --force: {e}")
            self.git_ops.remove_worktree(path, force=True)

        result = RemoveResult(path=path, branch=branch_name)
        if keep_branch:
            return result

        try:
            self.git_ops.delete_branch(branch_name)
            result.branch_deleted = True
        except GitOperationError as e:
            logger.warning(f"Failed to delete branch '{branch_name}': {e}")
            result.branch_error = str(e)

        return result

    def prune(self) -> str:
        """Prune administrative files of worktrees whose directories are gone."""
        return self.git_ops.prune_worktrees()
