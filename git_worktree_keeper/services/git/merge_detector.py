"""Merged branch detection for git-worktree-keeper."""

from typing import List, Optional, Sequence, TYPE_CHECKING, Union

from git_worktree_keeper.constants import DEFAULT_MERGE_BASE_CANDIDATES, DEFAULT_PROTECTED_BRANCHES
from git_worktree_keeper.exceptions import GitOperationError
from git_worktree_keeper.services.branch_validation_service import BranchValidationService
from git_worktree_keeper.logging_config import get_logger

if TYPE_CHECKING:
    from git_worktree_keeper.config import Config
    from git_worktree_keeper.services.git.operations import GitOperations

logger = get_logger(__name__)

# Markers git puts in front of branch names: current branch, checked out elsewhere
BRANCH_MARKERS = ("* ", "+ ")


class MergeDetector:
    """Find local branches fully merged into the upstream base branch."""

    def __init__(self, git_ops: "GitOperations", config: Union["Config", dict]):
        """Initialize the merge detector.

        Args:
            git_ops: Git collaborator used for ``git branch --merged``
            config: Configuration dictionary or Config object
        """
        self.git_ops = git_ops
        self.config = config
        self.protected_branches = config.get("protected_branches", DEFAULT_PROTECTED_BRANCHES)
        self.remote_name = config.get("remote_name", git_ops.remote_name)

    def parse_branch_list(self, output: str) -> List[str]:
        """Parse ``git branch`` output, dropping markers, blanks and protected names."""
        branches = []
        for line in output.split("\n"):
            branch = line.strip()
            for marker in BRANCH_MARKERS:
                if branch.startswith(marker):
                    branch = branch[len(marker):].strip()
                    break
            if not branch:
                continue
            if BranchValidationService.is_protected(branch, self.protected_branches):
                logger.debug(f"Skipping protected branch {branch}")
                continue
            branches.append(branch)
        return branches

    def get_merged_branches(self, candidates: Optional[Sequence[str]] = None) -> List[str]:
        """Branches merged into the first base candidate whose upstream ref answers.

        Results of different candidates are never combined.

        Args:
            candidates: Base branch names to try in order (default: main, master)

        Returns:
            Merged branch names, protected branches excluded

        Raises:
            GitOperationError: If the query fails for every candidate
        """
        if candidates is None:
            candidates = self.config.get("merge_base_candidates", DEFAULT_MERGE_BASE_CANDIDATES)

        errors = []
        for base in candidates:
            base_ref = f"{self.remote_name}/{base}"
            try:
                output = self.git_ops.merged_branches(base_ref)
            except GitOperationError as e:
                logger.debug(f"Could not list branches merged into {base_ref}: {e}")
                errors.append(base_ref)
                continue

            branches = self.parse_branch_list(output)
            logger.debug(f"Found {len(branches)} branches merged into {base_ref}")
            return branches

        raise GitOperationError(
            "branch",
            ["--merged"],
            f"no base branch found (tried {', '.join(errors) or 'nothing'})",
        )
