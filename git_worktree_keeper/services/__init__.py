"""Services for git-worktree-keeper."""

from .branch_validation_service import BranchValidationService
from .worktree_status_service import WorktreeStatusService
from .display_service import DisplayService
from .github_service import GitHubService

__all__ = [
    "BranchValidationService",
    "WorktreeStatusService",
    "DisplayService",
    "GitHubService",
]
