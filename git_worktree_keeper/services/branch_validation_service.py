"""Branch name validation and protection rules for git-worktree-keeper."""

from typing import List

from git_worktree_keeper.constants import (
    DETACHED_BRANCH,
    FALLBACK_BRANCH_NAME,
    INVALID_BRANCH_SUBSTRINGS,
)
from git_worktree_keeper.exceptions import ValidationError

REFS_PREFIX = "refs/"


class BranchValidationService:
    """Service for validating branch names and branch operations."""

    @staticmethod
    def validate_branch_name(name: str) -> None:
        """
        Validate a branch name against git naming rules.

        Args:
            name: Candidate branch name

        Raises:
            ValidationError: If any rule rejects the name
        """
        problems = BranchValidationService.find_problems(name)
        if problems:
            raise ValidationError("branch_name", name, "; ".join(problems))

    @staticmethod
    def find_problems(name: str) -> List[str]:
        """
        List every rule a branch name breaks.

        Args:
            name: Candidate branch name

        Returns:
            Human readable problems, empty when the name is valid
        """
        if name == "":
            return ["name is empty"]

        problems = []
        if " " in name:
            problems.append("contains a space")
        for char in INVALID_BRANCH_SUBSTRINGS:
            if char in name:
                problems.append(f"contains {char!r}")
        if name.startswith("-") or name.endswith("-"):
            problems.append("starts or ends with '-'")
        if name.startswith(".") or name.endswith("."):
            problems.append("starts or ends with '.'")
        if name.lower() == DETACHED_BRANCH.lower():
            problems.append("is reserved")
        if name.startswith(REFS_PREFIX):
            problems.append(f"starts with {REFS_PREFIX!r}")
        return problems

    @staticmethod
    def is_valid_branch_name(name: str) -> bool:
        """Check a branch name without raising."""
        return not BranchValidationService.find_problems(name)

    @staticmethod
    def sanitize_branch_name(name: str) -> str:
        """
        Turn an arbitrary string into a valid branch name.

        Args:
            name: Any string

        Returns:
            A name accepted by validate_branch_name, "unnamed-branch" when
            nothing usable is left
        """
        name = name.strip()
        name = name.replace(" ", "-").replace("_", "-")
        for char in INVALID_BRANCH_SUBSTRINGS:
            name = name.replace(char, "-")
        name = name.strip("-.")

        while name.startswith(REFS_PREFIX):
            name = name[len(REFS_PREFIX):].strip("-.")

        if not name or name.lower() == DETACHED_BRANCH.lower():
            return FALLBACK_BRANCH_NAME
        return name

    @staticmethod
    def is_protected(branch_name: str, protected_branches: List[str]) -> bool:
        """
        Check if a branch is protected.

        Args:
            branch_name: Name of the branch
            protected_branches: List of protected branch names

        Returns:
            True if branch is protected
        """
        return branch_name in protected_branches
