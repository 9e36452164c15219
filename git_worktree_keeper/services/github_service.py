"""GitHub API integration service"""

import re
from typing import Optional, Tuple, TYPE_CHECKING, Union

from github import Auth, Github, GithubException

from git_worktree_keeper.constants import DEFAULT_BRANCH_FALLBACKS
from git_worktree_keeper.exceptions import GitOperationError
from git_worktree_keeper.logging_config import get_logger

if TYPE_CHECKING:
    from git_worktree_keeper.config import Config
    from git_worktree_keeper.services.git.operations import GitOperations

logger = get_logger(__name__)

SSH_URL_RE = re.compile(r"git@github\.com:([^/]+)/(.+?)(?:\.git)?$")
HTTPS_URL_RE = re.compile(r"https://github\.com/([^/]+)/(.+?)(?:\.git)?$")


def parse_github_url(url: str) -> Optional[Tuple[str, str]]:
    """
    Extract owner and repository name from a GitHub remote URL.

    Args:
        url: SSH (git@github.com:owner/repo.git) or HTTPS remote URL

    Returns:
        (owner, repo) or None when the URL is not a GitHub URL
    """
    url = url.strip()
    for pattern in (SSH_URL_RE, HTTPS_URL_RE):
        match = pattern.match(url)
        if match:
            return match.group(1), match.group(2)
    return None


class GitHubService:
    """Looks up the repository default branch on GitHub, with a local fallback."""

    def __init__(self, git_ops: "GitOperations", config: Union["Config", dict]):
        self.git_ops = git_ops
        self.config = config
        self.github_token = config.get("github_token")
        self.remote_name = config.get("remote_name", git_ops.remote_name)

    def get_default_branch(self) -> str:
        """Default branch of the origin repository.

        Uses the GitHub API when a token is configured and the remote is a
        GitHub URL; any failure falls back to inspecting local remote refs.
        """
        if not self.github_token:
            logger.debug("[GitHub] No token, using local default branch detection")
            return self.fallback_default_branch()

        try:
            remote_url = self.git_ops.remote_url()
        except GitOperationError as e:
            logger.debug(f"[GitHub] Could not read remote URL: {e}")
            return self.fallback_default_branch()

        repo_info = parse_github_url(remote_url)
        if repo_info is None:
            logger.debug(f"[GitHub] Not a GitHub remote: {remote_url}")
            return self.fallback_default_branch()

        owner, repo = repo_info
        try:
            github = Github(auth=Auth.Token(self.github_token))
            default_branch = github.get_repo(f"{owner}/{repo}").default_branch
            logger.debug(f"[GitHub] Default branch of {owner}/{repo}: {default_branch}")
            return default_branch
        except GithubException as e:
            logger.warning(f"[GitHub] Could not read default branch of {owner}/{repo}: {e}")
        except Exception as e:
            # Network errors surface as requests exceptions
            logger.warning(f"[GitHub] Request failed: {e}")

        return self.fallback_default_branch()

    def fallback_default_branch(self) -> str:
        """First well-known branch present on the remote, else "main"."""
        for branch in DEFAULT_BRANCH_FALLBACKS:
            if self.git_ops.ref_exists(f"{self.remote_name}/{branch}"):
                return branch
        return DEFAULT_BRANCH_FALLBACKS[0]
