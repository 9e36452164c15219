"""Pytest fixtures for git-worktree-keeper tests"""
import os
import tempfile
from pathlib import Path

import git
import pytest

from git_worktree_keeper.exceptions import GitOperationError


class FakeGitOperations:
    """Git collaborator returning canned output instead of running git.

    Values in the lookup tables may be exceptions, which are raised.
    """

    def __init__(self, repo_root="/repo", remote_name="origin"):
        self.repo_root = repo_root
        self.remote_name = remote_name
        self.worktree_listing = ""
        self.statuses = {}
        self.commits = {}
        self.divergences = {}
        self.merged = {}
        self.refs = set()
        self.current = "main"
        self.url = "git@github.com:test/test-repo.git"
        self.failures = {}
        self.calls = []

    def _call(self, name, *args):
        self.calls.append((name, *args))
        failure = self.failures.get(name)
        if isinstance(failure, list):
            failure = failure.pop(0) if failure else None
        if failure is not None:
            raise failure

    @staticmethod
    def _answer(value):
        if isinstance(value, Exception):
            raise value
        return value

    def called(self, name):
        return [call for call in self.calls if call[0] == name]

    def list_worktrees(self):
        self._call("list_worktrees")
        return self._answer(self.worktree_listing)

    def status(self, path):
        self._call("status", path)
        return self._answer(self.statuses.get(path, ""))

    def last_commit(self, path):
        self._call("last_commit", path)
        return self._answer(self.commits.get(path, ""))

    def divergence(self, path, upstream, local="HEAD"):
        self._call("divergence", path, upstream)
        key = (path, upstream)
        if key not in self.divergences:
            raise GitOperationError("rev-list", [f"{upstream}...{local}"], "unknown revision")
        return self._answer(self.divergences[key])

    def merged_branches(self, base_ref):
        self._call("merged_branches", base_ref)
        if base_ref not in self.merged:
            raise GitOperationError("branch", ["--merged", base_ref], "malformed object name")
        return self._answer(self.merged[base_ref])

    def current_branch(self):
        self._call("current_branch")
        return self._answer(self.current)

    def ref_exists(self, ref):
        self._call("ref_exists", ref)
        return ref in self.refs

    def remote_url(self):
        self._call("remote_url")
        return self._answer(self.url)

    def fetch(self):
        self._call("fetch")

    def add_worktree(self, path, branch, start_point):
        self._call("add_worktree", path, branch, start_point)

    def remove_worktree(self, path, force=False):
        self._call("remove_worktree", path, force)

    def delete_branch(self, branch):
        self._call("delete_branch", branch)

    def prune_worktrees(self):
        self._call("prune_worktrees")
        return ""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        # Resolve symlinks (/tmp -> /private/tmp) so paths match git's output
        yield Path(os.path.realpath(tmpdir))


@pytest.fixture
def mock_config():
    """Create a mock configuration dictionary."""
    return {
        'verbose': False,
        'debug': False,
        'protected_branches': ['main', 'master', 'develop', 'dev'],
        'merge_base_candidates': ['main', 'master'],
        'remote_name': 'origin',
        'output_format': 'table',
        'dry_run': False,
        'force': False,
        'github_token': None,
    }


@pytest.fixture
def fake_git():
    """Fake git collaborator rooted at /repo."""
    return FakeGitOperations()


@pytest.fixture
def disk_git(temp_dir):
    """Fake collaborator rooted at a real temporary directory."""
    return FakeGitOperations(repo_root=str(temp_dir))


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with an initial commit on main."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    repo.git.branch('-M', 'main')

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_remote(git_repo, temp_dir):
    """Real repository whose main branch is pushed to a bare 'origin'."""
    remote_path = temp_dir / "origin.git"
    git.Repo.init(remote_path, bare=True)

    git_repo.create_remote('origin', str(remote_path))
    git_repo.git.push('-u', 'origin', 'main')

    yield git_repo
