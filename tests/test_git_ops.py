"""Tests for git branch operations."""

from pathlib import Path

import pytest
from git import Repo

from linearsync.git_ops import GitOperations


@pytest.fixture
def repo(tmp_path: Path) -> Repo:
    """Create a repository with one commit."""
    repo = Repo.init(tmp_path)
    with repo.config_writer() as config:
        config.set_value("user", "name", "Test User")
        config.set_value("user", "email", "test@example.com")
    (tmp_path / "README.md").write_text("test\n")
    repo.index.add(["README.md"])
    repo.index.commit("initial commit")
    return repo


class TestGitOperations:
    """Test GitOperations."""

    def test_not_a_repository(self, tmp_path: Path):
        """Test a plain directory is rejected."""
        with pytest.raises(ValueError):
            GitOperations(tmp_path / "missing")

    def test_start_new_branch(self, repo: Repo, tmp_path: Path):
        """Test a missing branch is created and checked out."""
        git = GitOperations(tmp_path)
        result = git.start_branch("ABC-1-create-project-structure")

        assert result["created"] is True
        assert git.current_branch() == "ABC-1-create-project-structure"

    def test_start_existing_branch(self, repo: Repo, tmp_path: Path):
        """Test an existing branch is checked out, not recreated."""
        git = GitOperations(tmp_path)
        original = git.current_branch()
        git.start_branch("ABC-2-thing")
        git.start_branch(original)

        result = git.start_branch("ABC-2-thing")

        assert result["created"] is False
        assert git.current_branch() == "ABC-2-thing"

    def test_subdirectory(self, repo: Repo, tmp_path: Path):
        """Test a path inside the working tree finds the repository."""
        sub = tmp_path / "src"
        sub.mkdir()
        assert GitOperations(sub).repo_path == tmp_path

    def test_start_branch_failure(self, repo: Repo, tmp_path: Path):
        """Test a refused checkout raises ValueError naming the branch."""
        git = GitOperations(tmp_path)
        with pytest.raises(ValueError, match="Failed to check out branch 'ABC-3-thing'"):
            git.start_branch("ABC-3-thing", base="no-such-ref")
        assert not git.branch_exists("ABC-3-thing")
