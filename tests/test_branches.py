"""Tests for branch name helpers."""

from linearsync.sync.branches import (
    extract_issue_id_from_branch,
    extract_issue_id_from_commit,
    generate_branch_name,
    slugify,
)


class TestSlugify:
    """Test slugify."""

    def test_basic(self):
        """Test lowercasing and hyphenation."""
        assert slugify("Fix the Auth Bug!!") == "fix-the-auth-bug"

    def test_collapses_and_trims(self):
        """Test runs collapse and edges are trimmed."""
        assert slugify("  --Hello,   World__ ") == "hello-world"

    def test_truncates_to_fifty(self):
        """Test slugs are capped at 50 characters."""
        slug = slugify("word " * 30)
        assert len(slug) == 50

    def test_empty(self):
        """Test text without alphanumerics yields an empty slug."""
        assert slugify("!!!") == ""


class TestBranchNames:
    """Test branch name generation and issue ID extraction."""

    def test_generate_branch_name(self):
        """Test the issue ID prefixes the slug."""
        branch = generate_branch_name("ABC-123", "Fix the Auth Bug!!")
        assert branch == "ABC-123-fix-the-auth-bug"

    def test_extract_from_branch(self):
        """Test the issue ID is found in a branch name."""
        assert extract_issue_id_from_branch("ABC-123-fix-the-auth-bug") == "ABC-123"
        assert extract_issue_id_from_branch("feature/ENG-42-thing") == "ENG-42"
        assert extract_issue_id_from_branch("main") is None

    def test_extract_from_commit(self):
        """Test only a leading 'ID:' prefix counts."""
        assert extract_issue_id_from_commit("ABC-123: fix login") == "ABC-123"
        assert extract_issue_id_from_commit("fix login for ABC-123") is None
