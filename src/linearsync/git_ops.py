"""Git operations for issue branches."""

from pathlib import Path

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError


class GitOperations:
    """Wrapper for the git operations the CLI needs."""

    def __init__(self, repo_path: str | Path):
        """Initialize with a path inside a repository.

        Args:
            repo_path: Path to the repository or one of its subdirectories.

        Raises:
            ValueError: If path is not inside a git repository.
        """
        try:
            self.repo = Repo(repo_path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise ValueError(f"Not a valid git repository: {repo_path}") from e
        self.repo_path = Path(self.repo.working_tree_dir or repo_path)

    def current_branch(self) -> str | None:
        """Name of the checked-out branch, or None when HEAD is detached."""
        if self.repo.head.is_detached:
            return None
        return self.repo.active_branch.name

    def branch_exists(self, branch_name: str) -> bool:
        return branch_name in [head.name for head in self.repo.heads]

    def start_branch(self, branch_name: str, base: str | None = None) -> dict:
        """Check out a branch, creating it first if it does not exist.

        Args:
            branch_name: Branch to switch to.
            base: Base ref for a new branch (defaults to HEAD).

        Returns:
            Dictionary with branch details.

        Raises:
            ValueError: If git refuses the checkout.
        """
        try:
            if self.branch_exists(branch_name):
                self.repo.git.checkout(branch_name)
                return {"branch": branch_name, "created": False}

            base = base or "HEAD"
            self.repo.git.checkout("-b", branch_name, base)
            return {"branch": branch_name, "base": base, "created": True}

        except GitCommandError as e:
            raise ValueError(
                f"Failed to check out branch '{branch_name}': {(e.stderr or str(e)).strip()}"
            ) from e
