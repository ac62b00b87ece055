"""Branch names that embed the Linear issue identifier."""

import re

MAX_SLUG_LENGTH = 50

ISSUE_ID = re.compile(r"[A-Z]+-[0-9]+")
COMMIT_ISSUE_PREFIX = re.compile(r"^([A-Z]+-[0-9]+):")


def slugify(text: str) -> str:
    """Lowercase, collapse non-alphanumeric runs to ``-``, trim, cap at 50 chars."""
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower())
    slug = slug.strip("-")
    return slug[:MAX_SLUG_LENGTH]


def generate_branch_name(issue_id: str, title: str) -> str:
    """Build the branch name for an issue.

    Example:
        >>> generate_branch_name("ABC-123", "Fix the Auth Bug!!")
        'ABC-123-fix-the-auth-bug'
    """
    return f"{issue_id}-{slugify(title)}"


def extract_issue_id_from_branch(branch_name: str) -> str | None:
    """Return the first issue identifier in a branch name."""
    match = ISSUE_ID.search(branch_name)
    return match.group(0) if match else None


def extract_issue_id_from_commit(message: str) -> str | None:
    """Return the issue identifier a commit message is prefixed with (``ABC-123: ...``)."""
    match = COMMIT_ISSUE_PREFIX.match(message)
    return match.group(1) if match else None
