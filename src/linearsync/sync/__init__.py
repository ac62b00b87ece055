"""Task-to-issue synchronization."""

from linearsync.sync.branches import (
    extract_issue_id_from_branch,
    extract_issue_id_from_commit,
    generate_branch_name,
    slugify,
)
from linearsync.sync.orchestrator import DEFAULT_PROJECT_NAME, SyncOrchestrator, build_mapping
from linearsync.sync.retry import should_retry, with_retry

__all__ = [
    "DEFAULT_PROJECT_NAME",
    "SyncOrchestrator",
    "build_mapping",
    "extract_issue_id_from_branch",
    "extract_issue_id_from_commit",
    "generate_branch_name",
    "should_retry",
    "slugify",
    "with_retry",
]
