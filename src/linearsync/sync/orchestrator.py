"""Reconcile tasks.md against the mapping store and Linear."""

import asyncio
from datetime import datetime, timezone
from pathlib import Path

import structlog

from linearsync.errors import ConfigurationError
from linearsync.linear.gateway import IssueGateway
from linearsync.mapping import MappingStore
from linearsync.models import (
    LinearIssue,
    LinearProject,
    SyncEvent,
    SyncEventType,
    SyncReport,
    Task,
    TaskMapping,
)
from linearsync.sync.branches import generate_branch_name
from linearsync.sync.retry import with_retry
from linearsync.tasks import extract_project_name, parse_tasks

log = structlog.get_logger()

DEFAULT_PROJECT_NAME = "Linear-GitHub Automation"


def build_mapping(task: Task, issue: LinearIssue) -> TaskMapping:
    """Create the mapping recorded after an issue was created for a task."""
    now = datetime.now(timezone.utc)
    return TaskMapping(
        task_id=task.id,
        task_title=task.title,
        linear_issue_id=issue.identifier,
        linear_issue_uuid=issue.id,
        linear_issue_url=issue.url,
        branch_name=generate_branch_name(issue.identifier, task.title),
        created_at=now,
        updated_at=now,
    )


class SyncOrchestrator:
    """Creates one Linear issue per task that has no mapping yet.

    A task ID is sent to Linear at most once for the lifetime of the mapping
    store: each created issue is recorded immediately, and tasks that already
    have a mapping are skipped. Tasks are processed sequentially.
    """

    def __init__(
        self,
        gateway: IssueGateway,
        team_id: str,
        store: MappingStore,
        retry_attempts: int = 3,
        retry_base_delay: float = 1.0,
    ):
        """Initialize the orchestrator.

        Args:
            gateway: Remote issue gateway.
            team_id: Linear team issues and the project are created in.
            store: Mapping store.
            retry_attempts: Attempts per gateway call.
            retry_base_delay: Initial backoff delay in seconds.

        Raises:
            ConfigurationError: If team_id is empty.
        """
        if not team_id:
            raise ConfigurationError("LINEAR_TEAM_ID is required")

        self.gateway = gateway
        self.team_id = team_id
        self.store = store
        self.retry_attempts = retry_attempts
        self.retry_base_delay = retry_base_delay

    async def sync_tasks_file(self, tasks_file: Path) -> SyncReport:
        """Sync a tasks.md file.

        Args:
            tasks_file: Path to tasks.md.

        Returns:
            Report of what happened to each task.

        Raises:
            OSError: If the tasks file cannot be read or a mapping cannot be saved.
            LinearSyncError: If the project cannot be resolved.
        """
        tasks_file = Path(tasks_file)
        log.info("sync_starting", tasks_file=str(tasks_file))

        content = await asyncio.to_thread(tasks_file.read_text, encoding="utf-8")
        return await self.sync_content(content, source=str(tasks_file))

    async def sync_content(self, content: str, source: str = "tasks.md") -> SyncReport:
        """Sync tasks.md content already read into memory."""
        tasks = parse_tasks(content)
        log.info("tasks_parsed", task_count=len(tasks), source=source)

        project = await self.resolve_project(content, source)
        report = SyncReport(tasks_file=source, project=project)

        for task in tasks:
            report.events.append(await self.sync_task(task, project))

        log.info(
            "sync_completed",
            created=report.created,
            skipped=report.skipped,
            failed=report.failed,
        )
        return report

    async def resolve_project(self, content: str, source: str) -> LinearProject:
        """Find or create the project named by the ``# Tasks:`` heading."""
        project_name = extract_project_name(content) or DEFAULT_PROJECT_NAME
        log.info("project_resolving", project_name=project_name)

        project = await with_retry(
            lambda: self.gateway.find_or_create_project(
                self.team_id,
                project_name,
                f"Automated project created from {source}",
            ),
            self.retry_attempts,
            self.retry_base_delay,
        )
        log.info("project_resolved", project_id=project.id, project_name=project.name)
        return project

    async def sync_task(self, task: Task, project: LinearProject) -> SyncEvent:
        """Create and record an issue for one task unless it is already mapped.

        Gateway failures are logged and reported; mapping-store write errors
        propagate.
        """
        existing = self.store.find_by_task_id(task.id)
        if existing:
            log.info("task_skipped", task_id=task.id, linear_issue_id=existing.linear_issue_id)
            return SyncEvent(
                type=SyncEventType.SKIP,
                task_id=task.id,
                linear_issue_id=existing.linear_issue_id,
            )

        try:
            issue = await with_retry(
                lambda: self.gateway.create_issue(self.team_id, task, project.id),
                self.retry_attempts,
                self.retry_base_delay,
            )
        except Exception as e:
            log.error("issue_create_failed", task_id=task.id, error=str(e))
            return SyncEvent(
                type=SyncEventType.FAIL,
                task_id=task.id,
                success=False,
                error=str(e),
            )

        self.store.append(build_mapping(task, issue))
        log.info(
            "issue_created",
            task_id=task.id,
            linear_issue_id=issue.identifier,
            project_id=project.id,
        )
        return SyncEvent(
            type=SyncEventType.CREATE,
            task_id=task.id,
            linear_issue_id=issue.identifier,
        )
