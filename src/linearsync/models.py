"""Pydantic models for linearsync entities."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _utc_now() -> datetime:
    """Get current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


def _parse_timestamp(value: str | None) -> datetime:
    """Parse an ISO-8601 timestamp as returned by the Linear API."""
    if not value:
        return _utc_now()
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class Task(BaseModel):
    """One checklist item parsed from tasks.md."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., pattern=r"^T\d+$")
    title: str
    description: str
    phase: str = ""
    user_story: str | None = None
    is_parallel: bool = False
    file_path: str | None = None
    dependencies: tuple[str, ...] = ()


class TaskMapping(BaseModel):
    """Persisted link between a local task and the Linear issue created for it.

    Serialized with camelCase keys so the mapping file stays readable by
    other tools sharing the same ``.specify`` directory.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    task_id: str
    task_title: str
    linear_issue_id: str
    linear_issue_uuid: str
    linear_issue_url: str
    branch_name: str
    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)


class IssueState(BaseModel):
    """Workflow state of a Linear issue."""

    id: str = ""
    name: str = ""
    type: str = ""


class LinearIssue(BaseModel):
    """Linear issue as returned by the API."""

    id: str
    identifier: str
    title: str
    description: str = ""
    url: str = ""
    state: IssueState = Field(default_factory=IssueState)
    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "LinearIssue":
        """Create from Linear API response."""
        state = data.get("state") or {}
        return cls(
            id=data["id"],
            identifier=data["identifier"],
            title=data["title"],
            description=data.get("description") or "",
            url=data.get("url") or "",
            state=IssueState(
                id=state.get("id", ""),
                name=state.get("name", ""),
                type=state.get("type", ""),
            ),
            created_at=_parse_timestamp(data.get("createdAt")),
            updated_at=_parse_timestamp(data.get("updatedAt")),
        )


class LinearProject(BaseModel):
    """Linear project grouping the issues of one tasks file."""

    id: str
    name: str
    description: str | None = None
    state: str = ""
    url: str = ""
    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "LinearProject":
        """Create from Linear API response."""
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description") or None,
            state=data.get("state") or "",
            url=data.get("url") or "",
            created_at=_parse_timestamp(data.get("createdAt")),
            updated_at=_parse_timestamp(data.get("updatedAt")),
        )


class SyncEventType(str, Enum):
    """Outcome of reconciling one task."""

    CREATE = "create"
    SKIP = "skip"
    FAIL = "fail"


class SyncEvent(BaseModel):
    """Record of what a sync run did with one task."""

    type: SyncEventType
    task_id: str
    linear_issue_id: str | None = None
    timestamp: datetime = Field(default_factory=_utc_now)
    success: bool = True
    error: str | None = None


class SyncReport(BaseModel):
    """Result of one sync run."""

    tasks_file: str
    project: LinearProject
    events: list[SyncEvent] = Field(default_factory=list)

    def _count(self, event_type: SyncEventType) -> int:
        return sum(1 for e in self.events if e.type == event_type)

    @property
    def created(self) -> int:
        return self._count(SyncEventType.CREATE)

    @property
    def skipped(self) -> int:
        return self._count(SyncEventType.SKIP)

    @property
    def failed(self) -> int:
        return self._count(SyncEventType.FAIL)
