"""Shared fixtures for linearsync tests."""

from pathlib import Path

import pytest

from linearsync.errors import APIError
from linearsync.mapping import MappingStore
from linearsync.models import IssueState, LinearIssue, LinearProject, Task


class FakeGateway:
    """In-memory IssueGateway recording every call."""

    def __init__(self, prefix: str = "ABC"):
        self.prefix = prefix
        self.projects: dict[str, LinearProject] = {}
        self.project_calls: list[tuple[str, str, str | None]] = []
        self.issue_calls: list[str] = []
        self.failures: dict[str, Exception] = {}
        self.project_error: Exception | None = None
        self._next_number = 1

    async def find_or_create_project(
        self,
        scope_id: str,
        name: str,
        description: str | None = None,
    ) -> LinearProject:
        self.project_calls.append((scope_id, name, description))
        if self.project_error:
            raise self.project_error
        if name not in self.projects:
            self.projects[name] = LinearProject(
                id=f"project-{len(self.projects) + 1}",
                name=name,
                description=description,
            )
        return self.projects[name]

    async def create_issue(
        self,
        scope_id: str,
        task: Task,
        project_id: str | None = None,
    ) -> LinearIssue:
        self.issue_calls.append(task.id)
        if task.id in self.failures:
            raise self.failures[task.id]

        number = self._next_number
        self._next_number += 1
        identifier = f"{self.prefix}-{number}"
        return LinearIssue(
            id=f"uuid-{number}",
            identifier=identifier,
            title=task.title,
            description=task.description,
            url=f"https://linear.app/test/issue/{identifier}",
            state=IssueState(id="state-1", name="Todo", type="unstarted"),
        )


SAMPLE_TASKS = """# Tasks: Demo Project

## Phase 1: Setup

- [ ] T001 Create project structure
- [x] T002 [P] Configure linting in pyproject.toml

## Phase 2: User Story 1

- [ ] T003 [US1] Add user model in src/models/user.py
"""


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def store(tmp_path: Path) -> MappingStore:
    return MappingStore(tmp_path / ".specify" / "linear-mapping.json")


@pytest.fixture
def tasks_file(tmp_path: Path) -> Path:
    path = tmp_path / "tasks.md"
    path.write_text(SAMPLE_TASKS, encoding="utf-8")
    return path


@pytest.fixture
def server_error() -> APIError:
    return APIError("Internal server error", 500)
