"""Remote issue gateway used by the sync orchestrator."""

from typing import Protocol

from linearsync.linear.client import LinearClient
from linearsync.linear.issues import IssueCreator
from linearsync.linear.projects import ProjectManager
from linearsync.models import LinearIssue, LinearProject, Task


class IssueGateway(Protocol):
    """Capability to find/create projects and create issues in a team."""

    async def find_or_create_project(
        self,
        scope_id: str,
        name: str,
        description: str | None = None,
    ) -> LinearProject: ...

    async def create_issue(
        self,
        scope_id: str,
        task: Task,
        project_id: str | None = None,
    ) -> LinearIssue: ...


class LinearGateway:
    """IssueGateway backed by the Linear GraphQL API."""

    def __init__(self, client: LinearClient):
        self.projects = ProjectManager(client)
        self.issues = IssueCreator(client)

    async def find_or_create_project(
        self,
        scope_id: str,
        name: str,
        description: str | None = None,
    ) -> LinearProject:
        return await self.projects.find_or_create_project(scope_id, name, description)

    async def create_issue(
        self,
        scope_id: str,
        task: Task,
        project_id: str | None = None,
    ) -> LinearIssue:
        return await self.issues.create_issue(scope_id, task, project_id)
