"""Linear issue creation from parsed tasks."""

import structlog

from linearsync.errors import APIError
from linearsync.linear.client import LinearClient
from linearsync.models import LinearIssue, Task

log = structlog.get_logger()


def format_description(task: Task) -> str:
    """Build the markdown body of the issue created for a task."""
    desc = f"**Task ID**: {task.id}\n"
    if task.user_story:
        desc += f"**User Story**: {task.user_story}\n"
    if task.phase:
        desc += f"**Phase**: {task.phase}\n"
    desc += f"\n{task.description}\n"
    if task.file_path:
        desc += f"\n**File**: `{task.file_path}`\n"
    desc += "\n---\n_Synced from tasks.md_"
    return desc


class IssueCreator:
    """Creates Linear issues for tasks."""

    def __init__(self, client: LinearClient):
        self.client = client

    async def create_issue(
        self,
        team_id: str,
        task: Task,
        project_id: str | None = None,
    ) -> LinearIssue:
        """Create one issue for a task.

        No duplicate check is made here; callers consult the mapping store.

        Raises:
            APIError: If Linear does not report success.
        """
        mutation = """
        mutation CreateIssue($input: IssueCreateInput!) {
            issueCreate(input: $input) {
                success
                issue {
                    id
                    identifier
                    title
                    description
                    url
                    state {
                        id
                        name
                        type
                    }
                    createdAt
                    updatedAt
                }
            }
        }
        """
        input_data = {
            "teamId": team_id,
            "title": task.title,
            "description": format_description(task),
        }
        if project_id:
            input_data["projectId"] = project_id

        data = await self.client.request(mutation, {"input": input_data})
        result = data.get("issueCreate") or {}
        if not result.get("success") or not result.get("issue"):
            raise APIError(f"Failed to create issue: {task.title}", 400)

        issue = LinearIssue.from_api(result["issue"])
        log.debug("linear_issue_created", task_id=task.id, identifier=issue.identifier)
        return issue
