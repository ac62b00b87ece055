"""Linear project lookup and creation."""

import structlog

from linearsync.errors import APIError
from linearsync.linear.client import LinearClient
from linearsync.models import LinearProject

log = structlog.get_logger()

DEFAULT_PROJECT_DESCRIPTION = "Automated project created from tasks.md sync"

PROJECT_FIELDS = """
    id
    name
    description
    state
    url
    createdAt
    updatedAt
"""


class ProjectManager:
    """Finds and creates Linear projects within a team."""

    def __init__(self, client: LinearClient):
        self.client = client

    async def find_project_by_name(self, team_id: str, name: str) -> LinearProject | None:
        """Find a project by exact name in a team.

        Returns:
            The project, or None when the team has no project of that name.
        """
        query = f"""
        query FindProject($teamId: String!, $name: String!) {{
            team(id: $teamId) {{
                projects(filter: {{ name: {{ eq: $name }} }}) {{
                    nodes {{
                        {PROJECT_FIELDS}
                    }}
                }}
            }}
        }}
        """
        try:
            data = await self.client.request(query, {"teamId": team_id, "name": name})
        except Exception as e:
            log.error("project_lookup_failed", team_id=team_id, name=name, error=str(e))
            raise

        nodes = ((data.get("team") or {}).get("projects") or {}).get("nodes", [])
        # Exact name match only
        for node in nodes:
            if node.get("name") == name:
                return LinearProject.from_api(node)
        return None

    async def create_project(
        self,
        team_id: str,
        name: str,
        description: str | None = None,
    ) -> LinearProject:
        """Create a project in a team.

        Raises:
            APIError: If Linear does not report success.
        """
        mutation = f"""
        mutation CreateProject($input: ProjectCreateInput!) {{
            projectCreate(input: $input) {{
                success
                project {{
                    {PROJECT_FIELDS}
                }}
            }}
        }}
        """
        input_data = {
            "teamIds": [team_id],
            "name": name,
            "description": description or DEFAULT_PROJECT_DESCRIPTION,
        }

        try:
            data = await self.client.request(mutation, {"input": input_data})
        except Exception as e:
            log.error("project_create_failed", team_id=team_id, name=name, error=str(e))
            raise

        result = data.get("projectCreate") or {}
        if not result.get("success") or not result.get("project"):
            raise APIError(f"Failed to create project: {name}", 400)

        project = LinearProject.from_api(result["project"])
        log.info("project_created", project_id=project.id, name=name)
        return project

    async def find_or_create_project(
        self,
        team_id: str,
        name: str,
        description: str | None = None,
    ) -> LinearProject:
        """Return the team's project with this name, creating it if absent.

        The description is only used when a new project is created.
        """
        existing = await self.find_project_by_name(team_id, name)
        if existing:
            log.info("project_found", project_id=existing.id, name=name)
            return existing

        return await self.create_project(team_id, name, description)
