"""Linear API access."""

from linearsync.linear.client import LinearClient
from linearsync.linear.gateway import IssueGateway, LinearGateway
from linearsync.linear.issues import IssueCreator, format_description
from linearsync.linear.projects import ProjectManager

__all__ = [
    "IssueCreator",
    "IssueGateway",
    "LinearClient",
    "LinearGateway",
    "ProjectManager",
    "format_description",
]
