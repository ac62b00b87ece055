"""tasks.md parsing and discovery."""

from linearsync.tasks.finder import find_file_upwards, find_tasks_file
from linearsync.tasks.parser import (
    extract_project_name,
    iter_tasks,
    parse_dependencies,
    parse_tasks,
)

__all__ = [
    "extract_project_name",
    "find_file_upwards",
    "find_tasks_file",
    "iter_tasks",
    "parse_dependencies",
    "parse_tasks",
]
