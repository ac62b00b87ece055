"""tasks.md parser for task extraction."""

import re
from collections.abc import Iterator

from linearsync.models import Task

# "## Phase 1: Setup"
PHASE_HEADING = re.compile(r"^##\s+Phase\s+\d+:", re.IGNORECASE)

# "- [ ] T001 [P] [US1] Create model in src/models/user.py"
TASK_LINE = re.compile(r"^-\s+\[([ xX])\]\s+(T\d+)\s+(.+)$")

# "# Tasks: Linear-GitHub Automation"
PROJECT_HEADING = re.compile(r"^#\s+Tasks:\s*(.+)$", re.MULTILINE)

PARALLEL_MARKER = "[P]"
USER_STORY_MARKER = re.compile(r"\[US(\d+)\]")
FILE_PATH = re.compile(r"\bin\s+([\w/.-]+\.\w+)")
TASK_REFERENCE = re.compile(r"\bT\d+\b")


def extract_project_name(content: str) -> str | None:
    """Extract the project name from the ``# Tasks: <name>`` heading.

    Args:
        content: tasks.md content.

    Returns:
        Project name, or None if the file has no such heading.
    """
    match = PROJECT_HEADING.search(content)
    if not match:
        return None
    return match.group(1).strip() or None


def parse_dependencies(text: str, task_id: str | None = None) -> tuple[str, ...]:
    """Extract task IDs referenced in a task's text.

    Args:
        text: Task text.
        task_id: ID of the task itself, which is never its own dependency.

    Returns:
        Referenced task IDs in order of first appearance.
    """
    found: list[str] = []
    for ref in TASK_REFERENCE.findall(text):
        if ref != task_id and ref not in found:
            found.append(ref)
    return tuple(found)


def clean_title(text: str) -> str:
    """Strip ``[P]`` and ``[US<n>]`` markers from task text, then trim the ends.

    Inner whitespace is left as is.
    """
    title = text.replace(PARALLEL_MARKER, "")
    title = USER_STORY_MARKER.sub("", title)
    return title.strip()


def parse_task_line(line: str, phase: str = "") -> Task | None:
    """Parse a single checklist line into a Task.

    Args:
        line: One line of tasks.md.
        phase: Phase heading the line belongs to.

    Returns:
        Task, or None if the line is not a task line.
    """
    match = TASK_LINE.match(line.rstrip("\r"))
    if not match:
        return None

    # Checkbox state is not kept; only existence matters for sync
    _, task_id, rest = match.groups()

    user_story = None
    story_match = USER_STORY_MARKER.search(rest)
    if story_match:
        user_story = f"US{story_match.group(1)}"

    file_path = None
    path_match = FILE_PATH.search(rest)
    if path_match:
        file_path = path_match.group(1)

    title = clean_title(rest)

    return Task(
        id=task_id,
        title=title,
        description=title,
        phase=phase,
        user_story=user_story,
        is_parallel=PARALLEL_MARKER in rest,
        file_path=file_path,
        dependencies=parse_dependencies(rest, task_id),
    )


def iter_tasks(content: str) -> Iterator[Task]:
    """Yield tasks from tasks.md content in file order.

    Lines that are neither phase headings nor task lines are skipped.
    """
    phase = ""
    for line in content.splitlines():
        if PHASE_HEADING.match(line):
            phase = re.sub(r"^##\s+", "", line).strip()
            continue

        task = parse_task_line(line, phase)
        if task:
            yield task


def parse_tasks(content: str) -> list[Task]:
    """Parse tasks.md content into tasks.

    Args:
        content: Markdown content.

    Returns:
        Tasks in the order they appear.
    """
    return list(iter_tasks(content))
