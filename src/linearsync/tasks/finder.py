"""Locate tasks.md in a project tree."""

from pathlib import Path

import structlog

log = structlog.get_logger()

TASKS_FILE_NAME = "tasks.md"
MAX_DEPTH = 10
SPECS_MAX_DEPTH = 3


def find_file_upwards(filename: str, start_dir: Path | None = None) -> Path | None:
    """Search for a file in start_dir and its parents.

    Args:
        filename: File name to look for.
        start_dir: Directory to start from (defaults to cwd).

    Returns:
        Path to the file, or None if not found within MAX_DEPTH levels.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(MAX_DEPTH):
        candidate = current / filename
        if candidate.is_file():
            log.debug("file_found", path=str(candidate))
            return candidate
        if current.parent == current:
            break
        current = current.parent

    return None


def _find_in_directory(directory: Path, depth: int = 0) -> Path | None:
    """Search a directory for tasks.md, own files before subdirectories."""
    if depth >= SPECS_MAX_DEPTH:
        return None

    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        log.debug("directory_unreadable", path=str(directory), error=str(e))
        return None

    for entry in entries:
        if entry.is_file() and entry.name == TASKS_FILE_NAME:
            return entry

    for entry in entries:
        if entry.is_dir():
            found = _find_in_directory(entry, depth + 1)
            if found:
                return found

    return None


def find_tasks_file(start_dir: Path | None = None) -> Path | None:
    """Find tasks.md for a project.

    Looks for tasks.md from start_dir upwards, then inside any ``specs/``
    directory found on the way up (e.g. ``specs/001-feature/tasks.md``).

    Args:
        start_dir: Directory to start from (defaults to cwd).

    Returns:
        Path to tasks.md, or None.
    """
    start = (start_dir or Path.cwd()).resolve()

    found = find_file_upwards(TASKS_FILE_NAME, start)
    if found:
        return found

    current = start
    for _ in range(MAX_DEPTH):
        specs_dir = current / "specs"
        if specs_dir.is_dir():
            found = _find_in_directory(specs_dir)
            if found:
                log.debug("file_found", path=str(found))
                return found
        if current.parent == current:
            break
        current = current.parent

    log.info("tasks_file_not_found", start_dir=str(start))
    return None
