"""linearsync CLI entry point."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import structlog
from dotenv import load_dotenv

from linearsync import __version__
from linearsync.config import Settings, load_settings, print_missing_config_help
from linearsync.errors import ConfigurationError, LinearSyncError
from linearsync.git_ops import GitOperations
from linearsync.linear import LinearClient, LinearGateway
from linearsync.mapping import MappingStore
from linearsync.sync import SyncOrchestrator, extract_issue_id_from_branch
from linearsync.tasks import find_tasks_file

# ANSI color codes
RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"
CYAN = "\033[36m"

RECENT_MAPPINGS = 5


def configure_logging(level: str) -> None:
    """Configure structlog for the application."""
    # Configure stdlib logging
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def init_settings(root: Path) -> Settings:
    """Load .env and settings for a project root, then set up logging."""
    root = root.expanduser().resolve()

    # Load .env into os.environ for anything reading the environment directly
    env_file = root / ".env"
    if not env_file.exists():
        env_file = root / ".specify" / ".env"
    load_dotenv(env_file if env_file.exists() else None)

    settings = load_settings(root)
    configure_logging(settings.log_level)
    return settings


def resolve_tasks_file(settings: Settings, tasks_file: Path | None) -> Path | None:
    """Pick the tasks file: explicit flag, then TASKS_FILE, then discovery."""
    if tasks_file:
        return tasks_file.expanduser().resolve()
    if settings.tasks_file:
        return settings.linear_sync_root / settings.tasks_file
    return find_tasks_file(settings.linear_sync_root)


async def run_sync(root: Path, tasks_file: Path | None = None) -> int:
    """Sync tasks.md to Linear.

    Args:
        root: Project root directory.
        tasks_file: Optional explicit tasks.md path.

    Returns:
        Process exit code.
    """
    settings = init_settings(root)
    log = structlog.get_logger()

    try:
        settings.require_linear()
    except ConfigurationError as e:
        print_missing_config_help(e)
        return 1

    tasks_path = resolve_tasks_file(settings, tasks_file)
    if not tasks_path or not tasks_path.is_file():
        print(f"{RED}tasks.md not found.{RESET} Use --file or set TASKS_FILE.")
        return 1

    client = LinearClient(settings.linear_api_key, settings.linear_api_url)
    orchestrator = SyncOrchestrator(
        LinearGateway(client),
        settings.linear_team_id,
        MappingStore(settings.mapping_path),
        retry_attempts=settings.retry_attempts,
        retry_base_delay=settings.retry_base_delay,
    )

    log.info(
        "config_loaded",
        root=str(settings.linear_sync_root),
        mapping_path=str(settings.mapping_path),
    )

    try:
        report = await orchestrator.sync_tasks_file(tasks_path)
    except (LinearSyncError, OSError) as e:
        log.error("sync_failed", error=str(e), error_type=type(e).__name__)
        print(f"\n{RED}Sync failed:{RESET} {e}")
        return 1

    print()
    print(f"  {BOLD}Project:{RESET} {report.project.name}")
    print(f"  {GREEN}✓{RESET} Created: {report.created}")
    print(f"  {DIM}-{RESET} Skipped: {report.skipped}")
    if report.failed:
        print(f"  {RED}✗{RESET} Failed:  {report.failed} (re-run to retry)")
    print()
    return 0


def cmd_status(root: Path) -> int:
    """Show sync status and mapping statistics."""
    settings = init_settings(root)
    mappings = MappingStore(settings.mapping_path).load_all()

    print("\n=== Linear Sync Status ===\n")
    print(f"Total synced tasks: {len(mappings)}")

    if mappings:
        print("\nRecent mappings:")
        for m in mappings[-RECENT_MAPPINGS:]:
            print(f"  {m.task_id} → {m.linear_issue_id} ({m.branch_name})")

    print()
    return 0


def cmd_start_task(root: Path, ref: str | None) -> int:
    """Create and check out the branch of a synced task.

    Args:
        root: Project root directory.
        ref: Task ID (``T001``) or Linear issue ID (``ABC-123``). Lists the
            synced tasks when omitted.
    """
    settings = init_settings(root)
    store = MappingStore(settings.mapping_path)

    if not ref:
        mappings = store.load_all()
        if not mappings:
            print('No tasks found. Run "linearsync run" first.')
            return 1
        print("\nSynced tasks:")
        for m in mappings:
            print(f"  {CYAN}{m.task_id}{RESET}  {m.linear_issue_id}: {m.task_title}")
        print("\nRun: linearsync start-task <TASK_ID|ISSUE_ID>\n")
        return 0

    mapping = store.find_by_task_id(ref) or store.find_by_linear_issue_id(ref.upper())
    if not mapping:
        print(f"{RED}No synced task matches '{ref}'.{RESET}")
        return 1

    try:
        git = GitOperations(settings.linear_sync_root)
        result = git.start_branch(mapping.branch_name)
    except ValueError as e:
        print(f"{RED}Failed to switch branch:{RESET} {e}")
        return 1

    verb = "Created and switched to" if result["created"] else "Switched to"
    print(f"\n{GREEN}✓{RESET} {verb} branch: {BOLD}{mapping.branch_name}{RESET}")
    print(f"  Linear issue: {mapping.linear_issue_id}")
    print(f"  {mapping.linear_issue_url}\n")
    print("Commits on this branch will be tagged with the issue ID.\n")
    return 0


def cmd_issue_id(branch: str | None) -> int:
    """Print the Linear issue ID embedded in a branch name."""
    if not branch:
        try:
            branch = GitOperations(Path.cwd()).current_branch()
        except ValueError as e:
            print(str(e), file=sys.stderr)
            return 1

    issue_id = extract_issue_id_from_branch(branch or "")
    if not issue_id:
        return 1

    print(issue_id)
    return 0


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="linearsync",
        description="Sync tasks.md with Linear issues",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    run_parser = subparsers.add_parser("run", help="Sync tasks.md to Linear")
    run_parser.add_argument(
        "-f",
        "--file",
        type=Path,
        default=None,
        help="Path to tasks.md (default: discovered from the project root)",
    )
    run_parser.add_argument(
        "--root",
        type=Path,
        default=Path.cwd(),
        help="Project root directory (default: current directory)",
    )

    status_parser = subparsers.add_parser("status", help="Show sync status")
    status_parser.add_argument("--root", type=Path, default=Path.cwd())

    start_parser = subparsers.add_parser(
        "start-task",
        help="Create and check out the branch for a synced task",
    )
    start_parser.add_argument("ref", nargs="?", help="Task ID or Linear issue ID")
    start_parser.add_argument("--root", type=Path, default=Path.cwd())

    issue_parser = subparsers.add_parser(
        "issue-id",
        help="Print the Linear issue ID of the current branch",
    )
    issue_parser.add_argument("--branch", default=None, help="Branch name to inspect")

    args = parser.parse_args()

    if args.command == "run":
        code = asyncio.run(run_sync(args.root, args.file))
    elif args.command == "status":
        code = cmd_status(args.root)
    elif args.command == "start-task":
        code = cmd_start_task(args.root, args.ref)
    elif args.command == "issue-id":
        code = cmd_issue_id(args.branch)
    else:
        parser.print_help()
        code = 1

    sys.exit(code)


if __name__ == "__main__":
    main()
