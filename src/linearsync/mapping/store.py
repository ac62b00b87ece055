"""JSON store for task-to-issue mappings.

The store is a single JSON array of TaskMapping objects. Encoding and
decoding are pure functions over bytes; ``MappingStore`` only adds file
access on an explicitly given path.
"""

import contextlib
import os
import tempfile
from pathlib import Path

import structlog
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from linearsync.errors import ValidationError
from linearsync.models import TaskMapping

log = structlog.get_logger()

_MAPPINGS = TypeAdapter(list[TaskMapping])


def encode_mappings(mappings: list[TaskMapping]) -> bytes:
    """Serialize mappings to the on-disk JSON format.

    Timestamps are written as ISO-8601 strings, keys in camelCase.
    """
    return _MAPPINGS.dump_json(mappings, by_alias=True, indent=2) + b"\n"


def decode_mappings(data: bytes) -> list[TaskMapping]:
    """Parse the on-disk JSON format.

    Raises:
        ValidationError: If the data is not a JSON array of mappings.
    """
    try:
        return _MAPPINGS.validate_json(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid mapping data: {e}") from e


class MappingStore:
    """Durable table of TaskMapping records.

    Reads never fail: a missing or unreadable file is treated as "nothing
    synced yet". Writes replace the whole file atomically and propagate
    errors, because a mapping that silently failed to persist would lead to
    a duplicate issue on the next run.

    Not safe for concurrent writers; callers running several syncs against
    the same file must serialize them.

    Example:
        >>> store = MappingStore(Path(".specify/linear-mapping.json"))
        >>> store.find_by_task_id("T001")
    """

    def __init__(self, path: Path):
        """Initialize the store.

        Args:
            path: Location of the mapping JSON file.
        """
        self.path = Path(path)

    def load_all(self) -> list[TaskMapping]:
        """Load every mapping, or an empty list if the file is absent or corrupt."""
        if not self.path.exists():
            return []

        try:
            return decode_mappings(self.path.read_bytes())
        except (OSError, ValidationError) as e:
            log.error("mapping_load_failed", path=str(self.path), error=str(e))
            return []

    def save_all(self, mappings: list[TaskMapping]) -> None:
        """Replace the store contents with the given mappings.

        Raises:
            OSError: If the file cannot be written.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = encode_mappings(mappings)

        fd, temp_path = tempfile.mkstemp(
            dir=self.path.parent,
            prefix=".linear-mapping_",
            suffix=".json.tmp",
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(temp_path, self.path)
        except Exception:
            with contextlib.suppress(OSError):
                os.unlink(temp_path)
            raise

        log.debug("mappings_saved", path=str(self.path), count=len(mappings))

    def append(self, mapping: TaskMapping) -> None:
        """Add one mapping (load, append, save)."""
        mappings = self.load_all()
        mappings.append(mapping)
        self.save_all(mappings)

    def find_by_task_id(self, task_id: str) -> TaskMapping | None:
        """Find the mapping for a local task ID."""
        for mapping in self.load_all():
            if mapping.task_id == task_id:
                return mapping
        return None

    def find_by_linear_issue_id(self, linear_issue_id: str) -> TaskMapping | None:
        """Find the mapping for a Linear issue identifier (e.g. ``ABC-123``)."""
        for mapping in self.load_all():
            if mapping.linear_issue_id == linear_issue_id:
                return mapping
        return None
