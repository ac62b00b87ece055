"""Error taxonomy for linearsync.

Every failure the sync can raise is tagged with an ``ErrorKind``. Whether a
failed call may be attempted again is a pure function of that kind (and, for
remote API errors, the status code), see ``is_retriable``.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of failure."""

    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    REMOTE_API = "remote_api"
    TRANSIENT = "transient"


def is_retriable(kind: ErrorKind, status_code: int | None = None) -> bool:
    """Decide whether a failure of the given kind may be retried.

    Args:
        kind: Error kind.
        status_code: Status code reported by the remote API, if any.

    Returns:
        True for transient transport failures and for remote API errors
        signalling rate limiting (429) or a server fault (5xx).
    """
    if kind == ErrorKind.TRANSIENT:
        return True
    if kind == ErrorKind.REMOTE_API:
        if status_code is None:
            return False
        return status_code == 429 or 500 <= status_code < 600
    return False


class LinearSyncError(Exception):
    """Base class for all linearsync errors."""

    kind: ErrorKind = ErrorKind.VALIDATION

    @property
    def status_code(self) -> int | None:
        return None

    @property
    def retriable(self) -> bool:
        return is_retriable(self.kind, self.status_code)


class ConfigurationError(LinearSyncError):
    """Required credential or scope is missing."""

    kind = ErrorKind.CONFIGURATION


class ValidationError(LinearSyncError):
    """Input that cannot be accepted."""

    kind = ErrorKind.VALIDATION


class APIError(LinearSyncError):
    """Linear API answered with an error."""

    kind = ErrorKind.REMOTE_API

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self._status_code = status_code

    @property
    def status_code(self) -> int | None:
        return self._status_code


class TransientError(LinearSyncError):
    """Connection reset, timeout or similar transport failure."""

    kind = ErrorKind.TRANSIENT
