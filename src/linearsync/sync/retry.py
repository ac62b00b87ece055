"""Retry with exponential backoff for Linear calls."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

from linearsync.errors import LinearSyncError

log = structlog.get_logger()

T = TypeVar("T")


def should_retry(error: Exception) -> bool:
    """Decide whether a failed operation may be attempted again.

    linearsync errors answer through their kind. Other errors are retried
    unless they carry a ``retriable`` attribute set to False.
    """
    if isinstance(error, LinearSyncError):
        return error.retriable
    return getattr(error, "retriable", None) is not False


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay: float = 1.0,
) -> T:
    """Run an async operation, retrying failures with exponential backoff.

    The delay before retry ``n`` (1-based) is ``base_delay * 2 ** (n - 1)``,
    i.e. 1s, 2s, 4s for the defaults.

    Args:
        operation: Zero-argument callable returning an awaitable.
        max_attempts: Total number of attempts.
        base_delay: Delay in seconds before the first retry.

    Returns:
        The operation's result.

    Raises:
        Exception: The last error, unchanged, once attempts are exhausted or
            the error is not retriable.
    """
    attempt = 1
    while True:
        try:
            return await operation()
        except Exception as e:
            if attempt >= max_attempts or not should_retry(e):
                log.error(
                    "operation_failed",
                    attempts=attempt,
                    max_attempts=max_attempts,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise

            delay = base_delay * 2 ** (attempt - 1)
            log.warning(
                "retry_attempt",
                attempt=attempt,
                max_attempts=max_attempts,
                delay=delay,
                error=str(e),
            )
            await asyncio.sleep(delay)
            attempt += 1
