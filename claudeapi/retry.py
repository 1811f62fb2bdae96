"""Retry with exponential backoff for operations that may fail transiently."""

from __future__ import annotations

import random
import threading
import time
from collections.abc import Callable, Iterator
from concurrent.futures import CancelledError
from typing import Any, TypeVar

MAX_RETRIES = 3
BASE_WAIT = 2.0

T = TypeVar("T")


class RecoverableError(Exception):
    """Wraps an exception to mark it as safe to retry."""

    def __init__(self, err: BaseException) -> None:
        super().__init__(str(err))
        self.err = err
        self.__cause__ = err

    def __str__(self) -> str:
        return str(self.err)

    def is_recoverable(self) -> bool:
        return True

    def unwrap(self) -> BaseException:
        return self.err


def _error_chain(err: Any) -> Iterator[Any]:
    seen: set[int] = set()
    current = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        unwrap = getattr(current, "unwrap", None)
        current = unwrap() if callable(unwrap) else getattr(current, "__cause__", None)


def is_recoverable(err: Any) -> bool:
    """Report whether an error, or one it wraps, declares itself recoverable."""
    for candidate in _error_chain(err):
        check = getattr(candidate, "is_recoverable", None)
        if callable(check):
            return bool(check())
    return False


def do(
    func: Callable[[], T],
    max_retries: int = MAX_RETRIES,
    base_wait: float = BASE_WAIT,
    cancel: threading.Event | None = None,
) -> T | None:
    """Call ``func``, retrying recoverable failures with exponential backoff.

    ``base_wait`` is in seconds. If ``cancel`` is set while waiting between
    attempts, ``concurrent.futures.CancelledError`` is raised.
    """
    last_error: BaseException | None = None
    for attempt in range(max_retries + 1):
        if attempt > 0:
            backoff = base_wait * 2 ** (attempt - 1)
            delay = backoff + random.random() * backoff * 0.1
            if cancel is not None:
                if cancel.wait(delay):
                    raise CancelledError()
            else:
                time.sleep(delay)
        try:
            return func()
        except Exception as exc:
            if not is_recoverable(exc):
                raise
            last_error = exc
    if last_error is None:
        return None
    raise last_error