"""
Cooperative scheduler used by async roots.

Nothing runs in the background: scheduled callbacks only execute when a test
calls ``flush_all`` or ``flush_through``. Components may record values with
``yield_value`` while rendering; the flush functions return them so tests can
assert how far rendering progressed.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable, Deque, List, Optional, Sequence

logger = logging.getLogger(__name__)

ShouldYield = Callable[[], bool]
ScheduledCallback = Callable[[ShouldYield], None]


def _never_yield() -> bool:
    return False


class Scheduler:
    """Queue of pending render callbacks plus the log of yielded values."""

    def __init__(self) -> None:
        self._callbacks: Deque[ScheduledCallback] = deque()
        self._yielded: Optional[List[Any]] = None

    @property
    def has_pending_work(self) -> bool:
        return bool(self._callbacks)

    def schedule_callback(self, callback: ScheduledCallback) -> None:
        self._callbacks.append(callback)

    def yield_value(self, value: Any) -> None:
        if self._yielded is None:
            self._yielded = [value]
        else:
            self._yielded.append(value)

    def _take_yielded(self) -> List[Any]:
        values = self._yielded or []
        self._yielded = None
        return values

    def flush_all(self) -> List[Any]:
        """Run every scheduled callback to completion and return the yielded values."""
        self._yielded = None
        while self._callbacks:
            callback = self._callbacks.popleft()
            callback(_never_yield)
        return self._take_yielded()

    def flush_through(self, expected_values: Sequence[Any]) -> List[Any]:
        """Run scheduled work until at least ``len(expected_values)`` values were yielded."""
        did_stop = False
        self._yielded = None

        def should_yield() -> bool:
            nonlocal did_stop
            if self._yielded is not None and len(self._yielded) >= len(expected_values):
                did_stop = True
                return True
            return False

        while self._callbacks and not did_stop:
            callback = self._callbacks.popleft()
            callback(should_yield)
        values = self._take_yielded()
        logger.debug("flush_through stopped after %d yielded value(s)", len(values))
        return values

    def with_clean_yields(self, fn: Callable[[], Any]) -> List[Any]:
        self._yielded = None
        fn()
        return self._take_yielded()

    def reset(self) -> None:
        self._callbacks.clear()
        self._yielded = None


default_scheduler = Scheduler()


def yield_value(value: Any) -> None:
    default_scheduler.yield_value(value)


def flush_all() -> List[Any]:
    return default_scheduler.flush_all()


def flush_through(expected_values: Sequence[Any]) -> List[Any]:
    return default_scheduler.flush_through(expected_values)


def with_clean_yields(fn: Callable[[], Any]) -> List[Any]:
    return default_scheduler.with_clean_yields(fn)


__all__ = [
    "Scheduler",
    "ShouldYield",
    "default_scheduler",
    "flush_all",
    "flush_through",
    "with_clean_yields",
    "yield_value",
]
