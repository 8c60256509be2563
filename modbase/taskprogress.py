"""Combined progress of several running tasks."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Dict, Optional, Tuple

__all__ = ["TaskProgressManager"]

_log = logging.getLogger(__name__)

# a task that has not reported for this many seconds is dropped
_STALE_SECONDS = 15


class TaskProgressManager:
    """Tracks the percentage done of several tasks and combines them.

    ``clock`` returns seconds; it stamps each update so that tasks which stop
    reporting are dropped after 15 seconds.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or time.monotonic
        self._lock = threading.Lock()
        self._next_id = 1
        self._percentages: Dict[int, Tuple[float, int]] = {}

    def next_id(self) -> int:
        """Return a new task identifier, starting at 1."""
        with self._lock:
            task_id = self._next_id
            self._next_id += 1
            return task_id

    def update_progress(self, task_id: int, value: int, maximum: int) -> None:
        """Record that a task has done ``value`` of ``maximum``.

        A task that reaches its maximum is finished and forgotten.
        """
        with self._lock:
            if value == maximum:
                self._percentages.pop(task_id, None)
            else:
                self._percentages[task_id] = (self._clock(), (value * 100) // maximum)

    def forget(self, task_id: int) -> None:
        """Stop tracking a task; unknown identifiers are ignored."""
        with self._lock:
            self._percentages.pop(task_id, None)

    def overall(self) -> Optional[Tuple[int, int]]:
        """Return ``(done, total)`` summed over active tasks, or None if none.

        Each task contributes its percentage to ``done`` and 100 to ``total``.
        Tasks without an update in the last 15 seconds are dropped.
        """
        with self._lock:
            now = self._clock()
            for task_id, (stamp, _) in list(self._percentages.items()):
                idle = int(now - stamp)
                if idle >= _STALE_SECONDS:
                    _log.debug("no progress in 15 seconds (%s)", idle)
                    del self._percentages[task_id]
            if not self._percentages:
                return None
            done = sum(percent for _, percent in self._percentages.values())
            return done, len(self._percentages) * 100