"""
Sequential work queue driving check tasks one at a time.
"""
from __future__ import annotations

from collections import deque
from typing import Callable, Deque, Iterable

# A task receives a continuation and must call it exactly once when finished
Done = Callable[[], None]
Task = Callable[[Done], None]


class WorkQueue:
    """
    Ordered tasks drained strictly front-to-back.

    Tasks may add work while running; work added at the front runs before
    anything that was already queued. Only one task runs at a time: the
    next task starts after the current one has called its continuation.
    """

    def __init__(self) -> None:
        self._tasks: Deque[Task] = deque()
        self._running = False

    def __len__(self) -> int:
        return len(self._tasks)

    def enqueue_back(self, task: Task) -> None:
        self._tasks.append(task)

    def enqueue_front(self, task: Task) -> None:
        self._tasks.appendleft(task)

    def enqueue_front_all(self, tasks: Iterable[Task]) -> None:
        """Add tasks at the front, keeping their given order."""
        self._tasks.extendleft(reversed(list(tasks)))

    def run_to_completion(self) -> None:
        """
        Run tasks until the queue is empty.

        Raises RuntimeError if a task returns without signalling completion
        or signals it more than once.
        """
        if self._running:
            raise RuntimeError("Work queue is already running")
        self._running = True
        try:
            while self._tasks:
                task = self._tasks.popleft()
                finished = _Completion()
                task(finished)
                if not finished.called:
                    raise RuntimeError(f"Task {task!r} returned without signalling completion")
        finally:
            self._running = False


class _Completion:
    """Single-use continuation handed to each task."""

    def __init__(self) -> None:
        self.called = False

    def __call__(self) -> None:
        if self.called:
            raise RuntimeError("Task signalled completion more than once")
        self.called = True
