# workpool/work_queue.py
from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Iterable, Optional, Set

from workpool.models import Task


class SharedWorkQueue:
    """
    FIFO of pending Tasks, shared by reference with every Worker.

    - every mutation happens under the queue's own lock
    - try_dequeue() returns None when empty instead of waiting
    - a task id is accepted once: never queued twice, never re-inserted after it was taken
    - seal() freezes the queue once loading is done
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None) -> None:
        self._items: Deque[Task] = deque()
        self._known_ids: Set[int] = set()
        self._lock = threading.Lock()
        self._sealed = False
        self.enqueued_count = 0
        self.dequeued_count = 0

        for task in tasks or []:
            self.enqueue(task)

    def enqueue(self, task: Task) -> None:
        with self._lock:
            if self._sealed:
                raise RuntimeError("Queue is sealed; no tasks can be added once workers start")
            if task.id in self._known_ids:
                raise ValueError(f"Task already queued or taken: {task.id}")
            self._known_ids.add(task.id)
            self._items.append(task)
            self.enqueued_count += 1

    def try_dequeue(self) -> Optional[Task]:
        with self._lock:
            if not self._items:
                return None
            self.dequeued_count += 1
            return self._items.popleft()

    def is_empty(self) -> bool:
        # Advisory only: may be stale as soon as the lock is released.
        with self._lock:
            return not self._items

    def seal(self) -> None:
        with self._lock:
            self._sealed = True

    @property
    def sealed(self) -> bool:
        with self._lock:
            return self._sealed

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
