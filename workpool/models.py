# workpool/models.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


@dataclass(frozen=True)
class Task:
    id: int
    payload: str


class WorkerState(str, Enum):
    STARTING = "starting"
    RUNNING = "running"
    DRAINED = "drained"
    FINISHED = "finished"


@dataclass
class WorkerStats:
    """
    Instrumented counters for one Worker.
    Only the owning Worker thread mutates these; the coordinator reads them
    after the completion barrier.
    """
    worker_id: int
    state: WorkerState = WorkerState.STARTING
    taken: int = 0          # tasks removed from the queue
    written: int = 0        # records appended to the sink
    failed: int = 0         # processing errors
    write_errors: int = 0   # sink I/O failures
    abandoned: int = 0      # task dropped by cancellation mid-delay
    cancelled: bool = False
    error: Optional[str] = None


def generate_tasks(count: int, template: str = "data_item_{id}") -> List[Task]:
    if count < 0:
        raise ValueError(f"Task count cannot be negative: {count}")
    return [Task(id=i, payload=template.format(id=i)) for i in range(1, count + 1)]
