# workpool/__init__.py
from __future__ import annotations

from .coordinator import PoolCoordinator, PoolPolicy, PoolReport
from .models import Task, WorkerState, WorkerStats, generate_tasks
from .sink import OutputSink
from .work_queue import SharedWorkQueue
from .worker import TaskCancelled, TaskProcessor, Worker, format_record, process_task

__all__ = [
    "PoolCoordinator",
    "PoolPolicy",
    "PoolReport",
    "Task",
    "WorkerState",
    "WorkerStats",
    "generate_tasks",
    "OutputSink",
    "SharedWorkQueue",
    "TaskCancelled",
    "TaskProcessor",
    "Worker",
    "format_record",
    "process_task",
]
