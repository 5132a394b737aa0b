# workpool/worker.py

from __future__ import annotations

import threading
import time
from typing import Callable, Optional

from workpool.models import Task, WorkerState, WorkerStats
from workpool.sink import OutputSink
from workpool.work_queue import SharedWorkQueue

Processor = Callable[[Task, threading.Event], str]


class TaskCancelled(Exception):
    """
    Raised when the cancel token fires while a task is in its simulated delay.
    The task is abandoned; nothing is written for it.
    """

    def __init__(self, task_id: int) -> None:
        super().__init__(f"task {task_id} cancelled before completion")
        self.task_id = task_id


def process_task(task: Task, cancel: Optional[threading.Event] = None, *, delay_s: float = 0.1) -> str:
    if delay_s > 0:
        if cancel is None:
            time.sleep(delay_s)
        elif cancel.wait(delay_s):
            raise TaskCancelled(task.id)
    return f"Task {task.id} processed: {task.payload.upper()}"


class TaskProcessor:
    def __init__(self, delay_s: float = 0.1) -> None:
        self.delay_s = delay_s

    def __call__(self, task: Task, cancel: threading.Event) -> str:
        return process_task(task, cancel, delay_s=self.delay_s)


def format_record(worker_id: int, result: str) -> str:
    if "\n" in result or "\r" in result:
        raise ValueError("result must be a single line")
    return f"Worker {worker_id}: {result}"


class Worker:
    """
    One execution unit draining the shared queue:
    STARTING -> RUNNING (fetch -> process -> emit) -> DRAINED -> FINISHED

    The cancel token is checked at loop boundaries (and inside the simulated
    delay), never while a record is being written. The queue lock and the
    sink lock are never held together.
    """

    def __init__(
        self,
        worker_id: int,
        queue: SharedWorkQueue,
        sink: OutputSink,
        processor: Optional[Processor] = None,
        cancel: Optional[threading.Event] = None,
        trace: bool = True,
    ) -> None:
        self.worker_id = worker_id
        self.queue = queue
        self.sink = sink
        self.processor = processor or TaskProcessor()
        self.cancel = cancel or threading.Event()
        self.trace = trace
        self.stats = WorkerStats(worker_id=worker_id)

    def run(self) -> WorkerStats:
        stats = self.stats
        stats.state = WorkerState.STARTING
        if self.trace:
            print(f"[WORKER {self.worker_id}] started")

        try:
            stats.state = WorkerState.RUNNING
            while True:
                if self.cancel.is_set():
                    stats.cancelled = True
                    break

                task = self.queue.try_dequeue()
                if task is None:
                    stats.state = WorkerState.DRAINED
                    break
                stats.taken += 1

                try:
                    record = format_record(self.worker_id, self.processor(task, self.cancel))
                except TaskCancelled:
                    stats.abandoned += 1
                    stats.cancelled = True
                    break
                except Exception as e:
                    stats.failed += 1
                    print(f"[WORKER {self.worker_id}] error processing task {task.id}: {e}")
                    continue

                if self.sink.append(record):
                    stats.written += 1
                else:
                    stats.write_errors += 1
        except Exception as e:
            stats.error = repr(e)
            print(f"[WORKER {self.worker_id}] encountered critical error: {e!r}")
        finally:
            stats.state = WorkerState.FINISHED
            if self.trace:
                suffix = " (stopped)" if stats.cancelled else ""
                print(f"[WORKER {self.worker_id}] finished{suffix}: {stats.written} written")

        return stats
