# workpool/coordinator.py

from __future__ import annotations

import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from workpool.models import Task, WorkerState, WorkerStats
from workpool.sink import OutputSink
from workpool.work_queue import SharedWorkQueue
from workpool.worker import Processor, Worker


@dataclass
class PoolPolicy:
    worker_count: int = 4
    timeout_s: float = 60.0
    shutdown_grace_s: float = 1.0
    trace: bool = True

    def validate(self) -> None:
        if self.worker_count < 1:
            raise ValueError(f"worker_count must be >= 1 (got {self.worker_count})")
        if self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be > 0 (got {self.timeout_s})")
        if self.shutdown_grace_s < 0:
            raise ValueError(f"shutdown_grace_s must be >= 0 (got {self.shutdown_grace_s})")


@dataclass
class PoolReport:
    task_count: int
    dequeued: int
    remaining: int
    elapsed_s: float
    timed_out: bool
    workers: List[WorkerStats] = field(default_factory=list)

    @property
    def written(self) -> int:
        return sum(w.written for w in self.workers)

    @property
    def failed(self) -> int:
        return sum(w.failed for w in self.workers)

    @property
    def write_errors(self) -> int:
        return sum(w.write_errors for w in self.workers)

    @property
    def abandoned(self) -> int:
        return sum(w.abandoned for w in self.workers)

    @property
    def unfinished_workers(self) -> List[int]:
        return [w.worker_id for w in self.workers if w.state != WorkerState.FINISHED]

    def summary(self) -> str:
        lines: List[str] = []
        lines.append(f"Tasks: {self.task_count} (taken={self.dequeued}, remaining={self.remaining})")
        lines.append(
            f"Records: written={self.written} failed={self.failed} "
            f"write_errors={self.write_errors} abandoned={self.abandoned}"
        )
        for w in self.workers:
            lines.append(f"  Worker {w.worker_id}: taken={w.taken} written={w.written} state={w.state.value}")
        lines.append(f"Timed out: {self.timed_out}")
        lines.append(f"Elapsed: {self.elapsed_s * 1000:.0f}ms")
        return "\n".join(lines)


class PoolCoordinator:
    """
    Owns one run of the pool:
    - loads and seals the queue before any worker starts
    - launches exactly worker_count workers
    - waits on the completion barrier, bounded by timeout_s
    - on timeout, fires the shared cancel token and moves on after the grace period
    """

    def __init__(
        self,
        sink: OutputSink,
        policy: Optional[PoolPolicy] = None,
        processor: Optional[Processor] = None,
    ) -> None:
        self.sink = sink
        self.policy = policy or PoolPolicy()
        self.policy.validate()
        self.processor = processor

    def load(self, tasks: Iterable[Task]) -> SharedWorkQueue:
        queue = SharedWorkQueue(tasks)
        queue.seal()
        return queue

    def run(self, tasks: Iterable[Task]) -> PoolReport:
        policy = self.policy

        queue = self.load(tasks)
        if policy.trace:
            print(f"[POOL] loaded {queue.enqueued_count} tasks")

        cancel = threading.Event()
        workers = [
            Worker(
                worker_id=i,
                queue=queue,
                sink=self.sink,
                processor=self.processor,
                cancel=cancel,
                trace=policy.trace,
            )
            for i in range(1, policy.worker_count + 1)
        ]

        t0 = time.monotonic()
        timed_out = False
        executor = ThreadPoolExecutor(max_workers=policy.worker_count, thread_name_prefix="worker")
        pending: set = set()
        try:
            futures: Dict[Future, Worker] = {executor.submit(w.run): w for w in workers}
            if policy.trace:
                print(f"[POOL] started {len(futures)} workers")

            _, pending = wait(futures, timeout=policy.timeout_s)
            if pending:
                timed_out = True
                print(
                    f"[POOL] timeout after {policy.timeout_s}s: "
                    f"forcing stop of {len(pending)} worker(s)"
                )
                cancel.set()
                _, pending = wait(pending, timeout=policy.shutdown_grace_s)
                if pending:
                    stuck = sorted(futures[f].worker_id for f in pending)
                    print(f"[POOL] workers still running after grace period: {stuck}")
        finally:
            cancel.set()
            executor.shutdown(wait=not pending, cancel_futures=True)

        elapsed = time.monotonic() - t0

        report = PoolReport(
            task_count=queue.enqueued_count,
            dequeued=queue.dequeued_count,
            remaining=len(queue),
            elapsed_s=elapsed,
            timed_out=timed_out,
            workers=[w.stats for w in workers],
        )

        if timed_out:
            print(f"[POOL] stopped after {elapsed * 1000:.0f}ms. Check {self.sink.target}")
        else:
            print(f"[POOL] all tasks completed in {elapsed * 1000:.0f}ms. Check {self.sink.target}")
        return report
