# main.py
from __future__ import annotations

import argparse
from typing import List, Optional

from pydantic import ValidationError

import config
from schemas import PoolSettings
from workpool.coordinator import PoolCoordinator, PoolPolicy, PoolReport
from workpool.models import generate_tasks
from workpool.sink import OutputSink
from workpool.worker import TaskProcessor


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Process a fixed batch of tasks on a pool of workers into one output file.",
    )
    parser.add_argument("--tasks", dest="task_count", type=int, default=config.TASK_COUNT,
                        help="Number of tasks to generate")
    parser.add_argument("--workers", dest="worker_count", type=int, default=config.WORKER_COUNT,
                        help="Size of the worker pool")
    parser.add_argument("--output", dest="output_target", default=config.OUTPUT_TARGET,
                        help="File the result records are appended to")
    parser.add_argument("--timeout", dest="timeout_s", type=float, default=config.TIMEOUT_S,
                        help="Seconds to wait before forcing the pool to stop")
    parser.add_argument("--delay", dest="task_delay_s", type=float, default=config.TASK_DELAY_S,
                        help="Simulated processing time per task, in seconds")
    parser.add_argument("--grace", dest="shutdown_grace_s", type=float, default=config.SHUTDOWN_GRACE_S,
                        help="Seconds stopped workers get to unwind after a timeout")
    parser.add_argument("--reset-output", dest="reset_output", action="store_true",
                        default=config.RESET_OUTPUT, help="Truncate the output file before running")
    parser.add_argument("--quiet", dest="trace", action="store_false", default=config.TRACE,
                        help="Only print errors and the final summary")
    return parser.parse_args(argv)


def load_settings(argv: Optional[List[str]] = None) -> PoolSettings:
    args = parse_args(argv)
    try:
        return PoolSettings(**vars(args))
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise SystemExit(f"Invalid configuration: {problems}") from e


def run_pool(settings: PoolSettings) -> PoolReport:
    sink = OutputSink(settings.output_target)
    if settings.reset_output:
        sink.reset()

    coordinator = PoolCoordinator(
        sink=sink,
        policy=PoolPolicy(
            worker_count=settings.worker_count,
            timeout_s=settings.timeout_s,
            shutdown_grace_s=settings.shutdown_grace_s,
            trace=settings.trace,
        ),
        processor=TaskProcessor(delay_s=settings.task_delay_s),
    )

    if settings.trace:
        print("Loading tasks...")
    return coordinator.run(generate_tasks(settings.task_count))


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings(argv)
    report = run_pool(settings)
    print(report.summary())
    return 0


def run_cli() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run_cli()
