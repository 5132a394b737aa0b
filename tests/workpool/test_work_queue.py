from __future__ import annotations

import threading
from typing import List

import pytest

from workpool.models import Task, generate_tasks
from workpool.work_queue import SharedWorkQueue


def test_fifo_order_for_single_consumer():
    queue = SharedWorkQueue(generate_tasks(3))

    assert [queue.try_dequeue().id for _ in range(3)] == [1, 2, 3]
    assert queue.try_dequeue() is None


def test_try_dequeue_on_empty_queue_is_idempotent():
    queue = SharedWorkQueue()

    for _ in range(100):
        assert queue.try_dequeue() is None

    assert queue.is_empty()
    assert queue.dequeued_count == 0


def test_duplicate_task_id_is_rejected():
    queue = SharedWorkQueue([Task(1, "a")])

    with pytest.raises(ValueError):
        queue.enqueue(Task(1, "b"))

    assert len(queue) == 1


def test_taken_task_cannot_be_requeued():
    queue = SharedWorkQueue([Task(1, "a")])
    task = queue.try_dequeue()

    with pytest.raises(ValueError):
        queue.enqueue(task)

    assert queue.is_empty()


def test_sealed_queue_refuses_new_tasks():
    queue = SharedWorkQueue(generate_tasks(2))
    queue.seal()

    with pytest.raises(RuntimeError):
        queue.enqueue(Task(99, "late"))

    assert queue.sealed
    assert queue.enqueued_count == 2


def test_concurrent_drain_takes_every_task_exactly_once():
    total = 2000
    queue = SharedWorkQueue(generate_tasks(total))
    taken: List[List[int]] = [[] for _ in range(8)]
    start = threading.Barrier(8)

    def drain(slot: int) -> None:
        start.wait()
        while True:
            task = queue.try_dequeue()
            if task is None:
                return
            taken[slot].append(task.id)

    threads = [threading.Thread(target=drain, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    all_ids = [tid for ids in taken for tid in ids]
    assert len(all_ids) == total
    assert sorted(all_ids) == list(range(1, total + 1))
    assert queue.dequeued_count == total
    assert queue.is_empty()
