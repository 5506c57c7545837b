"""
Tests for the sequential work queue.
"""
import pytest

from check_pages.work_queue import WorkQueue


def recorder(log, name, then=None):
    def task(done):
        log.append(name)
        if then:
            then()
        done()
    return task


def test_tasks_run_in_order():
    log = []
    queue = WorkQueue()
    for name in ("one", "two", "three"):
        queue.enqueue_back(recorder(log, name))

    queue.run_to_completion()

    assert log == ["one", "two", "three"]
    assert len(queue) == 0


def test_front_insertion_runs_before_next_queued_task():
    log = []
    queue = WorkQueue()

    def discover():
        queue.enqueue_front_all([recorder(log, "page1-link1"), recorder(log, "page1-link2")])

    queue.enqueue_back(recorder(log, "page1", then=discover))
    queue.enqueue_back(recorder(log, "page2"))
    queue.enqueue_back(recorder(log, "finish"))

    queue.run_to_completion()

    assert log == ["page1", "page1-link1", "page1-link2", "page2", "finish"]


def test_enqueue_front_puts_task_first():
    log = []
    queue = WorkQueue()
    queue.enqueue_back(recorder(log, "back"))
    queue.enqueue_front(recorder(log, "front"))

    queue.run_to_completion()

    assert log == ["front", "back"]


def test_task_must_signal_completion():
    queue = WorkQueue()
    queue.enqueue_back(lambda done: None)

    with pytest.raises(RuntimeError, match="without signalling completion"):
        queue.run_to_completion()


def test_task_may_not_signal_twice():
    def twice(done):
        done()
        done()

    queue = WorkQueue()
    queue.enqueue_back(twice)

    with pytest.raises(RuntimeError, match="more than once"):
        queue.run_to_completion()


def test_completion_can_be_handed_on():
    log = []

    def delegating(done):
        recorder(log, "delegate")(done)

    queue = WorkQueue()
    queue.enqueue_back(delegating)
    queue.enqueue_back(recorder(log, "next"))

    queue.run_to_completion()

    assert log == ["delegate", "next"]


def test_queue_is_not_reentrant():
    queue = WorkQueue()

    def nested(done):
        queue.run_to_completion()
        done()

    queue.enqueue_back(nested)

    with pytest.raises(RuntimeError, match="already running"):
        queue.run_to_completion()
