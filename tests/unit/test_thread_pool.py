"""
Unit tests for the worker thread pool.
"""

import threading

import pytest

from minihttp.core.thread_pool import ThreadPool


@pytest.fixture
def pool():
    pool = ThreadPool(min_workers=2, max_workers=4, queue_size=10)
    pool.start()
    yield pool
    pool.shutdown(wait=True, timeout=5.0)


class TestThreadPool:
    """Tests for ThreadPool."""

    def test_submit_before_start(self):
        """Test that submit() requires start()."""
        with pytest.raises(RuntimeError):
            ThreadPool().submit(lambda: None)

    def test_runs_tasks(self, pool: ThreadPool):
        """Test that submitted tasks run."""
        done = threading.Event()
        results = []

        def task(value):
            results.append(value)
            done.set()

        assert pool.submit(task, args=(42,)) is True
        assert done.wait(timeout=5.0)
        assert results == [42]

    def test_kwargs(self, pool: ThreadPool):
        """Test that keyword arguments are passed through."""
        done = threading.Event()
        results = {}

        def task(key, value=None):
            results[key] = value
            done.set()

        pool.submit(task, args=("a",), kwargs={"value": 1})

        assert done.wait(timeout=5.0)
        assert results == {"a": 1}

    def test_failing_task_does_not_kill_worker(self, pool: ThreadPool):
        """Test that workers survive a raising task."""
        done = threading.Event()

        def boom():
            raise RuntimeError("boom")

        pool.submit(boom)
        pool.submit(done.set)

        assert done.wait(timeout=5.0)

    def test_queue_full(self):
        """Test that submit() returns False when the queue is full."""
        pool = ThreadPool(min_workers=1, max_workers=1, queue_size=1)
        pool.start()
        release = threading.Event()
        started = threading.Event()

        def block():
            started.set()
            release.wait(timeout=5.0)

        try:
            assert pool.submit(block)
            assert started.wait(timeout=5.0)
            assert pool.submit(block)       # waits in the queue
            assert not pool.submit(block)   # queue full
        finally:
            release.set()
            pool.shutdown(wait=True, timeout=5.0)

    def test_stats(self, pool: ThreadPool):
        """Test the stats snapshot."""
        stats = pool.stats

        assert stats["workers"]["total"] == 2
        assert stats["tasks"]["queued"] == 0

    def test_submit_after_shutdown(self):
        """Test that submit() fails after shutdown."""
        pool = ThreadPool(min_workers=1, max_workers=1)
        pool.start()
        pool.shutdown()

        with pytest.raises(RuntimeError):
            pool.submit(lambda: None)
