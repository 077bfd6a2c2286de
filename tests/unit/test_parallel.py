"""Tests for the fork-join worker pool."""

import threading

import pytest

from quoter.parallel import INLINE, WorkerPool


class TestWorkerPool:
    def test_inline_pool_runs_in_caller_thread(self) -> None:
        caller = threading.get_ident()
        assert INLINE.map(lambda _: threading.get_ident(), [1, 2, 3]) == [caller] * 3

    def test_results_keep_input_order(self) -> None:
        items = list(range(50))
        with WorkerPool(max_workers=4) as workers:
            assert workers.map(lambda x: x * x, items) == [x * x for x in items]

    def test_executor_released_on_exit(self) -> None:
        workers = WorkerPool(max_workers=2)
        with workers:
            assert workers._executor is not None
        assert workers._executor is None

    def test_worker_error_propagates(self) -> None:
        def boom(x: int) -> int:
            if x == 3:
                raise RuntimeError("boom")
            return x

        with WorkerPool(max_workers=4) as workers:
            with pytest.raises(RuntimeError, match="boom"):
                workers.map(boom, list(range(6)))

    def test_empty_input(self) -> None:
        with WorkerPool(max_workers=4) as workers:
            assert workers.map(lambda x: x, []) == []
