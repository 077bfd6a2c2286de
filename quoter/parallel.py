"""Fork-join helpers for data-parallel scans.

Route evaluation and the split optimizer's marginal-gain scan are maps over
independent, read-only inputs. WorkerPool fans them out to a thread pool and
joins before returning, so callers always see a complete result list in
input order regardless of scheduling.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from types import TracebackType
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")


class WorkerPool:
    """A bounded thread pool reused across the scans of one quote.

    With max_workers <= 1 no threads are started and map runs inline.

    Usage:
        with WorkerPool(max_workers=4) as workers:
            outputs = workers.map(simulate, routes)
    """

    def __init__(self, max_workers: int = 1) -> None:
        self.max_workers = max_workers
        self._executor: ThreadPoolExecutor | None = None

    def __enter__(self) -> WorkerPool:
        if self.max_workers > 1:
            self._executor = ThreadPoolExecutor(
                max_workers=self.max_workers, thread_name_prefix="quoter"
            )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def map(self, fn: Callable[[T], R], items: Sequence[T]) -> list[R]:
        """Apply fn to every item and wait for all results.

        Returns:
            Results in the same order as items
        """
        if self._executor is None or len(items) <= 1:
            return [fn(item) for item in items]
        # Executor.map yields in submission order and re-raises worker errors
        return list(self._executor.map(fn, items))


# Shared inline pool for callers that do not manage their own
INLINE = WorkerPool(max_workers=1)


__all__ = ["INLINE", "WorkerPool"]
