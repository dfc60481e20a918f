"""
Worker pool for the data-parallel stages of the breakers.

Each stage fans a fixed list of independent tasks out to a pool and waits
for all of them before reducing. Results are stored by input index, so the
reduction never depends on which task finished first.
"""

import logging
import concurrent.futures
from typing import Callable, List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

EXECUTOR_THREAD = "thread"
EXECUTOR_PROCESS = "process"
EXECUTOR_SERIAL = "serial"

EXECUTORS = (EXECUTOR_THREAD, EXECUTOR_PROCESS, EXECUTOR_SERIAL)


class WorkerPool:
    """
    Fan-out/fan-in mapper over a thread pool, a process pool or inline.

    Functions handed to ``map`` must be module-level (or partials of
    module-level functions) when the process executor is used.
    """

    def __init__(self, max_workers: Optional[int] = None, executor: str = EXECUTOR_THREAD):
        if executor not in EXECUTORS:
            raise ValueError(f"Unknown executor: {executor}")
        self.max_workers = max_workers
        self.executor = executor

    @property
    def is_serial(self) -> bool:
        return self.executor == EXECUTOR_SERIAL or self.max_workers == 1

    def _make_executor(self) -> concurrent.futures.Executor:
        if self.executor == EXECUTOR_PROCESS:
            return concurrent.futures.ProcessPoolExecutor(max_workers=self.max_workers)
        return concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers)

    def map(self, func: Callable[[T], R], items: Sequence[T]) -> List[R]:
        """
        Apply ``func`` to every item and return the results in input order.

        Returns only once every task has completed. An exception raised by
        any task propagates to the caller.
        """
        items = list(items)
        if self.is_serial or len(items) <= 1:
            return [func(item) for item in items]

        results: List[Optional[R]] = [None] * len(items)
        with self._make_executor() as pool:
            futures = {pool.submit(func, item): index for index, item in enumerate(items)}
            for future in concurrent.futures.as_completed(futures):
                results[futures[future]] = future.result()

        logger.debug(f"Completed {len(items)} tasks on {self.executor} pool")
        return results

    def __repr__(self) -> str:
        return f"WorkerPool(max_workers={self.max_workers!r}, executor={self.executor!r})"


SERIAL_POOL = WorkerPool(executor=EXECUTOR_SERIAL)
