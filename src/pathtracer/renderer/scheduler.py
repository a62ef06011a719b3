# renderer/scheduler.py
"""
Row scheduling over a fixed pool of worker threads.

Each worker claims the next unrendered row from a shared RowQueue and
renders it into that row's own slice of the output grid, so results never
need to be merged and the grid does not depend on which worker rendered
which row.
"""
import logging
import random
import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Callable, List, Optional

from pathtracer.errors import PoolCreationError, RenderError

logger = logging.getLogger(__name__)

RowRenderer = Callable[[int, random.Random], None]


class RowQueue:
    """
    Hands out row indices 0..rows-1, each exactly once.
    """
    def __init__(self, rows: int):
        self.rows = rows
        self._next = 0
        self._closed = False
        self._lock = threading.Lock()

    def claim(self) -> Optional[int]:
        """
        Returns the next unclaimed row, or None once the queue is exhausted or closed.
        """
        with self._lock:
            if self._closed or self._next >= self.rows:
                return None
            row = self._next
            self._next += 1
            return row

    def close(self):
        """
        Stop handing out rows. Rows already claimed still finish.
        """
        with self._lock:
            self._closed = True

    @property
    def claimed(self) -> int:
        with self._lock:
            return self._next


class _RowFailure(Exception):
    def __init__(self, row: int, error: Exception):
        super().__init__(row, error)
        self.row = row
        self.error = error


def _work(worker_id: int, rows: RowQueue, render_row: RowRenderer) -> int:
    # Per-worker generator, never shared between threads
    rng = random.Random()
    completed = 0
    logger.debug("Worker %d started", worker_id)
    while True:
        row = rows.claim()
        if row is None:
            break
        try:
            render_row(row, rng)
        except Exception as exc:
            rows.close()
            raise _RowFailure(row, exc) from exc
        completed += 1
    logger.debug("Worker %d finished after %d rows", worker_id, completed)
    return completed


def run_rows(rows: int, workers: int, render_row: RowRenderer) -> List[int]:
    """
    Render every row with a pool of `workers` threads and block until all are done.

    Returns the number of rows each worker completed. If any row fails, no
    further rows are handed out and RenderError is raised with the row's
    exception chained.
    """
    if workers < 1:
        raise PoolCreationError(workers)

    queue = RowQueue(rows)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="render-worker") as pool:
        futures = [pool.submit(_work, worker_id, queue, render_row)
                   for worker_id in range(workers)]
        done, _ = wait(futures, return_when=FIRST_EXCEPTION)
        for future in done:
            if future.exception() is not None:
                queue.close()
                break
        wait(futures)

    for future in futures:
        failure = future.exception()
        if failure is None:
            continue
        if isinstance(failure, _RowFailure):
            raise RenderError(failure.row, str(failure.error)) from failure.error
        raise RenderError(-1, str(failure)) from failure

    return [future.result() for future in futures]
