"""Background recording of link usage for remote data stores.

Remote DAOs answer `get()` as soon as the target URL is known, and write the
usage increment afterwards from a worker thread. Those writes are best-effort:
the caller never waits for them, can't cancel them, and never sees their errors,
which are only logged.

Shutdown policy:
    Pending writes are drained by `UsageRecorder.shutdown()` (called from
    `DAO.close()`), and on normal interpreter exit, since the executor's worker
    threads are joined before the interpreter finishes. A killed process loses them.

Classes:
    UsageRecorder:
        Thread pool running fire-and-forget usage writes.

Example:
    >>> recorder = UsageRecorder(max_workers=2)
    >>> recorder.submit(dao._write_hit, record, '1730678400')
    <Future at 0x... state=running>
    >>> recorder.drain()
    >>> recorder.shutdown()
"""

import logging
import threading
from collections.abc import Callable
from concurrent import futures
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from shortie.constants import UsageTracking


logger = logging.getLogger(__name__)


class UsageRecorder:
    """Run usage writes on a thread pool without ever blocking or failing the caller.

    Attributes:
        executor (ThreadPoolExecutor):
            Pool running the submitted writes.
    """

    def __init__(self, max_workers: int = UsageTracking.RECORDER_WORKERS, executor: ThreadPoolExecutor | None = None):
        self.executor = executor or ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='shortie-usage')
        self._pending: set[Future] = set()
        self._lock = threading.Lock()

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future | None:
        """Schedule `fn(*args, **kwargs)` in the background.

        Returns:
            Future | None:
                Future of the write, or None if the pool refused it
                (e.g. after shutdown). A refusal is logged, not raised.
        """
        try:
            future = self.executor.submit(self._run, fn, *args, **kwargs)
        except RuntimeError:
            logger.warning('Usage recorder refused a write; the visit is not counted.', extra={'task': _task_name(fn)})
            return None

        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)
        return future

    def drain(self, timeout: float | None = None) -> None:
        """Wait until every write submitted so far has finished (or `timeout` seconds pass)."""
        with self._lock:
            pending = set(self._pending)
        if pending:
            futures.wait(pending, timeout=timeout)

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting writes. With `wait=True`, pending writes finish first."""
        self.executor.shutdown(wait=wait)

    def _forget(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)

    @staticmethod
    def _run(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        try:
            fn(*args, **kwargs)
        except Exception:
            logger.exception('Failed to record link usage.', extra={'task': _task_name(fn)})


def _task_name(fn: Callable[..., Any]) -> str:
    return getattr(fn, '__qualname__', repr(fn))
