from __future__ import annotations

import atexit
import queue
import threading
from typing import Any, Callable, Optional

from catlog.core.appender_registry import report_to_stderr
from catlog.core.log_exceptions import AppenderClosedError


_STOP = object()


class QueuedSink:
    """
    Base for sinks whose I/O happens on a dedicated worker thread.

    Thread ownership model:
      - handle() (caller thread) renders and enqueues, never blocks on I/O
      - one worker thread drains the queue in FIFO order, one item at a time
      - drain() blocks until everything enqueued so far has been written

    The queue is unbounded. A caller that logs faster than the worker
    writes grows memory without limit.

    Subclasses implement _write(item) and _teardown(), and call
    _start_worker() once their resources are open. Both hooks run on
    the worker thread; _teardown() runs after the last queued item.
    Sinks still open at interpreter exit are flushed and closed by an
    atexit hook.
    """

    def __init__(self, name: str, *, fallback: Optional[Callable[[str], None]] = None):
        self.name = name
        self._report = fallback or report_to_stderr

        self._queue: "queue.Queue[Any]" = queue.Queue()
        self._pending = 0
        self._idle = threading.Condition()
        self._closed = False
        self._thread: Optional[threading.Thread] = None

    # --------------------------
    # Public API (caller side)
    # --------------------------

    def drain(self, timeout: Optional[float] = None) -> bool:
        """
        Wait until every enqueued item has been written.

        Returns False if the timeout expired first.
        """
        with self._idle:
            return self._idle.wait_for(lambda: self._pending == 0, timeout)

    def close(self, timeout: Optional[float] = 5.0) -> bool:
        """
        Stop accepting events and let the worker finish what is queued.

        The worker writes every item enqueued before close(), then
        releases the sink's resources itself. Returns False if the
        worker was still busy when the timeout expired; it keeps
        writing in the background in that case.
        """
        atexit.unregister(self._flush_at_exit)
        return self._stop_worker(timeout)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        with self._idle:
            return self._pending

    # --------------------------
    # Subclass hooks
    # --------------------------

    def _enqueue(self, item: Any) -> None:
        with self._idle:
            if self._closed:
                raise AppenderClosedError(self.name)
            self._pending += 1
            self._queue.put(item)

    def _start_worker(self) -> None:
        self._thread = threading.Thread(
            target=self._run, name=f"{type(self).__name__}[{self.name}]", daemon=True
        )
        self._thread.start()
        atexit.register(self._flush_at_exit)

    def _write(self, item: Any) -> None:
        raise NotImplementedError

    def _teardown(self) -> None:
        pass

    # --------------------------
    # Worker thread internals
    # --------------------------

    def _worker_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _flush_at_exit(self) -> None:
        # Worker threads are daemons: everything queued is written here,
        # before the interpreter stops them.
        self._stop_worker(timeout=None)

    def _stop_worker(self, timeout: Optional[float]) -> bool:
        with self._idle:
            first = not self._closed
            if first:
                self._closed = True
                self._queue.put(_STOP)

        if self._thread is None:
            if first:
                self._teardown()
            return True
        self._thread.join(timeout=timeout)
        return not self._worker_alive()

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                break
            try:
                self._write(item)
            except Exception as e:
                self._report(f"[catlog] {type(self).__name__}[{self.name}] write failed: {e!r}")
            finally:
                with self._idle:
                    self._pending -= 1
                    if self._pending == 0:
                        self._idle.notify_all()

        try:
            self._teardown()
        except Exception as e:
            self._report(f"[catlog] {type(self).__name__}[{self.name}] close failed: {e!r}")
