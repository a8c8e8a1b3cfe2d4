from pathlib import Path
from typing import Callable, Optional

from catlog.core.layouts import Layout, basic_layout
from catlog.core.log_event import LogEvent
from catlog.core.log_exceptions import AppenderOpenError
from catlog.sinks.queued_sink import QueuedSink


class FileSink(QueuedSink):
    """
    Sink that appends one rendered line per event to a file.

    The file is opened at construction; failure to open raises
    AppenderOpenError immediately. Lines reach the file in the order
    handle() was called. Two FileSinks on the same path each hold their
    own handle and are not coordinated with each other.
    """

    def __init__(
        self,
        logfile_path: str,
        layout: Optional[Layout] = None,
        *,
        fallback: Optional[Callable[[str], None]] = None,
    ):
        super().__init__(str(logfile_path), fallback=fallback)
        self._path = Path(logfile_path)
        self.layout = layout or basic_layout

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self._path, "a", encoding="utf-8")
        except OSError as e:
            raise AppenderOpenError(str(self._path), e.strerror or str(e)) from e

        self._start_worker()

    @property
    def path(self) -> Path:
        return self._path

    def handle(self, event: LogEvent) -> None:
        self._enqueue(self.layout(event) + "\n")

    def _write(self, line: str) -> None:
        self._file.write(line)
        self._file.flush()

    def _teardown(self) -> None:
        self._file.close()

    def __repr__(self) -> str:
        return f"FileSink({str(self._path)!r})"
