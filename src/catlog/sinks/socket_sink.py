from typing import Callable, Optional

import zmq

from catlog.core.layouts import Layout, basic_layout
from catlog.core.log_event import LogEvent
from catlog.core.log_exceptions import AppenderOpenError
from catlog.sinks.queued_sink import QueuedSink


class SocketSink(QueuedSink):
    """
    Sink that ships rendered events over a ZeroMQ socket.

    Each event is sent as two frames: [category, rendered text], so a
    SUB peer can filter on category with a prefix subscription. The
    socket is created and connected at construction, then used only by
    the worker thread; module code never touches it.
    """

    def __init__(
        self,
        endpoint: str,
        layout: Optional[Layout] = None,
        *,
        socket_type: int = zmq.PUSH,
        linger_ms: int = 1000,
        fallback: Optional[Callable[[str], None]] = None,
    ):
        super().__init__(endpoint, fallback=fallback)
        self.endpoint = endpoint
        self.layout = layout or basic_layout

        self._ctx = zmq.Context.instance()
        self._sock = self._ctx.socket(socket_type)
        self._sock.setsockopt(zmq.LINGER, linger_ms)
        try:
            self._sock.connect(endpoint)
        except zmq.ZMQError as e:
            self._sock.close()
            raise AppenderOpenError(endpoint, str(e)) from e

        self._start_worker()

    def handle(self, event: LogEvent) -> None:
        self._enqueue((event.category.encode("utf-8"), self.layout(event).encode("utf-8")))

    def _write(self, frames: tuple) -> None:
        self._sock.send_multipart(list(frames))

    def _teardown(self) -> None:
        self._sock.close()

    def __repr__(self) -> str:
        return f"SocketSink({self.endpoint!r})"
