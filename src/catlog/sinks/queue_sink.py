import queue

from catlog.core.log_event import LogEvent


class QueueSink:
    """
    Sink that forwards events to a thread-safe queue.

    Used by GUI viewers and tests that consume events on another
    thread. It performs no rendering of its own.
    """

    def __init__(self, event_queue: queue.Queue):
        self._queue = event_queue

    def handle(self, event: LogEvent) -> None:
        """
        Forward an event to the queue.

        A full bounded queue raises queue.Full, which the registry
        records as a failed delivery.
        """
        self._queue.put_nowait(event)

    def __repr__(self) -> str:
        return "QueueSink()"
