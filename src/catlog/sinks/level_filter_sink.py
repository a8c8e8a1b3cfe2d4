from typing import Union

from catlog.core.appender_registry import Sink, SinkLike, as_sink
from catlog.core.log_event import LogEvent
from catlog.core.log_level import Level


class LevelFilterSink:
    """
    Forwards events at or above `threshold` to the wrapped sink.

    The wrapped sink can be any sink, including another filter.
    """

    def __init__(self, threshold: Union[str, Level], wrapped: SinkLike):
        self.threshold = Level.parse(threshold)
        self.wrapped: Sink = as_sink(wrapped)

    def handle(self, event: LogEvent) -> None:
        if event.level < self.threshold:
            return
        self.wrapped.handle(event)

    def __repr__(self) -> str:
        return f"LevelFilterSink({self.threshold}, {self.wrapped!r})"
