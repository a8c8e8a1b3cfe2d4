from __future__ import annotations

import sys
import traceback
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Dict, Iterable, List, Optional, Protocol, Union

from catlog.core.log_event import LogEvent


class Sink(Protocol):
    """
    Destination for log events (an appender).

    A sink may write, forward, filter or buffer the event. handle()
    runs on the logging caller's thread and should return quickly;
    sinks with slow I/O queue the work instead.
    """

    def handle(self, event: LogEvent) -> None:
        ...


class CallableSink:
    """
    Adapts a plain function `fn(event)` to the Sink protocol.
    """

    def __init__(self, fn: Callable[[LogEvent], Any]):
        self.fn = fn

    def handle(self, event: LogEvent) -> None:
        self.fn(event)

    def __repr__(self) -> str:
        return f"CallableSink({getattr(self.fn, '__qualname__', self.fn)!r})"


SinkLike = Union[Sink, Callable[[LogEvent], Any]]


def as_sink(target: SinkLike) -> Sink:
    if hasattr(target, "handle"):
        return target  # type: ignore[return-value]
    if callable(target):
        return CallableSink(target)
    raise TypeError(f"Not a sink or callable: {target!r}")


@dataclass(frozen=True)
class DispatchFailure:
    """
    A listener or sink that raised while receiving an event.
    """

    target: str
    category: str
    exception: BaseException


def report_to_stderr(text: str) -> None:
    print(text, file=sys.stderr)


def flatten_categories(categories: Iterable[Any]) -> List[str]:
    """
    Accept both variadic strings and a single list/tuple of strings.
    """
    flat: List[str] = []
    for item in categories:
        if isinstance(item, str):
            flat.append(item)
        elif isinstance(item, (list, tuple, set, frozenset)):
            flat.extend(flatten_categories(item))
        else:
            raise TypeError(f"Category must be a string, got {item!r}")
    return flat


class AppenderRegistry:
    """
    Routing table from categories to sinks.

    Sinks registered without a category receive every event. Sinks
    registered with categories receive only events whose category is
    exactly one of them; there is no prefix or hierarchy matching.

    Mutation (add_appender / clear_appenders) is not synchronized
    against dispatch. Register sinks during setup, before loggers are
    used from other threads.
    """

    MAX_RECORDED_FAILURES = 100

    def __init__(self, *, fallback: Optional[Callable[[str], None]] = None):
        self._global_sinks: List[Sink] = []
        self._category_sinks: Dict[str, List[Sink]] = {}
        self._report = fallback or report_to_stderr
        self._failures: Deque[DispatchFailure] = deque(maxlen=self.MAX_RECORDED_FAILURES)

    # -------------------------------------------------
    # Registration
    # -------------------------------------------------
    def add_appender(self, sink: SinkLike, *categories: Union[str, Iterable[str]]) -> Sink:
        """
        Register a sink globally (no categories) or for each category.

        add_appender(s, "a", "b") and add_appender(s, ["a", "b"]) are
        equivalent. Returns the registered sink (plain callables are
        wrapped in a CallableSink).
        """
        target = as_sink(sink)
        names = flatten_categories(categories)

        if not names:
            self._global_sinks.append(target)
            return target

        for name in names:
            self._category_sinks.setdefault(name, []).append(target)
        return target

    def clear_appenders(self) -> None:
        self._global_sinks = []
        self._category_sinks = {}

    # -------------------------------------------------
    # Dispatch
    # -------------------------------------------------
    def dispatch(self, event: LogEvent) -> None:
        """
        Hand the event to every matching sink, global sinks first.

        A sink that raises is recorded and reported; the remaining
        sinks still receive the event.
        """
        for sink in self.sinks_for(event.category):
            try:
                sink.handle(event)
            except Exception as exc:
                self.record_failure(repr(sink), event, exc)

    def record_failure(self, target: str, event: LogEvent, exc: BaseException) -> None:
        self._failures.append(DispatchFailure(target=target, category=event.category, exception=exc))
        details = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        self._report(
            f"[catlog] {target} failed on [{event.level}] {event.category} event: {exc!r}\n{details}"
        )

    # -------------------------------------------------
    # Introspection
    # -------------------------------------------------
    def sinks_for(self, category: str) -> List[Sink]:
        return self._global_sinks + self._category_sinks.get(category, [])

    def all_sinks(self) -> List[Sink]:
        seen: List[Sink] = []
        for sink in self._global_sinks:
            if not any(sink is s for s in seen):
                seen.append(sink)
        for sinks in self._category_sinks.values():
            for sink in sinks:
                if not any(sink is s for s in seen):
                    seen.append(sink)
        return seen

    def recent_failures(self) -> List[DispatchFailure]:
        return list(self._failures)
