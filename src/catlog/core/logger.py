from __future__ import annotations

from typing import Any, Callable, List, Optional, Union

from catlog.core.appender_registry import AppenderRegistry
from catlog.core.log_event import LogEvent, error_payload_from
from catlog.core.log_level import Level


Listener = Callable[[LogEvent], Any]


class Logger:
    """
    Handle bound to one category.

    Calls below the logger's level return before any LogEvent is
    built. Accepted calls notify the logger's own listeners, then go
    to the registry for dispatch.
    """

    def __init__(self, category: str, registry: AppenderRegistry, level: Union[str, Level] = Level.TRACE):
        self._category = category
        self._registry = registry
        self._level = Level.parse(level)
        self._listeners: List[Listener] = []

    @property
    def category(self) -> str:
        return self._category

    @property
    def level(self) -> Level:
        return self._level

    def set_level(self, level: Union[str, Level]) -> None:
        self._level = Level.parse(level)

    def is_level_enabled(self, level: Union[str, Level]) -> bool:
        return Level.parse(level) >= self._level

    # -------------------------------------------------
    # Listeners
    # -------------------------------------------------
    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # -------------------------------------------------
    # Emission
    # -------------------------------------------------
    def log(self, level: Union[str, Level], message: Any, error: Any = None) -> Optional[LogEvent]:
        """
        Emit an event at `level`.

        Returns the event that was dispatched, or None when the level
        is below this logger's threshold.
        """
        level = Level.parse(level)
        if level < self._level:
            return None

        event = LogEvent(
            category=self._category,
            level=level,
            message=message if isinstance(message, str) else str(message),
            error=error_payload_from(error),
        )

        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as exc:
                self._registry.record_failure(f"listener {listener!r}", event, exc)

        self._registry.dispatch(event)
        return event

    def trace(self, message: Any, error: Any = None) -> Optional[LogEvent]:
        return self.log(Level.TRACE, message, error)

    def debug(self, message: Any, error: Any = None) -> Optional[LogEvent]:
        return self.log(Level.DEBUG, message, error)

    def info(self, message: Any, error: Any = None) -> Optional[LogEvent]:
        return self.log(Level.INFO, message, error)

    def warn(self, message: Any, error: Any = None) -> Optional[LogEvent]:
        return self.log(Level.WARN, message, error)

    def error(self, message: Any, error: Any = None) -> Optional[LogEvent]:
        return self.log(Level.ERROR, message, error)

    def fatal(self, message: Any, error: Any = None) -> Optional[LogEvent]:
        return self.log(Level.FATAL, message, error)

    def __repr__(self) -> str:
        return f"Logger({self._category!r}, level={self._level})"
