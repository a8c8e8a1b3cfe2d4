from __future__ import annotations

from typing import Callable, Dict, List, Optional, Union

from catlog.config.config_loader import configure_from_file
from catlog.core.appender_registry import AppenderRegistry, Sink, SinkLike
from catlog.core.logger import Logger
from catlog.sinks.level_filter_sink import LevelFilterSink
from catlog.sinks.queued_sink import QueuedSink


class LogManager:
    """
    Central coordinator for one logging setup.

    LogManager owns an AppenderRegistry and the loggers bound to it.
    Loggers are created on first request and cached by category for
    the manager's lifetime. Tests build a fresh manager; applications
    normally use the default one held by the `catlog` facade.
    """

    def __init__(self, *, fallback: Optional[Callable[[str], None]] = None):
        self.registry = AppenderRegistry(fallback=fallback)
        self._loggers: Dict[str, Logger] = {}
        self._configured_sinks: List[Sink] = []

    def get_logger(self, category: str) -> Logger:
        logger = self._loggers.get(category)
        if logger is None:
            logger = Logger(category, self.registry)
            self._loggers[category] = logger
        return logger

    def add_appender(self, sink: SinkLike, *categories: Union[str, List[str]]) -> Sink:
        return self.registry.add_appender(sink, *categories)

    def clear_appenders(self) -> None:
        self.registry.clear_appenders()

    # -------------------------------------------------
    # Configuration
    # -------------------------------------------------
    def configure(self, path: Optional[str] = None) -> None:
        """
        Replace the current appenders with those described in a
        JSON descriptor (path, or $CATLOG_CONFIG when omitted).
        """
        configure_from_file(self, path)

    def adopt_configured_sinks(self, sinks: List[Sink]) -> None:
        """
        Record sinks built by the config loader, closing the ones a
        previous configure() call created.
        """
        previous, self._configured_sinks = self._configured_sinks, list(sinks)
        for sink in previous:
            _close(sink)

    # -------------------------------------------------
    # Completion
    # -------------------------------------------------
    def drain(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for every registered sink with a pending queue to empty.
        """
        done = True
        for sink in self.registry.all_sinks():
            target = _unwrap(sink)
            if isinstance(target, QueuedSink):
                done = target.drain(timeout) and done
        return done

    def shutdown(self, timeout: Optional[float] = 5.0) -> None:
        """
        Drain and close every registered or configured sink, then clear
        the appenders.
        """
        for sink in self.registry.all_sinks() + self._configured_sinks:
            _close(sink, timeout)
        self._configured_sinks = []
        self.registry.clear_appenders()


def _unwrap(sink: Sink) -> Sink:
    while isinstance(sink, LevelFilterSink):
        sink = sink.wrapped
    return sink


def _close(sink: Sink, timeout: Optional[float] = 5.0) -> None:
    target = _unwrap(sink)
    if isinstance(target, QueuedSink):
        target.close(timeout)
