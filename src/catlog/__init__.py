"""catlog

Category-routed, level-filtered event logging.

    import catlog

    catlog.add_appender(catlog.file_appender("app.log"), "db")
    log = catlog.get_logger("db")
    log.set_level("INFO")
    log.warn("slow query", err)

The module-level functions operate on one default LogManager, which
starts with a single console appender so that logging works before any
configuration. clear_appenders() removes it.
"""

import atexit
from typing import List, Optional, Union

from catlog.core.appender_registry import AppenderRegistry, CallableSink, DispatchFailure, Sink, SinkLike
from catlog.core.date_format import format_date
from catlog.core.layouts import (
    basic_layout,
    colored_layout,
    coloured_layout,
    layout_by_name,
    message_pass_through_layout,
)
from catlog.core.log_event import LogEvent, NamedErrorLike, RealError
from catlog.core.log_exceptions import (
    AppenderClosedError,
    AppenderOpenError,
    CatlogError,
    ConfigurationError,
    InvalidLevelError,
)
from catlog.core.log_level import Level
from catlog.core.log_manager import LogManager
from catlog.core.logger import Logger
from catlog.sinks.console_sink import ConsoleSink
from catlog.sinks.file_sink import FileSink
from catlog.sinks.level_filter_sink import LevelFilterSink
from catlog.sinks.queue_sink import QueueSink
from catlog.sinks.socket_sink import SocketSink

__version__ = "0.3.0"

_default = LogManager()
_default.add_appender(ConsoleSink())
atexit.register(_default.shutdown)


def default_manager() -> LogManager:
    return _default


def get_logger(category: str = "[default]") -> Logger:
    return _default.get_logger(category)


def add_appender(sink: SinkLike, *categories: Union[str, List[str]]) -> Sink:
    return _default.add_appender(sink, *categories)


def clear_appenders() -> None:
    _default.clear_appenders()


def configure(path: Optional[str] = None) -> None:
    _default.configure(path)


def drain(timeout: Optional[float] = None) -> bool:
    return _default.drain(timeout)


def shutdown(timeout: Optional[float] = 5.0) -> None:
    _default.shutdown(timeout)


# -------------------------------------------------
# Appender factories
# -------------------------------------------------
def console_appender(layout=None) -> ConsoleSink:
    return ConsoleSink(layout)


def file_appender(path: str, layout=None) -> FileSink:
    return FileSink(path, layout)


def log_level_filter(level: Union[str, Level], wrapped: SinkLike) -> LevelFilterSink:
    return LevelFilterSink(level, wrapped)


def queue_appender(event_queue) -> QueueSink:
    return QueueSink(event_queue)


def socket_appender(endpoint: str, layout=None) -> SocketSink:
    return SocketSink(endpoint, layout)


levels = Level

__all__ = [
    "AppenderClosedError",
    "AppenderOpenError",
    "AppenderRegistry",
    "CallableSink",
    "CatlogError",
    "ConfigurationError",
    "ConsoleSink",
    "DispatchFailure",
    "FileSink",
    "InvalidLevelError",
    "Level",
    "LevelFilterSink",
    "LogEvent",
    "LogManager",
    "Logger",
    "NamedErrorLike",
    "QueueSink",
    "RealError",
    "Sink",
    "SocketSink",
    "add_appender",
    "basic_layout",
    "clear_appenders",
    "colored_layout",
    "coloured_layout",
    "configure",
    "console_appender",
    "default_manager",
    "drain",
    "file_appender",
    "format_date",
    "get_logger",
    "layout_by_name",
    "levels",
    "log_level_filter",
    "message_pass_through_layout",
    "queue_appender",
    "shutdown",
    "socket_appender",
]
