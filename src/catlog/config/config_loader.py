"""config_loader.py

Reads a JSON logging descriptor and applies it to a LogManager through
the same registration calls application code uses:

    registry.add_appender(sink, *categories)   # per appender, in order
    logger.set_level(level)                    # per "levels" entry

Every entry is validated and every sink is built before the first
registration, so a failing descriptor leaves the manager untouched.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Tuple

from catlog.config.config_schema import AppenderConfig, LoggingConfig, from_dict
from catlog.core.appender_registry import Sink
from catlog.core.layouts import layout_by_name
from catlog.core.log_exceptions import CatlogError, ConfigurationError
from catlog.sinks.console_sink import ConsoleSink
from catlog.sinks.file_sink import FileSink
from catlog.sinks.level_filter_sink import LevelFilterSink
from catlog.sinks.queued_sink import QueuedSink
from catlog.sinks.socket_sink import SocketSink

if TYPE_CHECKING:
    from catlog.core.log_manager import LogManager


CONFIG_ENV_VAR = "CATLOG_CONFIG"


def load_config(path: Optional[str] = None) -> LoggingConfig:
    """
    Read and validate a descriptor file.

    With no path, the path is taken from $CATLOG_CONFIG.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
        if not path:
            raise ConfigurationError(None, f"no descriptor path given and ${CONFIG_ENV_VAR} is not set")

    source = str(path)
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(source, f"cannot read descriptor: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigurationError(source, f"not valid JSON: {e}") from e

    return from_dict(data, source)


def build_sink(entry: AppenderConfig, built: List[Sink]) -> Sink:
    """
    Construct the sink for one entry. Queued sinks are appended to
    `built` as soon as they exist so the caller can close them if a
    later entry fails.
    """
    layout = layout_by_name(entry.layout) if entry.layout else None

    if entry.type == "console":
        return ConsoleSink(layout)

    if entry.type == "file":
        sink = FileSink(entry.filename, layout)
        built.append(sink)
        return sink

    if entry.type == "socket":
        sink = SocketSink(entry.endpoint, layout)
        built.append(sink)
        return sink

    if entry.type == "logLevelFilter":
        return LevelFilterSink(entry.level, build_sink(entry.appender, built))

    raise ConfigurationError(None, f"unsupported appender type {entry.type!r}")


def apply_config(manager: "LogManager", config: LoggingConfig, source: Optional[str] = None) -> None:
    built: List[Sink] = []
    planned: List[Tuple[Sink, Tuple[str, ...]]] = []

    for i, entry in enumerate(config.appenders):
        try:
            planned.append((build_sink(entry, built), entry.categories))
        except CatlogError as e:
            for sink in built:
                if isinstance(sink, QueuedSink):
                    sink.close()
            raise ConfigurationError(source, f"appenders[{i}] ({entry.type}): {e}") from e

    manager.clear_appenders()
    for sink, categories in planned:
        manager.add_appender(sink, *categories)
    manager.adopt_configured_sinks(built)

    for category, level in config.levels.items():
        manager.get_logger(category).set_level(level)


def configure_from_file(manager: "LogManager", path: Optional[str] = None) -> LoggingConfig:
    config = load_config(path)
    apply_config(manager, config, str(path) if path else os.environ.get(CONFIG_ENV_VAR))
    return config
