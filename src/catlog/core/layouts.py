"""layouts.py

Layouts turn a LogEvent into text. They are plain functions of the
event, so any callable with the signature `(LogEvent) -> str` can be
used wherever a layout is expected.
"""

from __future__ import annotations

from typing import Callable, Dict

from catlog.core.date_format import format_date
from catlog.core.log_event import LogEvent, NamedErrorLike, RealError
from catlog.core.log_level import Level


Layout = Callable[[LogEvent], str]

_RESET = "\x1b[39m"

# ANSI foreground colour per level
LEVEL_COLOURS: Dict[Level, str] = {
    Level.TRACE: "\x1b[34m",    # blue
    Level.DEBUG: "\x1b[36m",    # cyan
    Level.INFO: "\x1b[32m",     # green
    Level.WARN: "\x1b[33m",     # yellow
    Level.ERROR: "\x1b[31m",    # red
    Level.FATAL: "\x1b[35m",    # magenta
}


def _header(event: LogEvent) -> str:
    return f"[{format_date(event.start_time)}] [{event.level}] {event.category} - "


def _render(event: LogEvent, header: str) -> str:
    lines = [header + event.message]

    error = event.error
    if isinstance(error, RealError) and error.stack_lines:
        first, *rest = error.stack_lines
        lines.append(header + first)
        lines.extend(rest)
    elif isinstance(error, NamedErrorLike):
        lines.append(f"{header}{error.name}: {error.message}")

    return "\n".join(lines)


def basic_layout(event: LogEvent) -> str:
    """
    "[<timestamp>] [<LEVEL>] <category> - <message>", plus the error
    payload on the following lines when one is attached.
    """
    return _render(event, _header(event))


def coloured_layout(event: LogEvent) -> str:
    colour = LEVEL_COLOURS.get(event.level, "")
    return _render(event, f"{colour}{_header(event)}{_RESET}")


colored_layout = coloured_layout


def message_pass_through_layout(event: LogEvent) -> str:
    return event.message


LAYOUTS: Dict[str, Layout] = {
    "basic": basic_layout,
    "messagepassthrough": message_pass_through_layout,
    "coloured": coloured_layout,
    "colored": coloured_layout,
}


def layout_by_name(name: str) -> Layout:
    """
    Resolve a layout from its configuration name (case-insensitive).

    Raises KeyError for unknown names.
    """
    key = name.replace("_", "").replace("-", "").lower()
    if key not in LAYOUTS:
        raise KeyError(f"Unknown layout: {name}")
    return LAYOUTS[key]
