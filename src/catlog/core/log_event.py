from __future__ import annotations

import traceback
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Union

from catlog.core.log_level import Level


@dataclass(frozen=True)
class RealError:
    """
    Error payload that carries a stack.

    stack_lines[0] is conventionally "<ErrorName>: <message>"; the
    remaining lines are rendered verbatim by layouts.
    """

    name: str
    message: str
    stack_lines: tuple[str, ...]


@dataclass(frozen=True)
class NamedErrorLike:
    """
    Error payload that only exposes a name and a message.
    """

    name: str
    message: str


ErrorPayload = Union[RealError, NamedErrorLike]


def _field(source: Any, key: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(key)
    return getattr(source, key, None)


def _stack_of(exc: BaseException) -> tuple[str, ...]:
    text = str(exc)
    header = f"{type(exc).__name__}: {text}" if text else type(exc).__name__
    frames = "".join(traceback.format_tb(exc.__traceback__)).splitlines()
    return (header, *frames)


def error_payload_from(value: Any) -> Optional[ErrorPayload]:
    """
    Classify whatever was passed as the error argument of a log call.

    - exceptions become RealError with their traceback as stack lines
    - anything exposing `stack` (string or sequence of lines) becomes RealError
    - anything exposing `name` and `message` becomes NamedErrorLike
    - any other value becomes NamedErrorLike(type name, str(value))
    """
    if value is None:
        return None

    if isinstance(value, BaseException):
        return RealError(
            name=type(value).__name__,
            message=str(value),
            stack_lines=_stack_of(value),
        )

    name = _field(value, "name")
    message = _field(value, "message")
    stack = _field(value, "stack")

    if stack:
        lines = stack.splitlines() if isinstance(stack, str) else [str(s) for s in stack]
        return RealError(
            name=str(name or type(value).__name__),
            message=str(message or ""),
            stack_lines=tuple(lines),
        )

    if name is not None and message is not None:
        return NamedErrorLike(name=str(name), message=str(message))

    return NamedErrorLike(name=type(value).__name__, message=str(value))


@dataclass(frozen=True)
class LogEvent:
    """
    Immutable record of a single log call.

    Built once by Logger and handed by reference to every listener
    and sink that receives it.
    """

    category: str
    level: Level
    message: str
    error: Optional[ErrorPayload] = None
    start_time: datetime = field(default_factory=datetime.now)
