from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from catlog.core.layouts import layout_by_name
from catlog.core.log_exceptions import ConfigurationError, InvalidLevelError
from catlog.core.log_level import Level


APPENDER_TYPES = ("console", "file", "logLevelFilter", "socket")

_ALLOWED_KEYS = {
    "console": {"type", "layout", "category", "categories"},
    "file": {"type", "layout", "category", "categories", "filename"},
    "logLevelFilter": {"type", "category", "categories", "level", "appender"},
    "socket": {"type", "layout", "category", "categories", "endpoint"},
}


@dataclass(frozen=True)
class AppenderConfig:
    """
    One validated appender entry of a logging descriptor.
    """

    type: str
    layout: Optional[str] = None
    categories: tuple[str, ...] = ()
    filename: Optional[str] = None
    level: Optional[Level] = None
    appender: Optional["AppenderConfig"] = None
    endpoint: Optional[str] = None


@dataclass(frozen=True)
class LoggingConfig:
    appenders: tuple[AppenderConfig, ...] = ()
    levels: Dict[str, Level] = field(default_factory=dict)


def _require_str(entry: Dict[str, Any], key: str, where: str, source: Optional[str]) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        raise ConfigurationError(source, f"{where}: '{key}' must be a non-empty string")
    return value


def _parse_level(value: Any, where: str, source: Optional[str]) -> Level:
    try:
        return Level.parse(value)
    except InvalidLevelError as e:
        raise ConfigurationError(source, f"{where}: {e}") from e


def _parse_layout(value: Any, where: str, source: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, dict):
        value = value.get("type")
    if not isinstance(value, str):
        raise ConfigurationError(source, f"{where}: 'layout' must be a name or {{\"type\": name}}")
    try:
        layout_by_name(value)
    except KeyError as e:
        raise ConfigurationError(source, f"{where}: unknown layout '{value}'") from e
    return value


def _parse_categories(entry: Dict[str, Any], where: str, source: Optional[str]) -> tuple[str, ...]:
    if "category" in entry and "categories" in entry:
        raise ConfigurationError(source, f"{where}: use either 'category' or 'categories', not both")

    value = entry.get("categories", entry.get("category"))
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list) and all(isinstance(c, str) for c in value):
        return tuple(value)
    raise ConfigurationError(source, f"{where}: categories must be a string or a list of strings")


def appender_from_dict(
    entry: Any, where: str, source: Optional[str] = None, *, nested: bool = False
) -> AppenderConfig:
    """
    Validate one appender entry. `where` names the entry in error
    messages (e.g. "appenders[2]").

    A nested entry (the `appender` of a logLevelFilter) is reached only
    through its parent, so it may not name categories of its own.
    """
    if not isinstance(entry, dict):
        raise ConfigurationError(source, f"{where}: appender entry must be an object")

    kind = entry.get("type")
    if kind not in APPENDER_TYPES:
        raise ConfigurationError(
            source, f"{where}: 'type' must be one of {', '.join(APPENDER_TYPES)}, got {kind!r}"
        )

    unknown = sorted(set(entry) - _ALLOWED_KEYS[kind])
    if unknown:
        raise ConfigurationError(source, f"{where}: unexpected keys for {kind}: {unknown}")

    if nested and ("category" in entry or "categories" in entry):
        raise ConfigurationError(
            source, f"{where}: nested appenders take their categories from the enclosing entry"
        )

    categories = _parse_categories(entry, where, source)

    if kind == "file":
        return AppenderConfig(
            type=kind,
            layout=_parse_layout(entry.get("layout"), where, source),
            categories=categories,
            filename=_require_str(entry, "filename", where, source),
        )

    if kind == "socket":
        return AppenderConfig(
            type=kind,
            layout=_parse_layout(entry.get("layout"), where, source),
            categories=categories,
            endpoint=_require_str(entry, "endpoint", where, source),
        )

    if kind == "logLevelFilter":
        if "level" not in entry:
            raise ConfigurationError(source, f"{where}: logLevelFilter requires 'level'")
        if "appender" not in entry:
            raise ConfigurationError(source, f"{where}: logLevelFilter requires 'appender'")
        return AppenderConfig(
            type=kind,
            categories=categories,
            level=_parse_level(entry["level"], where, source),
            appender=appender_from_dict(entry["appender"], f"{where}.appender", source, nested=True),
        )

    return AppenderConfig(
        type=kind,
        layout=_parse_layout(entry.get("layout"), where, source),
        categories=categories,
    )


def from_dict(data: Any, source: Optional[str] = None) -> LoggingConfig:
    """
    Convert a parsed descriptor into a LoggingConfig, validating every
    entry before anything is applied.
    """
    if not isinstance(data, dict):
        raise ConfigurationError(source, "descriptor must be a JSON object")

    unknown = sorted(set(data) - {"appenders", "levels"})
    if unknown:
        raise ConfigurationError(source, f"unexpected top-level keys: {unknown}")

    raw_appenders = data.get("appenders", [])
    if not isinstance(raw_appenders, list):
        raise ConfigurationError(source, "'appenders' must be a list")

    raw_levels = data.get("levels", {})
    if not isinstance(raw_levels, dict):
        raise ConfigurationError(source, "'levels' must be an object")

    appenders = tuple(
        appender_from_dict(entry, f"appenders[{i}]", source)
        for i, entry in enumerate(raw_appenders)
    )
    levels = {
        str(category): _parse_level(level, f"levels.{category}", source)
        for category, level in raw_levels.items()
    }

    return LoggingConfig(appenders=appenders, levels=levels)
