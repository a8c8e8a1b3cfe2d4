from typing import Optional


class CatlogError(Exception):
    pass


class InvalidLevelError(CatlogError, ValueError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown log level: {name!r}")


class AppenderOpenError(CatlogError, OSError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot open log file {path!r}: {reason}")


class AppenderClosedError(CatlogError):
    def __init__(self, sink_name: str):
        self.sink_name = sink_name
        super().__init__(f"Appender {sink_name} is closed")


class ConfigurationError(CatlogError, ValueError):
    def __init__(self, source: Optional[str], reason: str):
        self.source = source
        self.reason = reason
        where = f" ({source})" if source else ""
        super().__init__(f"Invalid logging configuration{where}: {reason}")
