from __future__ import annotations

from enum import Enum
from functools import total_ordering
from typing import Union

from catlog.core.log_exceptions import InvalidLevelError


@total_ordering
class Level(Enum):
    """
    Severity of a log event.

    Levels gate emission in Logger and optional filtering in
    LevelFilterSink. Ordering is by rank (the enum value).
    """

    TRACE = 5000    # Step-by-step execution detail
    DEBUG = 10000   # Developer diagnostics
    INFO = 20000    # Normal operation
    WARN = 30000    # Unexpected but recoverable
    ERROR = 40000   # Operation failed, process continues
    FATAL = 50000   # Process cannot continue

    @property
    def rank(self) -> int:
        return self.value

    @classmethod
    def parse(cls, name: Union[str, "Level"]) -> "Level":
        """
        Resolve a level from its name, case-insensitively.

        A Level instance is returned unchanged. Anything else that does
        not name a level raises InvalidLevelError.
        """
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            raise InvalidLevelError(name)
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise InvalidLevelError(name) from None

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.value < other.value

    def __str__(self) -> str:
        return self.name
