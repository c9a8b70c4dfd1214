from __future__ import annotations

from enum import Enum


class TimeUnit(str, Enum):
    NANOSECONDS = "NANOSECONDS"
    MICROSECONDS = "MICROSECONDS"
    MILLISECONDS = "MILLISECONDS"
    SECONDS = "SECONDS"
    MINUTES = "MINUTES"
    HOURS = "HOURS"
    DAYS = "DAYS"

    @property
    def seconds(self) -> float:
        """Length of one unit in seconds."""
        return _UNIT_SECONDS[self.value]

    @classmethod
    def from_str(cls, value: str) -> "TimeUnit":
        """Parse a unit name case-insensitively; short aliases like 's' or 'ms' are accepted."""
        s = value.strip().upper()
        alias_map = {
            "NS": cls.NANOSECONDS,
            "US": cls.MICROSECONDS,
            "MS": cls.MILLISECONDS,
            "S": cls.SECONDS,
            "SEC": cls.SECONDS,
            "M": cls.MINUTES,
            "MIN": cls.MINUTES,
            "H": cls.HOURS,
            "D": cls.DAYS,
        }
        if s in alias_map:
            return alias_map[s]
        return cls(s)


_UNIT_SECONDS: dict[str, float] = {
    "NANOSECONDS": 1e-9,
    "MICROSECONDS": 1e-6,
    "MILLISECONDS": 1e-3,
    "SECONDS": 1.0,
    "MINUTES": 60.0,
    "HOURS": 3600.0,
    "DAYS": 86400.0,
}
