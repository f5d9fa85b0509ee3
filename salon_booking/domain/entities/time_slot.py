from __future__ import annotations

import re
from dataclasses import dataclass


_LABEL_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AaPp][Mm])\s*$")


@dataclass(frozen=True, order=True)
class TimeSlot:
    hour: int
    minute: int

    def __post_init__(self) -> None:
        if not 0 <= self.hour <= 23:
            raise ValueError(f"hour must be within 0-23, got {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"minute must be within 0-59, got {self.minute}")

    @property
    def minutes_of_day(self) -> int:
        return self.hour * 60 + self.minute

    @property
    def label(self) -> str:
        """12-hour label stored on bookings, e.g. "1:30 PM"."""
        display_hour = self.hour % 12 or 12
        suffix = "PM" if self.hour >= 12 else "AM"
        return f"{display_hour}:{self.minute:02d} {suffix}"

    @classmethod
    def from_label(cls, label: str) -> "TimeSlot":
        match = _LABEL_RE.match(label or "")
        if not match:
            raise ValueError(f"Invalid time label: {label!r}")
        hour = int(match.group(1))
        minute = int(match.group(2))
        if not 1 <= hour <= 12:
            raise ValueError(f"Invalid time label: {label!r}")
        hour = hour % 12
        if match.group(3).upper() == "PM":
            hour += 12
        return cls(hour=hour, minute=minute)

    def __str__(self) -> str:
        return self.label
