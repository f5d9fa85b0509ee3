from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BusinessHours:
    """
    Bookable window of a business day.

    Slots start at open_hour:00 and run up to, but excluding, close_hour:00,
    one every granularity_minutes.
    """

    open_hour: int = 12
    close_hour: int = 21
    granularity_minutes: int = 30

    def __post_init__(self) -> None:
        if not 0 <= self.open_hour < self.close_hour <= 24:
            raise ValueError(
                f"Business hours must satisfy 0 <= open < close <= 24, got {self.open_hour}-{self.close_hour}"
            )
        if self.granularity_minutes <= 0 or 60 % self.granularity_minutes != 0:
            raise ValueError(f"granularity_minutes must divide 60, got {self.granularity_minutes}")

    @property
    def slots_per_day(self) -> int:
        return (self.close_hour - self.open_hour) * 60 // self.granularity_minutes
