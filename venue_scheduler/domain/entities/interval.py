from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import TYPE_CHECKING

from venue_scheduler.domain.exceptions import InvalidInterval

if TYPE_CHECKING:
    from venue_scheduler.domain.entities.booking import Booking


def parse_time_of_day(value: str | time) -> time:
    """Parse `HH:MM` or `HH:MM:SS` into a minute-precision time-of-day.

    A seconds field is accepted only when it is zero.
    """
    if isinstance(value, time):
        parsed = value
    else:
        parts = value.strip().split(":")
        if len(parts) not in (2, 3):
            raise ValueError(f"Invalid time of day: {value!r}")
        try:
            second = float(parts[2]) if len(parts) == 3 else 0.0
            if second:
                raise ValueError("seconds are not supported")
            parsed = time(int(parts[0]), int(parts[1]))
        except ValueError as e:
            raise ValueError(f"Invalid time of day: {value!r}") from e
    if not is_whole_minute(parsed):
        raise ValueError(f"Invalid time of day: {value!r} (times are minute-precision)")
    return parsed


def is_whole_minute(value: time) -> bool:
    return value.second == 0 and value.microsecond == 0


def minutes_since_midnight(value: time) -> int:
    return value.hour * 60 + value.minute


@dataclass(frozen=True)
class Interval:
    """Occupied window of a single calendar day, half-open: [start, end)."""

    date: date
    start: time
    end: time

    def __post_init__(self) -> None:
        if not (is_whole_minute(self.start) and is_whole_minute(self.end)):
            raise InvalidInterval(
                f"Interval on {self.date.isoformat()} has sub-minute times "
                f"({self.start.isoformat()} - {self.end.isoformat()}); times are minute-precision"
            )
        if minutes_since_midnight(self.start) >= minutes_since_midnight(self.end):
            raise InvalidInterval(
                f"Interval on {self.date.isoformat()} must start before it ends "
                f"({self.start.strftime('%H:%M')} >= {self.end.strftime('%H:%M')})"
            )

    @classmethod
    def of(cls, booking: "Booking") -> "Interval":
        # Stored bookings are validated at the write boundary, not here.
        interval = object.__new__(cls)
        object.__setattr__(interval, "date", booking.date)
        object.__setattr__(interval, "start", booking.start_time)
        object.__setattr__(interval, "end", booking.end_time)
        return interval

    @property
    def start_minutes(self) -> int:
        return minutes_since_midnight(self.start)

    @property
    def end_minutes(self) -> int:
        return minutes_since_midnight(self.end)

    def overlaps(self, other: "Interval") -> bool:
        return overlaps(self, other)


def overlaps(a: Interval, b: Interval) -> bool:
    if a.date != b.date:
        return False
    return a.start_minutes < b.end_minutes and b.start_minutes < a.end_minutes
