from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class CalendarBlock:
    id: str
    date: date
    reason: str = ""
    recurring: bool = False  # same month/day every year when True

    def applies_to(self, day: date) -> bool:
        if self.recurring:
            return (self.date.month, self.date.day) == (day.month, day.day)
        return self.date == day

    def same_slot(self, day: date, recurring: bool) -> bool:
        """True when a block for (day, recurring) would duplicate this one."""
        if self.recurring != recurring:
            return False
        if recurring:
            return (self.date.month, self.date.day) == (day.month, day.day)
        return self.date == day
