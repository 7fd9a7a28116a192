from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from enum import Enum

from venue_scheduler.domain.entities.interval import Interval


class BookingStatus(str, Enum):
    QUOTE = "QUOTE"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class ClientRef:
    id: int
    name: str = ""


@dataclass(frozen=True)
class Booking:
    id: int
    title: str
    date: date
    start_time: time
    end_time: time
    status: BookingStatus
    client: ClientRef
    event_type: str = ""
    total_value: Decimal = Decimal("0")
    deposit_value: Decimal = Decimal("0")
    guest_count: int = 0
    balance_due_date: date | None = None
    notes: str | None = None

    @property
    def interval(self) -> Interval:
        return Interval.of(self)

    @property
    def balance_value(self) -> Decimal:
        return self.total_value - self.deposit_value

    @property
    def is_cancelled(self) -> bool:
        return self.status is BookingStatus.CANCELLED
