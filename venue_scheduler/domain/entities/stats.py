from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from venue_scheduler.domain.entities.booking import Booking, ClientRef
from venue_scheduler.domain.entities.calendar_block import CalendarBlock
from venue_scheduler.domain.entities.interval import Interval


@dataclass(frozen=True)
class ConversionPeriodStats:
    period_key: str  # YYYY-MM, YYYY-Tn or YYYY
    quote_count: int = 0  # every booking observed in the period
    confirmed_count: int = 0
    completed_count: int = 0
    cancelled_count: int = 0
    conversion_rate: float = 0.0
    completion_rate: float = 0.0
    total_value: Decimal = Decimal("0")
    average_value: Decimal = Decimal("0")


@dataclass(frozen=True)
class PeriodRevenue:
    period_key: str
    realized: Decimal = Decimal("0")
    forecast: Decimal = Decimal("0")


@dataclass(frozen=True)
class PeriodCompletion:
    period_key: str
    completed: int = 0
    total: int = 0
    completion_rate: float = 0.0


@dataclass(frozen=True)
class EventTypeConversion:
    event_type: str
    total: int = 0
    converted: int = 0
    rate: float = 0.0


@dataclass(frozen=True)
class QuoteConversion:
    total: int = 0
    converted: int = 0
    rate: float = 0.0
    by_type: dict[str, EventTypeConversion] = field(default_factory=dict)


@dataclass(frozen=True)
class ConversionInsights:
    best_conversion_period: str | None = None
    highest_average_value: Decimal = Decimal("0")
    cancellation_rate: float = 0.0


@dataclass(frozen=True)
class RecurringClient:
    client: ClientRef
    event_count: int
    total_value: Decimal
    is_recurring: bool


@dataclass(frozen=True)
class RecurringClientsReport:
    clients: list[RecurringClient] = field(default_factory=list)
    total_recurring: int = 0
    rate: float = 0.0
    average_events_per_client: float = 0.0


@dataclass(frozen=True)
class HourBucket:
    hour: str  # "HH:00"
    bookings: list[Booking] = field(default_factory=list)


@dataclass(frozen=True)
class AvailabilityReport:
    candidate: Interval
    conflicts: list[Booking] = field(default_factory=list)
    blocks: list[CalendarBlock] = field(default_factory=list)

    @property
    def available(self) -> bool:
        return not self.conflicts

    @property
    def blocked(self) -> bool:
        return bool(self.blocks)


@dataclass(frozen=True)
class MonthStats:
    month_key: str
    month_events: int = 0
    month_revenue: Decimal = Decimal("0")
    confirmed_events: int = 0
    pending_payments: int = 0
    total_events: int = 0
    completed_events: int = 0
    cancelled_events: int = 0
    quote_events: int = 0


@dataclass(frozen=True)
class DashboardSnapshot:
    total_events: int = 0
    confirmed_events: int = 0
    completed_events: int = 0
    cancelled_events: int = 0
    quote_events: int = 0
    monthly_revenue: Decimal = Decimal("0")
    total_revenue: Decimal = Decimal("0")
    pending_payments: int = 0
    overdue_payments: int = 0
    upcoming_events: list[Booking] = field(default_factory=list)
    events_by_status: dict[str, int] = field(default_factory=dict)
    events_by_month: dict[str, int] = field(default_factory=dict)
    revenue_by_month: dict[str, Decimal] = field(default_factory=dict)
