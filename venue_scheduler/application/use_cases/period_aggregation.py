"""Period-grouped booking statistics for the reporting views."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Iterable

from venue_scheduler.application.exceptions import InvalidArgument
from venue_scheduler.application.ports.client_directory import ClientDirectoryPort
from venue_scheduler.application.utils.dates import month_key, parse_month_key
from venue_scheduler.application.utils.options import coerce_option
from venue_scheduler.domain.entities.booking import Booking, BookingStatus, ClientRef
from venue_scheduler.domain.entities.stats import (
    ConversionInsights,
    ConversionPeriodStats,
    EventTypeConversion,
    PeriodCompletion,
    PeriodRevenue,
    QuoteConversion,
    RecurringClient,
    RecurringClientsReport,
)

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


class Granularity(str, Enum):
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class ReportSpan(str, Enum):
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    SEMIANNUAL = "SEMIANNUAL"


def period_key(day: date, granularity: Granularity | str) -> str:
    granularity = coerce_option(Granularity, granularity, "granularity")
    if granularity is Granularity.MONTH:
        return month_key(day)
    if granularity is Granularity.QUARTER:
        return f"{day.year:04d}-T{(day.month - 1) // 3 + 1}"
    return f"{day.year:04d}"


def percentage(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return part / whole * 100


@dataclass
class _PeriodCounter:
    quotes: int = 0
    confirmed: int = 0
    completed: int = 0
    cancelled: int = 0
    total_value: Decimal = Decimal("0")

    def add(self, booking: Booking) -> None:
        # Every booking counts as a quote, whatever its status.
        self.quotes += 1
        self.total_value += booking.total_value
        if booking.status is BookingStatus.CONFIRMED:
            self.confirmed += 1
        elif booking.status is BookingStatus.COMPLETED:
            self.completed += 1
        elif booking.status is BookingStatus.CANCELLED:
            self.cancelled += 1

    def freeze(self, key: str) -> ConversionPeriodStats:
        converted = self.confirmed + self.completed
        average = (self.total_value / self.quotes).quantize(CENTS, ROUND_HALF_UP) if self.quotes else Decimal("0")
        return ConversionPeriodStats(
            period_key=key,
            quote_count=self.quotes,
            confirmed_count=self.confirmed,
            completed_count=self.completed,
            cancelled_count=self.cancelled,
            conversion_rate=percentage(converted, self.quotes),
            completion_rate=percentage(self.completed, converted),
            total_value=self.total_value,
            average_value=average,
        )


def aggregate(
    bookings: Iterable[Booking],
    granularity: Granularity | str = Granularity.MONTH,
    trailing_periods: int | None = 6,
) -> list[ConversionPeriodStats]:
    """Conversion statistics per period, oldest first.

    Only the most recent `trailing_periods` periods are kept; pass None to keep
    them all. Cancelled bookings still count toward `total_value`.
    """
    if trailing_periods is not None and trailing_periods < 0:
        raise InvalidArgument("trailing_periods must be non-negative")
    granularity = coerce_option(Granularity, granularity, "granularity")

    counters: dict[str, _PeriodCounter] = defaultdict(_PeriodCounter)
    for booking in bookings:
        counters[period_key(booking.date, granularity)].add(booking)

    stats = [counters[key].freeze(key) for key in sorted(counters)]
    if trailing_periods is not None:
        stats = stats[-trailing_periods:] if trailing_periods else []

    logger.debug(
        "Aggregated bookings by period",
        extra={"granularity": granularity.value, "count": len(stats)},
    )
    return stats


def revenue_by_period(bookings: Iterable[Booking]) -> list[PeriodRevenue]:
    """Realized (completed) and forecast (confirmed) revenue per month."""
    realized: dict[str, Decimal] = defaultdict(Decimal)
    forecast: dict[str, Decimal] = defaultdict(Decimal)
    for booking in bookings:
        key = month_key(booking.date)
        if booking.status is BookingStatus.COMPLETED:
            realized[key] += booking.total_value
        elif booking.status is BookingStatus.CONFIRMED:
            forecast[key] += booking.total_value

    return [
        PeriodRevenue(period_key=key, realized=realized.get(key, Decimal("0")), forecast=forecast.get(key, Decimal("0")))
        for key in sorted(set(realized) | set(forecast))
    ]


def completion_by_period(bookings: Iterable[Booking]) -> list[PeriodCompletion]:
    totals: dict[str, int] = defaultdict(int)
    completed: dict[str, int] = defaultdict(int)
    for booking in bookings:
        key = month_key(booking.date)
        totals[key] += 1
        if booking.status is BookingStatus.COMPLETED:
            completed[key] += 1

    return [
        PeriodCompletion(
            period_key=key,
            completed=completed[key],
            total=totals[key],
            completion_rate=percentage(completed[key], totals[key]),
        )
        for key in sorted(totals)
    ]


def quote_conversion(bookings: Iterable[Booking]) -> QuoteConversion:
    """Share of open quotes that became confirmed, overall and per event type.

    Only QUOTE and CONFIRMED bookings take part; completed and cancelled ones
    have left the sales pipeline.
    """
    totals: dict[str, int] = defaultdict(int)
    converted: dict[str, int] = defaultdict(int)
    for booking in bookings:
        if booking.status not in (BookingStatus.QUOTE, BookingStatus.CONFIRMED):
            continue
        totals[booking.event_type] += 1
        if booking.status is BookingStatus.CONFIRMED:
            converted[booking.event_type] += 1

    by_type = {
        event_type: EventTypeConversion(
            event_type=event_type,
            total=total,
            converted=converted[event_type],
            rate=percentage(converted[event_type], total),
        )
        for event_type, total in totals.items()
    }
    total = sum(totals.values())
    total_converted = sum(converted.values())
    return QuoteConversion(
        total=total,
        converted=total_converted,
        rate=percentage(total_converted, total),
        by_type=by_type,
    )


def conversion_insights(stats: list[ConversionPeriodStats]) -> ConversionInsights:
    if not stats:
        return ConversionInsights()

    # max() keeps the first of equal candidates, so ties go to the oldest period.
    best = max(stats, key=lambda s: s.conversion_rate)
    highest_average = max(s.average_value for s in stats)
    return ConversionInsights(
        best_conversion_period=best.period_key,
        highest_average_value=highest_average,
        cancellation_rate=percentage(
            sum(s.cancelled_count for s in stats),
            sum(s.quote_count for s in stats),
        ),
    )


def bookings_in_period(
    bookings: Iterable[Booking],
    reference_month: str,
    span: ReportSpan | str = ReportSpan.MONTHLY,
) -> list[Booking]:
    """Bookings in the month, quarter or half-year containing `reference_month` (YYYY-MM)."""
    try:
        year, month = parse_month_key(reference_month)
    except ValueError as e:
        raise InvalidArgument(str(e)) from e
    span = coerce_option(ReportSpan, span, "report span")

    def bucket(m: int) -> int:
        if span is ReportSpan.MONTHLY:
            return m
        if span is ReportSpan.QUARTERLY:
            return (m - 1) // 3
        return (m - 1) // 6

    target = bucket(month)
    return [b for b in bookings if b.date.year == year and bucket(b.date.month) == target]


def recurring_clients(
    bookings: Iterable[Booking],
    directory: ClientDirectoryPort | None = None,
    limit: int = 10,
    client_count: int | None = None,
) -> RecurringClientsReport:
    """Clients ranked by number of bookings.

    `client_count` is the size of the whole client base; it defaults to the
    number of clients that have at least one booking.
    """
    counts: dict[int, int] = defaultdict(int)
    totals: dict[int, Decimal] = defaultdict(Decimal)
    refs: dict[int, ClientRef] = {}
    event_total = 0
    for booking in bookings:
        event_total += 1
        client_id = booking.client.id
        counts[client_id] += 1
        totals[client_id] += booking.total_value
        refs.setdefault(client_id, booking.client)

    entries: list[RecurringClient] = []
    for client_id, count in counts.items():
        ref = refs[client_id]
        if directory is not None:
            ref = directory.resolve_client(client_id) or ref
        entries.append(
            RecurringClient(
                client=ref,
                event_count=count,
                total_value=totals[client_id],
                is_recurring=count > 1,
            )
        )
    entries.sort(key=lambda e: e.event_count, reverse=True)

    base = client_count if client_count is not None else len(entries)
    recurring_total = sum(1 for e in entries if e.is_recurring)
    return RecurringClientsReport(
        clients=entries[:limit],
        total_recurring=recurring_total,
        rate=percentage(recurring_total, base),
        average_events_per_client=event_total / (base or 1),
    )
