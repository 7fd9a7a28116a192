from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable

from venue_scheduler.application.utils.dates import business_date, month_key, trailing_month_keys
from venue_scheduler.domain.entities.booking import Booking, BookingStatus
from venue_scheduler.domain.entities.stats import DashboardSnapshot, MonthStats


def is_pending_payment(booking: Booking) -> bool:
    return booking.status is BookingStatus.CONFIRMED and booking.deposit_value < booking.total_value


def is_overdue_payment(booking: Booking, today: date) -> bool:
    """Pending balance past its due date.

    Bookings without a due date keep the legacy rule and count whenever the
    balance is pending.
    """
    if not is_pending_payment(booking):
        return False
    if booking.balance_due_date is None:
        return True
    return booking.balance_due_date < today


def upcoming_confirmed(
    bookings: Iterable[Booking],
    today: date,
    window_days: int = 7,
    limit: int | None = None,
) -> list[Booking]:
    horizon = today + timedelta(days=window_days)
    upcoming = sorted(
        (
            b for b in bookings
            if b.status is BookingStatus.CONFIRMED and today <= b.date <= horizon
        ),
        key=lambda b: (b.date, b.start_time),
    )
    return upcoming if limit is None else upcoming[:limit]


def summarize(
    bookings: Iterable[Booking],
    now: datetime | date,
    upcoming_limit: int = 5,
    trailing_months: int = 6,
    upcoming_window_days: int = 7,
) -> DashboardSnapshot:
    bookings = list(bookings)
    today = business_date(now)
    current_month = month_key(today)

    status_counts = Counter(b.status for b in bookings)
    active = [b for b in bookings if not b.is_cancelled]

    month_keys = trailing_month_keys(today, trailing_months)
    in_window = [b for b in bookings if month_key(b.date) in month_keys]
    events_by_month = dict.fromkeys(month_keys, 0)
    revenue_by_month = {key: Decimal("0") for key in month_keys}
    for booking in in_window:
        key = month_key(booking.date)
        events_by_month[key] += 1
        if not booking.is_cancelled:
            revenue_by_month[key] += booking.total_value

    window_status = Counter(b.status for b in in_window)

    return DashboardSnapshot(
        total_events=len(bookings),
        confirmed_events=status_counts[BookingStatus.CONFIRMED],
        completed_events=status_counts[BookingStatus.COMPLETED],
        cancelled_events=status_counts[BookingStatus.CANCELLED],
        quote_events=status_counts[BookingStatus.QUOTE],
        monthly_revenue=sum(
            (b.total_value for b in active if month_key(b.date) == current_month),
            Decimal("0"),
        ),
        total_revenue=sum((b.total_value for b in active), Decimal("0")),
        pending_payments=sum(1 for b in bookings if is_pending_payment(b)),
        overdue_payments=sum(1 for b in bookings if is_overdue_payment(b, today)),
        upcoming_events=upcoming_confirmed(bookings, today, upcoming_window_days, upcoming_limit),
        events_by_status={status.value: window_status[status] for status in BookingStatus},
        events_by_month=events_by_month,
        revenue_by_month=revenue_by_month,
    )


def month_stats(bookings: Iterable[Booking], month: str) -> MonthStats:
    """Header figures of the event-management view for one `YYYY-MM` month."""
    bookings = list(bookings)
    month_events = [b for b in bookings if month_key(b.date) == month and not b.is_cancelled]
    status_counts = Counter(b.status for b in bookings)
    return MonthStats(
        month_key=month,
        month_events=len(month_events),
        month_revenue=sum((b.total_value for b in month_events), Decimal("0")),
        confirmed_events=status_counts[BookingStatus.CONFIRMED],
        pending_payments=sum(1 for b in bookings if is_pending_payment(b)),
        total_events=len(bookings),
        completed_events=status_counts[BookingStatus.COMPLETED],
        cancelled_events=status_counts[BookingStatus.CANCELLED],
        quote_events=status_counts[BookingStatus.QUOTE],
    )
