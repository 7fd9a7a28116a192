from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import Iterable

from venue_scheduler.application.exceptions import InvalidArgument
from venue_scheduler.application.utils.options import coerce_option
from venue_scheduler.domain.entities.booking import Booking, BookingStatus
from venue_scheduler.domain.entities.stats import HourBucket


class ViewWindow(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


def week_bounds(reference_date: date) -> tuple[date, date]:
    """Sunday-start week containing `reference_date`, both ends inclusive."""
    days_since_sunday = (reference_date.weekday() + 1) % 7
    start = reference_date - timedelta(days=days_since_sunday)
    return start, start + timedelta(days=6)


def filter_by_window(
    bookings: Iterable[Booking],
    window: ViewWindow | str,
    reference_date: date,
) -> list[Booking]:
    window = coerce_option(ViewWindow, window, "view window")

    if window is ViewWindow.DAY:
        return [b for b in bookings if b.date == reference_date]

    if window is ViewWindow.WEEK:
        start, end = week_bounds(reference_date)
        return [b for b in bookings if start <= b.date <= end]

    if window is ViewWindow.MONTH:
        return [
            b for b in bookings
            if (b.date.year, b.date.month) == (reference_date.year, reference_date.month)
        ]

    # The year view lists everything it is given.
    return list(bookings)


def group_by_hour_of_day(bookings: Iterable[Booking]) -> list[HourBucket]:
    slots: list[list[Booking]] = [[] for _ in range(24)]
    for booking in bookings:
        slots[booking.start_time.hour].append(booking)
    return [HourBucket(hour=f"{hour:02d}:00", bookings=items) for hour, items in enumerate(slots)]


def filter_bookings(
    bookings: Iterable[Booking],
    status: BookingStatus | str | None = None,
    client_id: int | None = None,
    search: str | None = None,
    event_type: str | None = None,
) -> list[Booking]:
    """Event-list filters: status, client, event type and free-text search.

    Search matches title, client name or event type, case-insensitively.
    """
    wanted_status = coerce_option(BookingStatus, status, "status") if status else None
    term = (search or "").strip().lower()

    result: list[Booking] = []
    for booking in bookings:
        if wanted_status is not None and booking.status is not wanted_status:
            continue
        if client_id is not None and booking.client.id != client_id:
            continue
        if event_type and booking.event_type != event_type:
            continue
        if term and not (
            term in booking.title.lower()
            or term in booking.client.name.lower()
            or term in booking.event_type.lower()
        ):
            continue
        result.append(booking)
    return result


def filter_by_date_range(bookings: Iterable[Booking], start: date, end: date) -> list[Booking]:
    if start > end:
        raise InvalidArgument("start must be on or before end")
    return [b for b in bookings if start <= b.date <= end]


def upcoming_bookings(bookings: Iterable[Booking], today: date) -> list[Booking]:
    """Open bookings from `today` on, earliest first."""
    upcoming = [
        b for b in bookings
        if b.date >= today and b.status not in (BookingStatus.CANCELLED, BookingStatus.COMPLETED)
    ]
    return sorted(upcoming, key=lambda b: (b.date, b.start_time))
