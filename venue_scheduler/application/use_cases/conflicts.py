"""Scheduling conflict detection for proposed booking intervals."""

from __future__ import annotations

import logging
from typing import Iterable

from venue_scheduler.application.use_cases.calendar_blocks import CalendarBlockRegistry
from venue_scheduler.domain.entities.booking import Booking
from venue_scheduler.domain.entities.interval import Interval, overlaps
from venue_scheduler.domain.entities.stats import AvailabilityReport

logger = logging.getLogger(__name__)


def find_conflicts(
    candidate: Interval,
    exclude_id: int | None,
    bookings: Iterable[Booking],
) -> list[Booking]:
    """Return the bookings that collide with `candidate`, in input order.

    Cancelled bookings never conflict, and `exclude_id` lets a booking being
    edited in place skip itself. An empty list means the slot is free.
    """
    conflicts = [
        booking
        for booking in bookings
        if booking.date == candidate.date
        and not booking.is_cancelled
        and (exclude_id is None or booking.id != exclude_id)
        and overlaps(candidate, booking.interval)
    ]
    if conflicts:
        logger.debug(
            "Interval conflicts with existing bookings",
            extra={"period": candidate.date.isoformat(), "count": len(conflicts)},
        )
    return conflicts


def check_availability(
    candidate: Interval,
    exclude_id: int | None,
    bookings: Iterable[Booking],
    registry: CalendarBlockRegistry,
) -> AvailabilityReport:
    """Conflicts plus the advisory calendar-block signal for the candidate date.

    A blocked date does not make the slot unavailable; enforcing blocks is left
    to whoever creates the booking.
    """
    return AvailabilityReport(
        candidate=candidate,
        conflicts=find_conflicts(candidate, exclude_id, bookings),
        blocks=registry.blocks_for(candidate.date),
    )
