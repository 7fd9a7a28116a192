"""
Shared booking factory for the scheduling engine tests.
"""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from itertools import count

import pytest

from venue_scheduler.domain.entities.booking import Booking, BookingStatus, ClientRef


@pytest.fixture
def make_booking():
    ids = count(1)

    def _make(
        day: str = "2024-06-01",
        start: str = "18:00",
        end: str = "22:00",
        status: BookingStatus = BookingStatus.CONFIRMED,
        total: str = "1000",
        deposit: str = "0",
        booking_id: int | None = None,
        event_type: str = "CASAMENTO",
        client_id: int = 1,
        client_name: str = "Ana Souza",
        title: str = "Evento",
        balance_due_date: str | None = None,
    ) -> Booking:
        return Booking(
            id=booking_id if booking_id is not None else next(ids),
            title=title,
            date=date.fromisoformat(day),
            start_time=time.fromisoformat(start),
            end_time=time.fromisoformat(end),
            status=status,
            client=ClientRef(id=client_id, name=client_name),
            event_type=event_type,
            total_value=Decimal(total),
            deposit_value=Decimal(deposit),
            balance_due_date=date.fromisoformat(balance_due_date) if balance_due_date else None,
        )

    return _make
