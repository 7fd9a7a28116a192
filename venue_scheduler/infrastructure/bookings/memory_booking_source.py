from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from venue_scheduler.application.dto.booking_payload import booking_from_payload, booking_to_payload
from venue_scheduler.application.exceptions import BookingContractError
from venue_scheduler.application.ports.booking_source import BookingSourcePort
from venue_scheduler.domain.entities.booking import Booking, BookingStatus


class MemoryBookingSource(BookingSourcePort):
    def __init__(self, bookings: list[Booking] | None = None) -> None:
        self._bookings: dict[int, Booking] = {b.id: b for b in bookings or []}
        self._logger = logging.getLogger(__name__)

    def list_bookings(self) -> list[Booking]:
        return list(self._bookings.values())

    def create_booking(self, data: dict[str, Any]) -> Booking:
        booking_id = max(self._bookings, default=0) + 1
        booking = booking_from_payload({**data, "id": booking_id})
        self._bookings[booking_id] = booking
        self._logger.info("Mock booking created", extra={"booking_id": booking_id})
        return booking

    def update_booking(self, booking_id: int, data: dict[str, Any]) -> Booking:
        merged = {**booking_to_payload(self._get(booking_id)), **data, "id": booking_id}
        if "clientId" in data and "client" not in data:
            merged.pop("client")
        booking = booking_from_payload(merged)
        self._bookings[booking_id] = booking
        return booking

    def update_booking_status(self, booking_id: int, status: BookingStatus) -> Booking:
        booking = replace(self._get(booking_id), status=BookingStatus(status))
        self._bookings[booking_id] = booking
        return booking

    def delete_booking(self, booking_id: int) -> None:
        self._get(booking_id)
        del self._bookings[booking_id]

    def _get(self, booking_id: int) -> Booking:
        booking = self._bookings.get(booking_id)
        if booking is None:
            raise BookingContractError(f"Booking {booking_id} not found")
        return booking
