from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from venue_scheduler.domain.entities.booking import Booking, BookingStatus


class BookingSourcePort(ABC):
    @abstractmethod
    def list_bookings(self) -> list[Booking]:
        """Full snapshot of the booking store."""
        raise NotImplementedError

    @abstractmethod
    def create_booking(self, data: dict[str, Any]) -> Booking:
        raise NotImplementedError

    @abstractmethod
    def update_booking(self, booking_id: int, data: dict[str, Any]) -> Booking:
        raise NotImplementedError

    @abstractmethod
    def update_booking_status(self, booking_id: int, status: BookingStatus) -> Booking:
        raise NotImplementedError

    @abstractmethod
    def delete_booking(self, booking_id: int) -> None:
        raise NotImplementedError
