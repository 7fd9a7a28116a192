from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from venue_scheduler.application.exceptions import BookingContractError
from venue_scheduler.application.utils.dates import parse_date
from venue_scheduler.domain.entities.booking import Booking, BookingStatus, ClientRef
from venue_scheduler.domain.entities.interval import parse_time_of_day


class ClientPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str = ""


class BookingPayload(BaseModel):
    """Booking record as the venue API serializes it (camelCase keys)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    title: str = ""
    event_date: date = Field(alias="eventDate")
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")
    guest_count: int = Field(default=0, alias="guestCount")
    event_type: str = Field(default="", alias="eventType")
    status: BookingStatus
    client_id: int | None = Field(default=None, alias="clientId")
    client: ClientPayload | None = None
    total_value: Decimal = Field(default=Decimal("0"), alias="totalValue")
    deposit_value: Decimal = Field(default=Decimal("0"), alias="depositValue")
    balance_due_date: date | None = Field(default=None, alias="balanceDueDate")
    notes: str | None = None

    @field_validator("event_date", "balance_due_date", mode="before")
    @classmethod
    def _date_only(cls, value: Any) -> Any:
        if value in (None, ""):
            return None
        if isinstance(value, str):
            return parse_date(value)
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _upper_status(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("total_value", "deposit_value", mode="before")
    @classmethod
    def _money(cls, value: Any) -> Any:
        if value in (None, ""):
            return Decimal("0")
        if isinstance(value, float):
            # Go through str so 0.1 stays 0.1 instead of its binary expansion.
            return Decimal(str(value))
        return value

    def client_ref(self) -> ClientRef:
        if self.client is not None:
            return ClientRef(id=self.client.id, name=self.client.name)
        if self.client_id is None:
            raise BookingContractError(f"Booking {self.id} has no client reference")
        return ClientRef(id=self.client_id)

    def to_booking(self) -> Booking:
        try:
            start = parse_time_of_day(self.start_time)
            end = parse_time_of_day(self.end_time)
        except ValueError as e:
            raise BookingContractError(f"Booking {self.id}: {e}") from e

        return Booking(
            id=self.id,
            title=self.title,
            date=self.event_date,
            start_time=start,
            end_time=end,
            status=self.status,
            client=self.client_ref(),
            event_type=self.event_type,
            total_value=self.total_value,
            deposit_value=self.deposit_value,
            guest_count=self.guest_count,
            balance_due_date=self.balance_due_date,
            notes=self.notes,
        )


def booking_from_payload(data: dict[str, Any]) -> Booking:
    try:
        payload = BookingPayload.model_validate(data)
    except ValidationError as e:
        raise BookingContractError(f"Invalid booking payload: {e}") from e
    return payload.to_booking()


def bookings_from_payload(items: Any) -> list[Booking]:
    if not isinstance(items, list):
        raise BookingContractError("Expected a list of bookings")
    return [booking_from_payload(item) for item in items]


def booking_to_payload(booking: Booking) -> dict[str, Any]:
    return {
        "id": booking.id,
        "title": booking.title,
        "eventDate": booking.date.isoformat(),
        "startTime": booking.start_time.strftime("%H:%M"),
        "endTime": booking.end_time.strftime("%H:%M"),
        "guestCount": booking.guest_count,
        "eventType": booking.event_type,
        "status": booking.status.value,
        "clientId": booking.client.id,
        "client": {"id": booking.client.id, "name": booking.client.name},
        "totalValue": str(booking.total_value),
        "depositValue": str(booking.deposit_value),
        "balanceDueDate": booking.balance_due_date.isoformat() if booking.balance_due_date else None,
        "notes": booking.notes,
    }
