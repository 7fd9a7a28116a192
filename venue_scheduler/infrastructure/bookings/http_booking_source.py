from __future__ import annotations

import logging
from typing import Any

import httpx

from venue_scheduler.application.dto.booking_payload import booking_from_payload, bookings_from_payload
from venue_scheduler.application.exceptions import BookingContractError, BookingSourceError
from venue_scheduler.application.ports.booking_source import BookingSourcePort
from venue_scheduler.core.config import settings
from venue_scheduler.domain.entities.booking import Booking, BookingStatus


class HttpBookingSource(BookingSourcePort):
    """Booking store behind the venue REST API (`/events`)."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or settings.BOOKING_API_BASE_URL or "").rstrip("/")
        self._token = token if token is not None else settings.BOOKING_API_TOKEN
        self._client = client or httpx.Client(timeout=timeout or settings.BOOKING_API_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._base_url:
            raise ValueError("BOOKING_API_BASE_URL is required for the HTTP booking source")

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _request(self, method: str, path: str, json: Any = None) -> Any:
        url = f"{self._base_url}{path}"
        try:
            response = self._client.request(method, url, json=json, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self._logger.error(
                "Booking API returned an error",
                extra={"error": f"{e.response.status_code} {method} {path}"},
            )
            raise BookingSourceError(f"Booking API {method} {path} failed with {e.response.status_code}") from e
        except httpx.HTTPError as e:
            self._logger.error("Booking API unreachable", extra={"error": str(e)})
            raise BookingSourceError(f"Booking API {method} {path} failed: {e}") from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise BookingContractError(f"Booking API {method} {path} returned invalid JSON") from e

    def list_bookings(self) -> list[Booking]:
        bookings = bookings_from_payload(self._request("GET", "/events"))
        self._logger.debug("Bookings fetched", extra={"count": len(bookings)})
        return bookings

    def create_booking(self, data: dict[str, Any]) -> Booking:
        booking = booking_from_payload(self._request("POST", "/events", json=data))
        self._logger.info("Booking created", extra={"booking_id": booking.id})
        return booking

    def update_booking(self, booking_id: int, data: dict[str, Any]) -> Booking:
        booking = booking_from_payload(self._request("PUT", f"/events/{booking_id}", json=data))
        self._logger.info("Booking updated", extra={"booking_id": booking_id})
        return booking

    def update_booking_status(self, booking_id: int, status: BookingStatus) -> Booking:
        booking = booking_from_payload(
            self._request("PATCH", f"/events/{booking_id}/status", json={"status": BookingStatus(status).value})
        )
        self._logger.info("Booking status updated", extra={"booking_id": booking_id, "reason": booking.status.value})
        return booking

    def delete_booking(self, booking_id: int) -> None:
        self._request("DELETE", f"/events/{booking_id}")
        self._logger.info("Booking deleted", extra={"booking_id": booking_id})
