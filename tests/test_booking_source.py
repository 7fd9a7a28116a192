"""
Tests for the booking payload mapping and the booking/client adapters.
"""

from __future__ import annotations

import json
from datetime import date, time
from decimal import Decimal

import httpx
import pytest

from venue_scheduler.application.dto.booking_payload import booking_from_payload, booking_to_payload
from venue_scheduler.application.exceptions import BookingContractError, BookingSourceError
from venue_scheduler.domain.entities.booking import BookingStatus
from venue_scheduler.infrastructure.bookings.http_booking_source import HttpBookingSource
from venue_scheduler.infrastructure.bookings.memory_booking_source import MemoryBookingSource
from venue_scheduler.infrastructure.clients.client_directory import HttpClientDirectory

RAW_EVENT = {
    "id": 7,
    "title": "Casamento Silva",
    "eventDate": "2024-07-04",
    "startTime": "19:00:00",
    "endTime": "23:00:00",
    "guestCount": 120,
    "eventType": "CASAMENTO",
    "status": "CONFIRMED",
    "clientId": 3,
    "client": {"id": 3, "name": "Joana Silva", "email": "joana@example.com"},
    "totalValue": "15000.10",
    "depositValue": 5000,
    "balanceValue": 10000.1,
    "createdAt": "2024-01-10T12:00:00",
}


def test_payload_maps_to_booking():
    booking = booking_from_payload(RAW_EVENT)

    assert booking.id == 7
    assert booking.date == date(2024, 7, 4)
    assert booking.start_time == time(19, 0)
    assert booking.status is BookingStatus.CONFIRMED
    assert booking.client.name == "Joana Silva"
    assert booking.total_value == Decimal("15000.10")
    assert booking.deposit_value == Decimal("5000")
    assert booking.balance_value == Decimal("10000.10")
    assert booking.guest_count == 120


def test_payload_float_money_keeps_decimal_digits():
    booking = booking_from_payload({**RAW_EVENT, "totalValue": 0.1, "depositValue": 0.0})
    assert booking.total_value == Decimal("0.1")


def test_payload_without_client_object_uses_client_id():
    data = {k: v for k, v in RAW_EVENT.items() if k != "client"}
    booking = booking_from_payload(data)
    assert booking.client.id == 3
    assert booking.client.name == ""


@pytest.mark.parametrize(
    "override",
    [
        {"status": "ARCHIVED"},
        {"eventDate": "not-a-date"},
        {"startTime": "7pm"},
        {"startTime": "19:00:30"},
        {"clientId": None, "client": None},
    ],
)
def test_invalid_payload_raises_contract_error(override):
    with pytest.raises(BookingContractError):
        booking_from_payload({**RAW_EVENT, **override})


def test_booking_to_payload_round_trips_wire_fields():
    booking = booking_from_payload(RAW_EVENT)
    payload = booking_to_payload(booking)

    assert payload["eventDate"] == "2024-07-04"
    assert payload["startTime"] == "19:00"
    assert payload["totalValue"] == "15000.10"
    assert booking_from_payload(payload) == booking


def _http_source(handler) -> HttpBookingSource:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpBookingSource(base_url="http://venue.test/", token="secret", client=client)


def test_http_source_lists_bookings_with_bearer_token():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[RAW_EVENT, {**RAW_EVENT, "id": 8, "status": "quote"}])

    bookings = _http_source(handler).list_bookings()

    assert [b.id for b in bookings] == [7, 8]
    assert bookings[1].status is BookingStatus.QUOTE
    assert str(seen[0].url) == "http://venue.test/events"
    assert seen[0].headers["Authorization"] == "Bearer secret"


def test_http_source_status_update_and_delete():
    calls: list[tuple[str, str, bytes]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append((request.method, request.url.path, request.content))
        if request.method == "DELETE":
            return httpx.Response(204)
        return httpx.Response(200, json={**RAW_EVENT, "status": "COMPLETED"})

    source = _http_source(handler)
    updated = source.update_booking_status(7, BookingStatus.COMPLETED)
    source.delete_booking(7)

    assert updated.status is BookingStatus.COMPLETED
    assert calls[0][:2] == ("PATCH", "/events/7/status")
    assert json.loads(calls[0][2]) == {"status": "COMPLETED"}
    assert calls[1][:2] == ("DELETE", "/events/7")


def test_http_source_maps_failures_to_typed_errors():
    def server_error(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    def offline(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    def garbage(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>")

    with pytest.raises(BookingSourceError):
        _http_source(server_error).list_bookings()
    with pytest.raises(BookingSourceError):
        _http_source(offline).list_bookings()
    with pytest.raises(BookingContractError):
        _http_source(garbage).list_bookings()


def test_http_source_requires_base_url():
    with pytest.raises(ValueError):
        HttpBookingSource(base_url="", client=httpx.Client())


def test_memory_source_edits_then_snapshot():
    source = MemoryBookingSource()
    created = source.create_booking({k: v for k, v in RAW_EVENT.items() if k != "id"})
    source.update_booking(created.id, {"endTime": "23:30", "clientId": 9})
    source.update_booking_status(created.id, BookingStatus.CANCELLED)

    [booking] = source.list_bookings()
    assert booking.id == 1
    assert booking.end_time == time(23, 30)
    assert booking.client.id == 9
    assert booking.status is BookingStatus.CANCELLED

    source.delete_booking(created.id)
    assert source.list_bookings() == []
    with pytest.raises(BookingContractError):
        source.delete_booking(created.id)


def test_http_client_directory_caches_and_handles_missing():
    hits: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        hits.append(request.url.path)
        if request.url.path == "/users/3":
            return httpx.Response(200, json={"id": 3, "name": "Joana Silva"})
        return httpx.Response(404)

    directory = HttpClientDirectory(
        base_url="http://venue.test",
        token="",
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )

    assert directory.resolve_client(3).name == "Joana Silva"
    assert directory.resolve_client(3).name == "Joana Silva"
    assert directory.resolve_client(99) is None
    assert hits == ["/users/3", "/users/99"]
