"""
Tests for the scheduling engine facade and its typed operation results.
"""

from __future__ import annotations

import tempfile
from datetime import date, datetime, time, timezone
from decimal import Decimal
from pathlib import Path

import pytest

from venue_scheduler.application.exceptions import (
    BlockNotFound,
    BookingSourceError,
    DuplicateBlock,
    InvalidArgument,
    InvalidInterval,
)
from venue_scheduler.application.use_cases.calendar_blocks import CalendarBlockRegistry
from venue_scheduler.application.use_cases.engine import OperationResult, SchedulingEngine
from venue_scheduler.domain.entities.booking import BookingStatus
from venue_scheduler.domain.entities.interval import Interval
from venue_scheduler.infrastructure.bookings.memory_booking_source import MemoryBookingSource
from venue_scheduler.infrastructure.clients.client_directory import MemoryClientDirectory
from venue_scheduler.infrastructure.store.json_block_store import JsonCalendarBlockStore
from venue_scheduler.infrastructure.store.memory_block_store import MemoryCalendarBlockStore


class OfflineBookingSource(MemoryBookingSource):
    def list_bookings(self):
        raise BookingSourceError("Booking API unreachable")


def _engine(bookings=(), **kwargs) -> SchedulingEngine:
    return SchedulingEngine(
        booking_source=MemoryBookingSource(list(bookings)),
        block_registry=CalendarBlockRegistry(MemoryCalendarBlockStore()),
        **kwargs,
    )


def test_find_conflicts_through_engine(make_booking):
    existing = make_booking(day="2024-07-04", start="19:00", end="23:00")
    engine = _engine([existing, make_booking(day="2024-07-04", start="10:00", end="12:00")])

    result = engine.find_conflicts(Interval(date(2024, 7, 4), time(18, 0), time(20, 0)))

    assert result.ok
    assert result.value == [existing]
    assert engine.find_conflicts(
        Interval(date(2024, 7, 4), time(18, 0), time(20, 0)), exclude_id=existing.id
    ).value == []


def test_availability_reports_blocks_without_rejecting():
    engine = _engine()
    engine.add_block(date(2023, 12, 25), "Natal", recurring=True).unwrap()

    report = engine.check_availability(Interval(date(2024, 12, 25), time(10, 0), time(12, 0))).unwrap()

    assert report.conflicts == []
    assert report.blocked
    assert report.available


def test_block_errors_come_back_as_results():
    engine = _engine()
    first = engine.add_block(date(2024, 9, 7), "Feriado")
    duplicate = engine.add_block(date(2024, 9, 7), "Outro motivo")
    missing = engine.remove_block("does-not-exist")

    assert first.ok and isinstance(first.value, str)
    assert not duplicate.ok
    assert isinstance(duplicate.error, DuplicateBlock)
    assert isinstance(missing.error, BlockNotFound)
    assert engine.is_blocked(date(2024, 9, 7)).value is True

    assert engine.remove_block(first.value).ok
    assert engine.list_blocks().value == []


def test_source_failure_is_reported_not_raised():
    engine = SchedulingEngine(
        booking_source=OfflineBookingSource(),
        block_registry=CalendarBlockRegistry(MemoryCalendarBlockStore()),
    )

    result = engine.summarize(datetime(2024, 6, 15, 13, 0, tzinfo=timezone.utc))

    assert not result.ok
    assert result.value is None
    assert isinstance(result.error, BookingSourceError)
    with pytest.raises(BookingSourceError):
        result.unwrap()


def test_unwrap_returns_value():
    assert OperationResult(value=[1, 2]).unwrap() == [1, 2]
    assert not OperationResult(error=InvalidInterval("end before start")).ok


def test_aggregate_uses_configured_trailing_periods(make_booking):
    bookings = [make_booking(day=f"2024-{month:02d}-10") for month in range(1, 13)]
    engine = _engine(bookings, trailing_periods=3)

    assert [s.period_key for s in engine.aggregate().value] == ["2024-10", "2024-11", "2024-12"]
    assert len(engine.aggregate("quarter", trailing_periods=None).value) == 3
    assert len(engine.aggregate("month", trailing_periods=12).value) == 12


def test_summarize_reads_fresh_snapshot(make_booking):
    source = MemoryBookingSource([make_booking(day="2024-06-20", status=BookingStatus.CONFIRMED, total="2000")])
    engine = SchedulingEngine(
        booking_source=source,
        block_registry=CalendarBlockRegistry(MemoryCalendarBlockStore()),
        upcoming_limit=1,
    )
    now = datetime(2024, 6, 15, 13, 0, tzinfo=timezone.utc)

    before = engine.summarize(now).unwrap()
    source.update_booking_status(1, BookingStatus.CANCELLED)
    after = engine.summarize(now).unwrap()

    assert before.confirmed_events == 1
    assert before.monthly_revenue == Decimal("2000")
    assert after.cancelled_events == 1
    assert after.monthly_revenue == Decimal("0")
    assert after.upcoming_events == []


def test_filter_revenue_and_recurring_clients(make_booking):
    bookings = [
        make_booking(day="2024-06-10", status=BookingStatus.COMPLETED, total="500", client_id=4, client_name=""),
        make_booking(day="2024-06-12", status=BookingStatus.CONFIRMED, total="700", client_id=4, client_name=""),
        make_booking(day="2024-07-01", status=BookingStatus.QUOTE, total="300", client_id=5),
    ]
    engine = _engine(bookings, client_directory=MemoryClientDirectory({4: "Carla Dias"}))

    assert len(engine.filter_by_window("month", date(2024, 6, 1)).value) == 2

    [june] = engine.revenue_by_period().value
    assert (june.realized, june.forecast) == (Decimal("500"), Decimal("700"))

    report = engine.recurring_clients(limit=1).value
    assert [c.client.name for c in report.clients] == ["Carla Dias"]
    assert report.total_recurring == 1


@pytest.mark.parametrize(
    "call",
    [
        lambda engine: engine.aggregate(trailing_periods=-1),
        lambda engine: engine.aggregate("week"),
        lambda engine: engine.filter_by_window("fortnight", date(2024, 6, 1)),
    ],
    ids=["negative-trailing-periods", "unknown-granularity", "unknown-window"],
)
def test_bad_arguments_come_back_as_results(make_booking, call):
    engine = _engine([make_booking(day="2024-06-10")])

    result = call(engine)

    assert not result.ok
    assert isinstance(result.error, InvalidArgument)
    assert isinstance(result.error, ValueError)


def test_undecodable_block_file_reads_as_no_blocks():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "blocks.json"
        path.write_bytes(b"\xff\xfe not utf-8")
        engine = SchedulingEngine(
            booking_source=MemoryBookingSource(),
            block_registry=CalendarBlockRegistry(JsonCalendarBlockStore(path=str(path))),
        )

        assert engine.is_blocked(date(2024, 12, 25)).value is False
        assert engine.add_block(date(2024, 12, 25), "Natal", recurring=True).ok
        assert engine.is_blocked(date(2030, 12, 25)).value is True
