from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Generic, TypeVar

from venue_scheduler.application.exceptions import SchedulingError
from venue_scheduler.application.ports.booking_source import BookingSourcePort
from venue_scheduler.application.ports.client_directory import ClientDirectoryPort
from venue_scheduler.application.use_cases import conflicts, dashboard, period_aggregation, view_window
from venue_scheduler.application.use_cases.calendar_blocks import CalendarBlockRegistry
from venue_scheduler.application.use_cases.period_aggregation import Granularity
from venue_scheduler.application.use_cases.view_window import ViewWindow
from venue_scheduler.domain.entities.booking import Booking
from venue_scheduler.domain.entities.calendar_block import CalendarBlock
from venue_scheduler.domain.entities.interval import Interval
from venue_scheduler.domain.entities.stats import (
    AvailabilityReport,
    ConversionPeriodStats,
    DashboardSnapshot,
    PeriodRevenue,
    RecurringClientsReport,
)

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    value: T | None = None
    error: SchedulingError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


class SchedulingEngine:
    """Entry point for presentation layers.

    Every call reads a fresh snapshot from the booking source and reports
    failures as an `OperationResult` instead of raising. All operations are
    reads or idempotent block edits, so retrying is always safe.
    """

    def __init__(
        self,
        booking_source: BookingSourcePort,
        block_registry: CalendarBlockRegistry,
        client_directory: ClientDirectoryPort | None = None,
        trailing_periods: int = 6,
        dashboard_trailing_months: int = 6,
        upcoming_window_days: int = 7,
        upcoming_limit: int = 5,
    ) -> None:
        self._bookings = booking_source
        self._blocks = block_registry
        self._clients = client_directory
        self._trailing_periods = trailing_periods
        self._dashboard_trailing_months = dashboard_trailing_months
        self._upcoming_window_days = upcoming_window_days
        self._upcoming_limit = upcoming_limit
        self._logger = logging.getLogger(__name__)

    def _run(self, operation: str, fn: Callable[[], T]) -> OperationResult[T]:
        try:
            return OperationResult(value=fn())
        except SchedulingError as e:
            self._logger.warning(
                "Scheduling operation failed",
                extra={"reason": operation, "error": f"{type(e).__name__}: {e}"},
            )
            return OperationResult(error=e)

    def find_conflicts(self, candidate: Interval, exclude_id: int | None = None) -> OperationResult[list[Booking]]:
        return self._run(
            "find_conflicts",
            lambda: conflicts.find_conflicts(candidate, exclude_id, self._bookings.list_bookings()),
        )

    def check_availability(self, candidate: Interval, exclude_id: int | None = None) -> OperationResult[AvailabilityReport]:
        return self._run(
            "check_availability",
            lambda: conflicts.check_availability(candidate, exclude_id, self._bookings.list_bookings(), self._blocks),
        )

    def is_blocked(self, day: date) -> OperationResult[bool]:
        return self._run("is_blocked", lambda: self._blocks.is_blocked(day))

    def add_block(self, day: date, reason: str, recurring: bool = False) -> OperationResult[str]:
        return self._run("add_block", lambda: self._blocks.add_block(day, reason, recurring))

    def remove_block(self, block_id: str) -> OperationResult[None]:
        return self._run("remove_block", lambda: self._blocks.remove_block(block_id))

    def list_blocks(self) -> OperationResult[list[CalendarBlock]]:
        return self._run("list_blocks", self._blocks.list_blocks)

    def filter_by_window(self, window: ViewWindow | str, reference_date: date) -> OperationResult[list[Booking]]:
        return self._run(
            "filter_by_window",
            lambda: view_window.filter_by_window(self._bookings.list_bookings(), window, reference_date),
        )

    def aggregate(
        self,
        granularity: Granularity | str = Granularity.MONTH,
        trailing_periods: int | None = None,
    ) -> OperationResult[list[ConversionPeriodStats]]:
        periods = self._trailing_periods if trailing_periods is None else trailing_periods
        return self._run(
            "aggregate",
            lambda: period_aggregation.aggregate(self._bookings.list_bookings(), granularity, periods),
        )

    def revenue_by_period(self) -> OperationResult[list[PeriodRevenue]]:
        return self._run(
            "revenue_by_period",
            lambda: period_aggregation.revenue_by_period(self._bookings.list_bookings()),
        )

    def recurring_clients(self, limit: int = 10) -> OperationResult[RecurringClientsReport]:
        return self._run(
            "recurring_clients",
            lambda: period_aggregation.recurring_clients(self._bookings.list_bookings(), self._clients, limit),
        )

    def summarize(self, now: datetime, upcoming_limit: int | None = None) -> OperationResult[DashboardSnapshot]:
        limit = self._upcoming_limit if upcoming_limit is None else upcoming_limit
        return self._run(
            "summarize",
            lambda: dashboard.summarize(
                self._bookings.list_bookings(),
                now,
                upcoming_limit=limit,
                trailing_months=self._dashboard_trailing_months,
                upcoming_window_days=self._upcoming_window_days,
            ),
        )
