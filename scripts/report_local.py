#!/usr/bin/env python3
"""
Local report harness (no booking API needed).

Usage:
  python3 scripts/report_local.py --bookings events.json
  python3 scripts/report_local.py --bookings events.json --granularity quarter --periods 4

What it does:
- Loads a JSON dump of `/events` records into the in-memory booking source
- Runs the same SchedulingEngine the presentation layer uses
- Prints the dashboard snapshot and the conversion table
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date, datetime, timezone
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from venue_scheduler.application.dto.booking_payload import bookings_from_payload  # noqa: E402
from venue_scheduler.application.use_cases.engine import SchedulingEngine  # noqa: E402
from venue_scheduler.application.utils.dates import midday_anchor  # noqa: E402
from venue_scheduler.core.config import settings  # noqa: E402
from venue_scheduler.core.logging import configure_logging  # noqa: E402
from venue_scheduler.infrastructure.bookings.memory_booking_source import MemoryBookingSource  # noqa: E402
from venue_scheduler.wiring.dependencies import get_block_registry  # noqa: E402


def _print_snapshot(engine: SchedulingEngine, now: datetime) -> None:
    result = engine.summarize(now)
    if not result.ok:
        print(f"ERROR: {result.error}")
        return
    snapshot = result.value

    print("\n--- Dashboard ---")
    print(f"events: {snapshot.total_events} (confirmed {snapshot.confirmed_events}, "
          f"completed {snapshot.completed_events}, cancelled {snapshot.cancelled_events}, "
          f"quotes {snapshot.quote_events})")
    print(f"revenue: month {snapshot.monthly_revenue} / total {snapshot.total_revenue}")
    print(f"payments: pending {snapshot.pending_payments} / overdue {snapshot.overdue_payments}")
    for booking in snapshot.upcoming_events:
        print(f"  upcoming {booking.date} {booking.start_time:%H:%M} #{booking.id} {booking.title}")


def _print_conversion(engine: SchedulingEngine, granularity: str, periods: int) -> None:
    result = engine.aggregate(granularity, trailing_periods=periods)
    if not result.ok:
        print(f"ERROR: {result.error}")
        return

    print(f"\n--- Conversion by {granularity} ---")
    print(f"{'period':<10}{'quotes':>8}{'conf':>6}{'done':>6}{'canc':>6}{'conv%':>8}{'compl%':>8}{'avg':>12}")
    for stats in result.value:
        print(
            f"{stats.period_key:<10}{stats.quote_count:>8}{stats.confirmed_count:>6}"
            f"{stats.completed_count:>6}{stats.cancelled_count:>6}{stats.conversion_rate:>8.1f}"
            f"{stats.completion_rate:>8.1f}{stats.average_value:>12}"
        )


def main() -> None:
    parser = argparse.ArgumentParser(description="Print venue reports from a bookings JSON dump")
    parser.add_argument("--bookings", required=True, help="JSON file with a list of /events records")
    parser.add_argument("--granularity", default="month", choices=["month", "quarter", "year"])
    parser.add_argument("--periods", type=int, default=settings.TRAILING_PERIODS)
    parser.add_argument("--now", default=None, help="ISO timestamp or YYYY-MM-DD, defaults to the current time")
    args = parser.parse_args()

    configure_logging()
    with open(args.bookings, "r", encoding="utf-8") as f:
        bookings = bookings_from_payload(json.load(f))

    if not args.now:
        now = datetime.now(timezone.utc)
    elif len(args.now) == 10:
        now = midday_anchor(date.fromisoformat(args.now))
    else:
        now = datetime.fromisoformat(args.now)
    engine = SchedulingEngine(
        booking_source=MemoryBookingSource(bookings),
        block_registry=get_block_registry(),
        dashboard_trailing_months=settings.DASHBOARD_TRAILING_MONTHS,
        upcoming_window_days=settings.UPCOMING_WINDOW_DAYS,
        upcoming_limit=settings.UPCOMING_LIMIT,
    )

    print(f"Loaded {len(bookings)} bookings from {args.bookings}")
    _print_snapshot(engine, now)
    _print_conversion(engine, args.granularity, args.periods)


if __name__ == "__main__":
    main()
