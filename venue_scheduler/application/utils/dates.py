from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

from venue_scheduler.core.config import settings


def business_timezone(offset_hours: int | None = None) -> timezone:
    hours = settings.BUSINESS_UTC_OFFSET_HOURS if offset_hours is None else offset_hours
    return timezone(timedelta(hours=hours))


def business_date(now: datetime | date, offset_hours: int | None = None) -> date:
    """Calendar date of an instant at the fixed business offset.

    Naive datetimes are taken as already being business wall-clock time.
    Plain dates are anchored at business noon first, so they keep their
    calendar day.
    """
    if not isinstance(now, datetime):
        now = midday_anchor(now, offset_hours)
    if now.tzinfo is None:
        return now.date()
    return now.astimezone(business_timezone(offset_hours)).date()


def midday_anchor(day: date, offset_hours: int | None = None) -> datetime:
    """Noon of `day` at the fixed business offset."""
    return datetime.combine(day, time(12, 0), tzinfo=business_timezone(offset_hours))


def month_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + offset
    shifted_year, month_index = divmod(index, 12)
    return shifted_year, month_index + 1


def trailing_month_keys(today: date, months: int) -> list[str]:
    """Keys of the `months` months ending with the month of `today`, oldest first."""
    keys: list[str] = []
    for offset in range(-(months - 1), 1):
        year, month = shift_month(today.year, today.month, offset)
        keys.append(f"{year:04d}-{month:02d}")
    return keys


def parse_month_key(value: str) -> tuple[int, int]:
    try:
        year_str, month_str = value.split("-", 1)
        year, month = int(year_str), int(month_str)
    except ValueError as e:
        raise ValueError(f"Invalid month key: {value!r}") from e
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month key: {value!r}")
    return year, month


def parse_date(value: str | date) -> date:
    """Parse a `YYYY-MM-DD` value, ignoring any time suffix the store appends."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip()[:10])
