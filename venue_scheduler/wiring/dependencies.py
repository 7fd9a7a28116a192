from functools import lru_cache

from venue_scheduler.application.ports.block_store import CalendarBlockStorePort
from venue_scheduler.application.ports.booking_source import BookingSourcePort
from venue_scheduler.application.ports.client_directory import ClientDirectoryPort
from venue_scheduler.application.use_cases.calendar_blocks import CalendarBlockRegistry
from venue_scheduler.application.use_cases.engine import SchedulingEngine
from venue_scheduler.core.config import settings
from venue_scheduler.core.logging import configure_logging
from venue_scheduler.infrastructure.bookings.http_booking_source import HttpBookingSource
from venue_scheduler.infrastructure.bookings.memory_booking_source import MemoryBookingSource
from venue_scheduler.infrastructure.clients.client_directory import HttpClientDirectory, MemoryClientDirectory
from venue_scheduler.infrastructure.store.json_block_store import JsonCalendarBlockStore
from venue_scheduler.infrastructure.store.memory_block_store import MemoryCalendarBlockStore


@lru_cache
def get_block_store() -> CalendarBlockStorePort:
    provider = (settings.BLOCK_STORE_PROVIDER or "").lower()
    if not provider:
        provider = "json" if settings.ENV.lower() in {"dev", "local"} else "memory"
    if provider == "json":
        return JsonCalendarBlockStore(path=settings.BLOCK_STORE_PATH)
    return MemoryCalendarBlockStore()


def get_block_registry() -> CalendarBlockRegistry:
    return CalendarBlockRegistry(get_block_store())


@lru_cache
def get_booking_source() -> BookingSourcePort:
    if settings.BOOKING_API_BASE_URL and settings.BOOKING_API_BASE_URL.strip():
        return HttpBookingSource()
    return MemoryBookingSource()


@lru_cache
def get_client_directory() -> ClientDirectoryPort:
    if settings.BOOKING_API_BASE_URL and settings.BOOKING_API_BASE_URL.strip():
        return HttpClientDirectory()
    return MemoryClientDirectory()


def get_engine() -> SchedulingEngine:
    configure_logging()
    return SchedulingEngine(
        booking_source=get_booking_source(),
        block_registry=get_block_registry(),
        client_directory=get_client_directory(),
        trailing_periods=settings.TRAILING_PERIODS,
        dashboard_trailing_months=settings.DASHBOARD_TRAILING_MONTHS,
        upcoming_window_days=settings.UPCOMING_WINDOW_DAYS,
        upcoming_limit=settings.UPCOMING_LIMIT,
    )
