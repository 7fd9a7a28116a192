from venue_scheduler.domain.exceptions import InvalidInterval, SchedulingError

__all__ = [
    "SchedulingError",
    "InvalidInterval",
    "InvalidArgument",
    "DuplicateBlock",
    "BlockNotFound",
    "BookingSourceError",
    "BookingContractError",
]


class InvalidArgument(SchedulingError, ValueError):
    """Raised when an operation gets an unknown option or an out-of-range value."""
    pass


class DuplicateBlock(SchedulingError):
    """Raised when an identical calendar block is already registered."""
    pass


class BlockNotFound(SchedulingError):
    """Raised when removing a calendar block that does not exist."""
    pass


class BookingSourceError(SchedulingError):
    """Raised when the booking store is unavailable (timeouts, network errors, 5xx)."""
    pass


class BookingContractError(SchedulingError):
    """Raised when the booking store returns data that does not match the booking contract."""
    pass
