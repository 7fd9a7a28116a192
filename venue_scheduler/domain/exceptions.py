class SchedulingError(RuntimeError):
    """Base class for every error the scheduling engine reports."""
    pass


class InvalidInterval(SchedulingError, ValueError):
    """Raised when an interval does not start strictly before it ends."""
    pass
