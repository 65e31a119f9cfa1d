"""Error taxonomy for schedule computation."""


class BiphasicError(ValueError):
    """Base class for all engine errors."""


class NoEventsConfigured(BiphasicError):
    """Raised when a schedule or lookup has no events to choose from."""


class InvalidTimeInput(BiphasicError):
    """Raised when a time-of-day value falls outside the day."""


class ScheduleError(BiphasicError):
    """Raised when a schedule definition is malformed."""
