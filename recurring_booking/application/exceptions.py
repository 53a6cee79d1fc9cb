from __future__ import annotations

from datetime import datetime


class SchedulingError(Exception):
    """Base class for recurring booking errors surfaced to callers."""
    pass


class SeriesValidationError(SchedulingError, ValueError):
    """Raised when a request is rejected before anything is written."""
    pass


class SeriesNotFoundError(SchedulingError, LookupError):
    """Raised when a series does not exist for the given business."""
    pass


class BookingConflictError(SchedulingError):
    """Raised when a staff member already holds a booking overlapping an occurrence."""

    def __init__(self, occurrence: datetime, staff_id: str, existing_booking_id: str | None = None) -> None:
        self.occurrence = occurrence
        self.staff_id = staff_id
        self.existing_booking_id = existing_booking_id
        super().__init__(
            f"Staff has a conflicting booking on {occurrence.strftime('%a, %b')} {occurrence.day} "
            f"at {occurrence.strftime('%H:%M')}"
        )
