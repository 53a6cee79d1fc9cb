from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from recurring_booking.domain.entities.booking_status import BookingStatus
from recurring_booking.domain.wall_time import align_to


@dataclass(frozen=True)
class Booking:
    id: str
    business_id: str
    customer_id: str
    service_id: str
    start_time: datetime
    end_time: datetime
    status: BookingStatus = BookingStatus.CONFIRMED
    staff_id: str | None = None
    recurring_series_id: str | None = None  # None for one-off bookings
    notes: str | None = None

    def overlaps(self, start: datetime, end: datetime) -> bool:
        """Half-open interval overlap against [start, end)."""
        start = align_to(start, self.start_time)
        end = align_to(end, self.end_time)
        return self.start_time < end and self.end_time > start
