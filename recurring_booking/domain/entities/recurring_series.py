from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time

from recurring_booking.domain.entities.booking import Booking


@dataclass(frozen=True)
class RecurringSeries:
    id: str
    business_id: str
    customer_id: str
    service_id: str
    time_of_day: time
    days_of_week: tuple[int, ...]  # Sunday=0 .. Saturday=6, ascending
    interval_weeks: int
    total_count: int  # number of bookings actually created
    staff_id: str | None = None
    ends_at: datetime | None = None
    notes: str | None = None


@dataclass(frozen=True)
class SeriesDetail:
    series: RecurringSeries
    bookings: tuple[Booking, ...] = field(default_factory=tuple)  # ordered by start_time

    def find_booking(self, booking_id: str) -> Booking | None:
        for booking in self.bookings:
            if booking.id == booking_id:
                return booking
        return None
