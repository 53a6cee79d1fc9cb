from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime

from recurring_booking.application.ports.booking_store import BookingStorePort, SeriesWriterPort
from recurring_booking.domain.entities.booking import Booking
from recurring_booking.domain.entities.booking_status import BookingStatus
from recurring_booking.domain.entities.recurring_series import RecurringSeries, SeriesDetail
from recurring_booking.domain.entities.reminder import Reminder, ReminderStatus
from recurring_booking.domain.entities.service_record import ServiceRecord


class StagedWriter(SeriesWriterPort):
    def __init__(self) -> None:
        self.series: list[RecurringSeries] = []
        self.bookings: list[Booking] = []
        self.reminders: list[Reminder] = []

    def add_series(self, series: RecurringSeries) -> None:
        self.series.append(series)

    def add_booking(self, booking: Booking) -> None:
        self.bookings.append(booking)

    def add_reminder(self, reminder: Reminder) -> None:
        self.reminders.append(reminder)


class MemoryBookingStore(BookingStorePort):
    def __init__(self) -> None:
        self._services: dict[str, ServiceRecord] = {}
        self._series: dict[str, RecurringSeries] = {}
        self._bookings: dict[str, Booking] = {}
        self._reminders: dict[str, Reminder] = {}
        self._lock = threading.RLock()
        self.transactions_opened = 0
        self.transactions_committed = 0

    # Seeding helpers for wiring and tests; not part of the port.
    def add_service(self, service: ServiceRecord) -> None:
        self._services[service.id] = service

    def add_booking(self, booking: Booking) -> None:
        self._bookings[booking.id] = booking

    def add_reminder(self, reminder: Reminder) -> None:
        self._reminders[reminder.id] = reminder

    def all_series(self) -> list[RecurringSeries]:
        return list(self._series.values())

    def all_bookings(self) -> list[Booking]:
        return sorted(self._bookings.values(), key=lambda b: b.start_time)

    def get_service(self, business_id: str, service_id: str) -> ServiceRecord | None:
        service = self._services.get(service_id)
        if service is None or service.business_id != business_id:
            return None
        return service

    def find_overlapping_booking(
        self,
        business_id: str,
        staff_id: str,
        start: datetime,
        end: datetime,
        statuses: Iterable[BookingStatus],
    ) -> Booking | None:
        wanted = set(statuses)
        with self._lock:
            for booking in self._bookings.values():
                if (
                    booking.business_id == business_id
                    and booking.staff_id == staff_id
                    and booking.status in wanted
                    and booking.overlaps(start, end)
                ):
                    return booking
        return None

    @contextmanager
    def transaction(self) -> Iterator[SeriesWriterPort]:
        writer = StagedWriter()
        with self._lock:
            self.transactions_opened += 1
            yield writer
            # Only reached when the block did not raise.
            for series in writer.series:
                self._series[series.id] = series
            for booking in writer.bookings:
                self._bookings[booking.id] = booking
            for reminder in writer.reminders:
                self._reminders[reminder.id] = reminder
            self.transactions_committed += 1

    def get_series_detail(self, business_id: str, series_id: str) -> SeriesDetail | None:
        with self._lock:
            series = self._series.get(series_id)
            if series is None or series.business_id != business_id:
                return None
            bookings = sorted(
                (b for b in self._bookings.values() if b.recurring_series_id == series_id),
                key=lambda b: b.start_time,
            )
        return SeriesDetail(series=series, bookings=tuple(bookings))

    def update_booking_status(self, booking_id: str, status: BookingStatus) -> Booking:
        with self._lock:
            booking = self._bookings[booking_id]
            updated = replace(booking, status=status)
            self._bookings[booking_id] = updated
        return updated

    def get_reminders(self, booking_id: str) -> list[Reminder]:
        reminders = [r for r in self._reminders.values() if r.booking_id == booking_id]
        return sorted(reminders, key=lambda r: r.scheduled_at)

    def cancel_pending_reminders(self, booking_id: str) -> int:
        changed = 0
        with self._lock:
            for reminder in list(self._reminders.values()):
                if reminder.booking_id == booking_id and reminder.status == ReminderStatus.PENDING:
                    self._reminders[reminder.id] = replace(reminder, status=ReminderStatus.CANCELLED)
                    changed += 1
        return changed
