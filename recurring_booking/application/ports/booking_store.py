from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from contextlib import AbstractContextManager
from datetime import datetime

from recurring_booking.domain.entities.booking import Booking
from recurring_booking.domain.entities.booking_status import BookingStatus
from recurring_booking.domain.entities.recurring_series import RecurringSeries, SeriesDetail
from recurring_booking.domain.entities.reminder import Reminder
from recurring_booking.domain.entities.service_record import ServiceRecord


class SeriesWriterPort(ABC):
    """Stages writes inside a transaction. Nothing is visible until the transaction commits."""

    @abstractmethod
    def add_series(self, series: RecurringSeries) -> None:
        raise NotImplementedError

    @abstractmethod
    def add_booking(self, booking: Booking) -> None:
        raise NotImplementedError

    @abstractmethod
    def add_reminder(self, reminder: Reminder) -> None:
        raise NotImplementedError


class BookingStorePort(ABC):
    @abstractmethod
    def get_service(self, business_id: str, service_id: str) -> ServiceRecord | None:
        """Get a service owned by the business, or None."""
        raise NotImplementedError

    @abstractmethod
    def find_overlapping_booking(
        self,
        business_id: str,
        staff_id: str,
        start: datetime,
        end: datetime,
        statuses: Iterable[BookingStatus],
    ) -> Booking | None:
        """
        Find one booking for the business and staff member whose status is in `statuses`
        and whose interval overlaps [start, end).
        """
        raise NotImplementedError

    @abstractmethod
    def transaction(self) -> AbstractContextManager[SeriesWriterPort]:
        """
        Open an atomic multi-write transaction.

        All staged rows are committed when the block exits normally. If the block raises,
        nothing is persisted and the exception propagates.
        """
        raise NotImplementedError

    @abstractmethod
    def get_series_detail(self, business_id: str, series_id: str) -> SeriesDetail | None:
        """Get a series with its bookings ordered by start_time ascending."""
        raise NotImplementedError

    @abstractmethod
    def update_booking_status(self, booking_id: str, status: BookingStatus) -> Booking:
        raise NotImplementedError

    @abstractmethod
    def get_reminders(self, booking_id: str) -> list[Reminder]:
        raise NotImplementedError

    @abstractmethod
    def cancel_pending_reminders(self, booking_id: str) -> int:
        """Mark PENDING reminders of a booking as CANCELLED. Returns how many changed."""
        raise NotImplementedError
