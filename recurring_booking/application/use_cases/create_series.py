from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from concurrent.futures import Executor
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from recurring_booking.application.dto.series_request import CreateSeriesRequest
from recurring_booking.application.exceptions import SeriesValidationError
from recurring_booking.application.ports.booking_store import BookingStorePort
from recurring_booking.application.ports.calendar import CalendarAction, CalendarSyncPort
from recurring_booking.application.ports.notifications import NotificationPort
from recurring_booking.application.use_cases.conflict_checker import ConflictChecker
from recurring_booking.application.utils.recurrence import generate_occurrences
from recurring_booking.domain.entities.booking import Booking
from recurring_booking.domain.entities.booking_status import BookingStatus
from recurring_booking.domain.entities.recurring_series import RecurringSeries
from recurring_booking.domain.entities.reminder import Reminder, ReminderStatus
from recurring_booking.domain.wall_time import align_to


@dataclass(frozen=True)
class CreatedSeries:
    series: RecurringSeries
    bookings: list[Booking]


def new_id() -> str:
    return uuid.uuid4().hex


class CreateSeriesUseCase:
    def __init__(
        self,
        store: BookingStorePort,
        notifications: NotificationPort,
        calendar: CalendarSyncPort,
        conflict_checker: ConflictChecker | None = None,
        clock: Callable[[], datetime] | None = None,
        reminder_lead_hours: int = 24,
        executor: Executor | None = None,
    ) -> None:
        self._store = store
        self._notifications = notifications
        self._calendar = calendar
        self._conflict_checker = conflict_checker or ConflictChecker(store)
        self._clock = clock
        self._reminder_lead = timedelta(hours=reminder_lead_hours)
        self._executor = executor
        self._logger = logging.getLogger(__name__)

    def execute(self, business_id: str, request: CreateSeriesRequest | dict[str, Any]) -> CreatedSeries:
        """
        Create a recurring series and all of its bookings in one transaction.

        Every validation and the staff conflict check run before anything is written.
        Confirmations and calendar sync run after the commit and never fail the call.
        """
        if not isinstance(request, CreateSeriesRequest):
            request = CreateSeriesRequest.from_payload(request)

        service = self._store.get_service(business_id, request.service_id)
        if service is None:
            raise SeriesValidationError("Service not found")

        now = self._now(request.start_date)
        if request.start_date <= now:
            raise SeriesValidationError("Start date must be in the future")

        try:
            occurrences = generate_occurrences(
                start_date=request.start_date,
                time_of_day=request.time_of_day,
                days_of_week=request.days_of_week,
                interval_weeks=request.interval_weeks,
                count=request.total_count,
                end_date=request.ends_at,
            )
        except ValueError as e:
            raise SeriesValidationError(str(e)) from e

        if not occurrences:
            raise SeriesValidationError("No occurrences could be generated with the given parameters")

        self._conflict_checker.ensure_available(
            business_id=business_id,
            staff_id=request.staff_id,
            occurrences=occurrences,
            duration_mins=service.duration_mins,
        )

        series = RecurringSeries(
            id=new_id(),
            business_id=business_id,
            customer_id=request.customer_id,
            service_id=request.service_id,
            staff_id=request.staff_id,
            time_of_day=request.clock_time,
            days_of_week=tuple(request.days_of_week),
            interval_weeks=request.interval_weeks,
            total_count=len(occurrences),
            ends_at=request.ends_at,
            notes=request.notes,
        )

        duration = timedelta(minutes=service.duration_mins)
        bookings: list[Booking] = []
        reminders: list[Reminder] = []
        for occurrence in occurrences:
            booking = Booking(
                id=new_id(),
                business_id=business_id,
                customer_id=request.customer_id,
                service_id=request.service_id,
                staff_id=request.staff_id,
                recurring_series_id=series.id,
                start_time=occurrence,
                end_time=occurrence + duration,
                status=BookingStatus.CONFIRMED,
                notes=request.notes,
            )
            bookings.append(booking)

            reminder_at = occurrence - self._reminder_lead
            if reminder_at > now:
                reminders.append(
                    Reminder(
                        id=new_id(),
                        business_id=business_id,
                        booking_id=booking.id,
                        scheduled_at=reminder_at,
                        status=ReminderStatus.PENDING,
                    )
                )

        with self._store.transaction() as tx:
            tx.add_series(series)
            for booking in bookings:
                tx.add_booking(booking)
            for reminder in reminders:
                tx.add_reminder(reminder)

        self._logger.info(
            "Recurring series created",
            extra={"business_id": business_id, "series_id": series.id, "count": len(bookings)},
        )

        for booking in bookings:
            self._dispatch(self._notify, booking, series.id)
            self._dispatch(self._sync_calendar, booking, series.id)

        return CreatedSeries(series=series, bookings=bookings)

    def _dispatch(self, action: Callable[[Booking, str], None], booking: Booking, series_id: str) -> None:
        # Without an executor side effects run inline, after the commit.
        if self._executor is None:
            action(booking, series_id)
        else:
            self._executor.submit(action, booking, series_id)

    def _notify(self, booking: Booking, series_id: str) -> None:
        try:
            self._notifications.send_booking_confirmation(booking)
        except Exception as e:
            self._logger.warning(
                f"Failed to send confirmation for recurring booking {booking.id}",
                extra={"booking_id": booking.id, "series_id": series_id, "error": str(e)},
            )

    def _sync_calendar(self, booking: Booking, series_id: str) -> None:
        try:
            self._calendar.sync_booking(booking, CalendarAction.CREATE)
        except Exception as e:
            self._logger.warning(
                f"Failed to sync recurring booking {booking.id} to calendar",
                extra={"booking_id": booking.id, "series_id": series_id, "error": str(e)},
            )

    def _now(self, reference: datetime) -> datetime:
        if self._clock is not None:
            return align_to(self._clock(), reference)
        return datetime.now(reference.tzinfo)
