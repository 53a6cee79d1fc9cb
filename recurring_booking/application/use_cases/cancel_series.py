from __future__ import annotations

import logging
from concurrent.futures import Executor
from dataclasses import dataclass

from recurring_booking.application.dto.cancel_request import parse_scope
from recurring_booking.application.exceptions import SeriesNotFoundError, SeriesValidationError
from recurring_booking.application.ports.booking_store import BookingStorePort
from recurring_booking.application.ports.calendar import CalendarAction, CalendarSyncPort
from recurring_booking.domain.entities.booking import Booking
from recurring_booking.domain.entities.booking_status import BookingStatus
from recurring_booking.domain.entities.cancellation_scope import (
    AllScope,
    CancellationScope,
    FutureScope,
    SingleScope,
)
from recurring_booking.domain.entities.recurring_series import SeriesDetail


@dataclass(frozen=True)
class CancellationResult:
    cancelled: int


class CancelSeriesUseCase:
    def __init__(
        self,
        store: BookingStorePort,
        calendar: CalendarSyncPort,
        executor: Executor | None = None,
    ) -> None:
        self._store = store
        self._calendar = calendar
        self._executor = executor
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        business_id: str,
        series_id: str,
        scope: CancellationScope | str,
        booking_id: str | None = None,
    ) -> CancellationResult:
        """
        Cancel bookings of a series selected by `scope`.

        `scope` is either a scope variant or one of "single", "future", "all" together
        with `booking_id`. Bookings that are no longer cancellable are skipped without
        error and are not counted.
        """
        if isinstance(scope, str):
            scope = parse_scope(scope, booking_id)

        detail = self._store.get_series_detail(business_id, series_id)
        if detail is None:
            raise SeriesNotFoundError("Recurring series not found")

        to_cancel = select_bookings(detail, scope)

        for booking in to_cancel:
            cancelled = self._store.update_booking_status(booking.id, BookingStatus.CANCELLED)
            self._store.cancel_pending_reminders(booking.id)
            if self._executor is None:
                self._sync_cancellation(cancelled, series_id)
            else:
                self._executor.submit(self._sync_cancellation, cancelled, series_id)

        self._logger.info(
            "Recurring series cancelled",
            extra={
                "business_id": business_id,
                "series_id": series_id,
                "scope": type(scope).__name__,
                "count": len(to_cancel),
            },
        )
        return CancellationResult(cancelled=len(to_cancel))

    def _sync_cancellation(self, booking: Booking, series_id: str) -> None:
        try:
            self._calendar.sync_booking(booking, CalendarAction.CANCEL)
        except Exception as e:
            self._logger.warning(
                f"Failed to sync cancellation for recurring booking {booking.id}",
                extra={"booking_id": booking.id, "series_id": series_id, "error": str(e)},
            )


def select_bookings(detail: SeriesDetail, scope: CancellationScope) -> list[Booking]:
    """Resolve a scope to the cancellable bookings of a series, in start_time order."""
    if isinstance(scope, SingleScope):
        return [
            b for b in detail.bookings
            if b.id == scope.booking_id and b.status.is_cancellable
        ]

    if isinstance(scope, FutureScope):
        reference = detail.find_booking(scope.booking_id)
        if reference is None:
            raise SeriesValidationError("Booking not found in series")
        return [
            b for b in detail.bookings
            if b.start_time >= reference.start_time and b.status.is_cancellable
        ]

    if isinstance(scope, AllScope):
        return [b for b in detail.bookings if b.status.is_cancellable]

    raise SeriesValidationError(f"Unsupported cancellation scope: {scope!r}")
