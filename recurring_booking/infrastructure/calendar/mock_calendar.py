from __future__ import annotations

import logging

from recurring_booking.application.ports.calendar import CalendarAction, CalendarSyncPort
from recurring_booking.domain.entities.booking import Booking


class MockCalendarSync(CalendarSyncPort):
    def __init__(self, fail_for: set[str] | None = None) -> None:
        self.calls: list[tuple[str, CalendarAction]] = []
        self._events: dict[str, Booking] = {}
        self._fail_for = set(fail_for or ())
        self._logger = logging.getLogger(__name__)

    @property
    def events(self) -> dict[str, Booking]:
        return dict(self._events)

    def sync_booking(self, booking: Booking, action: CalendarAction) -> None:
        self.calls.append((booking.id, action))
        if booking.id in self._fail_for:
            raise RuntimeError(f"mock calendar failure for {booking.id}")

        if action == CalendarAction.CREATE:
            self._events[booking.id] = booking
        else:
            self._events.pop(booking.id, None)
        self._logger.info(
            "Mock calendar synced",
            extra={"booking_id": booking.id, "status": action.value},
        )
