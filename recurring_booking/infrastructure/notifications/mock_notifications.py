from __future__ import annotations

import logging

from recurring_booking.application.ports.notifications import NotificationPort
from recurring_booking.domain.entities.booking import Booking


class MockNotificationSink(NotificationPort):
    def __init__(self) -> None:
        self.sent: list[Booking] = []
        self._logger = logging.getLogger(__name__)

    def send_booking_confirmation(self, booking: Booking) -> None:
        self.sent.append(booking)
        self._logger.info(
            "Mock booking confirmation sent",
            extra={"booking_id": booking.id, "series_id": booking.recurring_series_id},
        )
