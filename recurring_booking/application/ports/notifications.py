from __future__ import annotations

from abc import ABC, abstractmethod

from recurring_booking.domain.entities.booking import Booking


class NotificationPort(ABC):
    @abstractmethod
    def send_booking_confirmation(self, booking: Booking) -> None:
        """Send a confirmation for a newly created booking. May raise."""
        raise NotImplementedError
