from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from recurring_booking.domain.entities.booking import Booking


class CalendarAction(str, Enum):
    CREATE = "create"
    CANCEL = "cancel"


class CalendarSyncPort(ABC):
    @abstractmethod
    def sync_booking(self, booking: Booking, action: CalendarAction) -> None:
        """Mirror a booking change to the staff member's external calendar. May raise."""
        raise NotImplementedError
