from __future__ import annotations

from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    PENDING_DEPOSIT = "PENDING_DEPOSIT"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"

    @property
    def is_cancellable(self) -> bool:
        return self in CANCELLABLE_STATUSES


# Statuses that still hold a staff slot and may be moved to CANCELLED.
CANCELLABLE_STATUSES: frozenset[BookingStatus] = frozenset(
    {
        BookingStatus.PENDING,
        BookingStatus.PENDING_DEPOSIT,
        BookingStatus.CONFIRMED,
        BookingStatus.IN_PROGRESS,
    }
)
