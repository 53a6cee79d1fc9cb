from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from recurring_booking.application.exceptions import BookingConflictError
from recurring_booking.application.ports.booking_store import BookingStorePort
from recurring_booking.domain.entities.booking import Booking
from recurring_booking.domain.entities.booking_status import CANCELLABLE_STATUSES


@dataclass(frozen=True)
class Conflict:
    occurrence: datetime
    staff_id: str
    existing_booking: Booking


class ConflictChecker:
    def __init__(self, store: BookingStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def check(
        self,
        business_id: str,
        staff_id: str | None,
        occurrences: Sequence[datetime],
        duration_mins: int,
    ) -> Conflict | None:
        """
        Return the earliest occurrence that overlaps an active booking of the staff member.

        Occurrences are checked in order and the first hit stops the scan. Series without
        a staff member are never checked.
        """
        if not staff_id:
            return None

        duration = timedelta(minutes=duration_mins)
        for occurrence in occurrences:
            existing = self._store.find_overlapping_booking(
                business_id=business_id,
                staff_id=staff_id,
                start=occurrence,
                end=occurrence + duration,
                statuses=CANCELLABLE_STATUSES,
            )
            if existing is not None:
                self._logger.info(
                    "Staff conflict detected",
                    extra={
                        "business_id": business_id,
                        "staff_id": staff_id,
                        "booking_id": existing.id,
                        "occurrence": occurrence.isoformat(),
                    },
                )
                return Conflict(occurrence=occurrence, staff_id=staff_id, existing_booking=existing)
        return None

    def ensure_available(
        self,
        business_id: str,
        staff_id: str | None,
        occurrences: Sequence[datetime],
        duration_mins: int,
    ) -> None:
        conflict = self.check(business_id, staff_id, occurrences, duration_mins)
        if conflict is not None:
            raise BookingConflictError(
                occurrence=conflict.occurrence,
                staff_id=conflict.staff_id,
                existing_booking_id=conflict.existing_booking.id,
            )
