from __future__ import annotations

from recurring_booking.application.exceptions import SeriesValidationError
from recurring_booking.domain.entities.cancellation_scope import (
    AllScope,
    CancellationScope,
    FutureScope,
    SingleScope,
)

SCOPE_NAMES = ("single", "future", "all")


def parse_scope(scope: str, booking_id: str | None = None) -> CancellationScope:
    """Map a `single|future|all` scope name and optional booking id onto a scope variant."""
    name = (scope or "").strip().lower()
    if name not in SCOPE_NAMES:
        raise SeriesValidationError(f"scope must be one of: {', '.join(SCOPE_NAMES)}")

    if name == "all":
        return AllScope()

    if not booking_id:
        raise SeriesValidationError(f"bookingId is required for {name} cancel")

    if name == "single":
        return SingleScope(booking_id=booking_id)
    return FutureScope(booking_id=booking_id)
