from __future__ import annotations

import logging

import httpx

from recurring_booking.application.ports.calendar import CalendarAction, CalendarSyncPort
from recurring_booking.core.config import settings
from recurring_booking.domain.entities.booking import Booking
from recurring_booking.infrastructure.store.serialization import serialize_booking


class WebhookCalendarSync(CalendarSyncPort):
    """Forwards booking create/cancel events to the calendar sync service."""

    def __init__(
        self,
        url: str | None = None,
        api_key: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._url = url or settings.CALENDAR_SYNC_WEBHOOK_URL
        self._api_key = api_key or settings.WEBHOOK_API_KEY
        self._client = client or httpx.Client(timeout=settings.HTTP_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._url:
            raise ValueError("CALENDAR_SYNC_WEBHOOK_URL is required for webhook calendar sync")

    def sync_booking(self, booking: Booking, action: CalendarAction) -> None:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        payload = {"action": action.value, "booking": serialize_booking(booking)}

        try:
            resp = self._client.post(self._url, json=payload, headers=headers)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            self._logger.error(
                "Error syncing booking to calendar",
                extra={"booking_id": booking.id, "error": str(e)},
            )
            raise

        self._logger.info(
            "Calendar sync forwarded",
            extra={"booking_id": booking.id, "status": action.value},
        )
