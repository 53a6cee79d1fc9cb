from __future__ import annotations

import logging

import httpx

from recurring_booking.application.ports.notifications import NotificationPort
from recurring_booking.core.config import settings
from recurring_booking.domain.entities.booking import Booking
from recurring_booking.infrastructure.store.serialization import serialize_booking


class WebhookNotificationSink(NotificationPort):
    """Forwards booking confirmations to the messaging service as JSON."""

    def __init__(
        self,
        url: str | None = None,
        api_key: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._url = url or settings.NOTIFICATION_WEBHOOK_URL
        self._api_key = api_key or settings.WEBHOOK_API_KEY
        self._client = client or httpx.Client(timeout=settings.HTTP_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._url:
            raise ValueError("NOTIFICATION_WEBHOOK_URL is required for webhook notifications")

    def send_booking_confirmation(self, booking: Booking) -> None:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        payload = {"event": "booking.confirmation", "booking": serialize_booking(booking)}

        resp = self._client.post(self._url, json=payload, headers=headers)
        if resp.status_code >= 400:
            self._logger.error(
                "Booking confirmation webhook failed",
                extra={"booking_id": booking.id, "status": resp.status_code, "error": resp.text[:200]},
            )
            resp.raise_for_status()

        self._logger.info("Booking confirmation forwarded", extra={"booking_id": booking.id})
