"""
Tests for the HTTP notification and calendar sync forwarders.
"""

from __future__ import annotations

import json
from datetime import datetime

import httpx
import pytest

from recurring_booking.application.ports.calendar import CalendarAction
from recurring_booking.domain.entities.booking import Booking
from recurring_booking.infrastructure.calendar.webhook_calendar import WebhookCalendarSync
from recurring_booking.infrastructure.notifications.webhook_notifications import WebhookNotificationSink

BOOKING = Booking(
    id="b1",
    business_id="biz_1",
    customer_id="cust_1",
    service_id="svc_cut",
    staff_id="staff_1",
    recurring_series_id="series_1",
    start_time=datetime(2026, 3, 3, 14, 0),
    end_time=datetime(2026, 3, 3, 15, 0),
)


def _client(status_code: int, seen: list[httpx.Request]) -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status_code, json={"ok": status_code < 400})

    return httpx.Client(transport=httpx.MockTransport(handler))


def test_notification_posts_booking_payload():
    seen: list[httpx.Request] = []
    sink = WebhookNotificationSink(url="https://hooks.test/notify", api_key="k", client=_client(202, seen))

    sink.send_booking_confirmation(BOOKING)

    assert len(seen) == 1
    assert seen[0].headers["Authorization"] == "Bearer k"
    body = json.loads(seen[0].content)
    assert body["event"] == "booking.confirmation"
    assert body["booking"]["id"] == "b1"
    assert body["booking"]["start_time"] == "2026-03-03T14:00:00"
    assert body["booking"]["status"] == "CONFIRMED"


def test_notification_error_status_raises():
    sink = WebhookNotificationSink(url="https://hooks.test/notify", client=_client(500, []))

    with pytest.raises(httpx.HTTPStatusError):
        sink.send_booking_confirmation(BOOKING)


def test_calendar_posts_action():
    seen: list[httpx.Request] = []
    sync = WebhookCalendarSync(url="https://hooks.test/calendar", client=_client(200, seen))

    sync.sync_booking(BOOKING, CalendarAction.CANCEL)

    body = json.loads(seen[0].content)
    assert body["action"] == "cancel"
    assert body["booking"]["recurring_series_id"] == "series_1"
    assert "Authorization" not in seen[0].headers


def test_calendar_error_status_raises():
    sync = WebhookCalendarSync(url="https://hooks.test/calendar", client=_client(503, []))

    with pytest.raises(httpx.HTTPStatusError):
        sync.sync_booking(BOOKING, CalendarAction.CREATE)


def test_missing_url_is_rejected(monkeypatch):
    from recurring_booking.core.config import settings

    monkeypatch.setattr(settings, "NOTIFICATION_WEBHOOK_URL", None)
    monkeypatch.setattr(settings, "CALENDAR_SYNC_WEBHOOK_URL", None)

    with pytest.raises(ValueError):
        WebhookNotificationSink(client=_client(200, []))
    with pytest.raises(ValueError):
        WebhookCalendarSync(client=_client(200, []))
