from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache
import logging

from recurring_booking.core.config import settings
from recurring_booking.application.ports.booking_store import BookingStorePort
from recurring_booking.application.ports.calendar import CalendarSyncPort
from recurring_booking.application.ports.notifications import NotificationPort
from recurring_booking.application.use_cases.cancel_series import CancelSeriesUseCase
from recurring_booking.application.use_cases.conflict_checker import ConflictChecker
from recurring_booking.application.use_cases.create_series import CreateSeriesUseCase
from recurring_booking.application.use_cases.get_series import GetSeriesUseCase
from recurring_booking.infrastructure.calendar.mock_calendar import MockCalendarSync
from recurring_booking.infrastructure.calendar.webhook_calendar import WebhookCalendarSync
from recurring_booking.infrastructure.notifications.mock_notifications import MockNotificationSink
from recurring_booking.infrastructure.notifications.webhook_notifications import WebhookNotificationSink
from recurring_booking.infrastructure.store.json_store import JsonBookingStore
from recurring_booking.infrastructure.store.memory_store import MemoryBookingStore


logger = logging.getLogger(__name__)

_booking_store: BookingStorePort | None = None


def _is_local() -> bool:
    return settings.ENV.lower() in {"dev", "local"}


def get_booking_store() -> BookingStorePort:
    global _booking_store
    if _booking_store is None:
        if settings.STORE_PROVIDER.lower() == "json":
            _booking_store = JsonBookingStore(data_dir=settings.DATA_DIR)
        else:
            _booking_store = MemoryBookingStore()
        logger.info("Using %s", type(_booking_store).__name__)
    return _booking_store


@lru_cache
def get_notification_sink() -> NotificationPort:
    if not settings.NOTIFICATION_WEBHOOK_URL or _is_local():
        return MockNotificationSink()
    return WebhookNotificationSink()


@lru_cache
def get_calendar_sync() -> CalendarSyncPort:
    if not settings.CALENDAR_SYNC_WEBHOOK_URL or _is_local():
        return MockCalendarSync()
    return WebhookCalendarSync()


@lru_cache
def get_side_effect_executor() -> ThreadPoolExecutor:
    return ThreadPoolExecutor(
        max_workers=settings.SIDE_EFFECT_WORKERS,
        thread_name_prefix="booking-side-effects",
    )


def get_create_series_use_case() -> CreateSeriesUseCase:
    store = get_booking_store()
    return CreateSeriesUseCase(
        store=store,
        notifications=get_notification_sink(),
        calendar=get_calendar_sync(),
        conflict_checker=ConflictChecker(store),
        reminder_lead_hours=settings.REMINDER_LEAD_HOURS,
        executor=get_side_effect_executor(),
    )


def get_get_series_use_case() -> GetSeriesUseCase:
    return GetSeriesUseCase(store=get_booking_store())


def get_cancel_series_use_case() -> CancelSeriesUseCase:
    return CancelSeriesUseCase(
        store=get_booking_store(),
        calendar=get_calendar_sync(),
        executor=get_side_effect_executor(),
    )


def get_container() -> dict[str, object]:
    return {
        "create_series": get_create_series_use_case(),
        "get_series": get_get_series_use_case(),
        "cancel_series": get_cancel_series_use_case(),
        "store": get_booking_store(),
    }
