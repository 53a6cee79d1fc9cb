from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from recurring_booking.application.ports.booking_store import BookingStorePort, SeriesWriterPort
from recurring_booking.domain.entities.booking import Booking
from recurring_booking.domain.entities.booking_status import BookingStatus
from recurring_booking.domain.entities.recurring_series import SeriesDetail
from recurring_booking.domain.entities.reminder import Reminder, ReminderStatus
from recurring_booking.domain.entities.service_record import ServiceRecord
from recurring_booking.infrastructure.store.memory_store import StagedWriter
from recurring_booking.infrastructure.store.serialization import (
    deserialize_booking,
    deserialize_reminder,
    deserialize_series,
    deserialize_service,
    serialize_booking,
    serialize_reminder,
    serialize_series,
    serialize_service,
)

logger = logging.getLogger(__name__)


class JsonBookingStore(BookingStorePort):
    """
    Keeps services, series, bookings and reminders in one JSON document.

    Every write replaces the document through a temp file and an atomic rename, so a
    transaction either lands completely or not at all.
    """

    def __init__(self, data_dir: str = "./data", filename: str = "scheduler.json") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._path = self._data_dir / filename
        self._lock = threading.RLock()

    def _empty(self) -> dict[str, Any]:
        return {"services": {}, "series": {}, "bookings": {}, "reminders": {}, "version": 1}

    def _load(self) -> dict[str, Any]:
        """Load the document, return an empty one if missing."""
        if not self._path.exists():
            return self._empty()
        with open(self._path, "r", encoding="utf-8") as f:
            data = json.load(f)
        for key in ("services", "series", "bookings", "reminders"):
            data.setdefault(key, {})
        data.setdefault("version", 1)
        return data

    def _save(self, data: dict[str, Any]) -> None:
        """Save the document atomically."""
        temp_path = self._path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise

    def add_service(self, service: ServiceRecord) -> None:
        with self._lock:
            data = self._load()
            data["services"][service.id] = serialize_service(service)
            self._save(data)

    def add_booking(self, booking: Booking) -> None:
        with self._lock:
            data = self._load()
            data["bookings"][booking.id] = serialize_booking(booking)
            self._save(data)

    def get_service(self, business_id: str, service_id: str) -> ServiceRecord | None:
        raw = self._load()["services"].get(service_id)
        if raw is None or raw.get("business_id") != business_id:
            return None
        return deserialize_service(raw)

    def find_overlapping_booking(
        self,
        business_id: str,
        staff_id: str,
        start: datetime,
        end: datetime,
        statuses: Iterable[BookingStatus],
    ) -> Booking | None:
        wanted = set(statuses)
        for raw in self._load()["bookings"].values():
            if raw.get("business_id") != business_id or raw.get("staff_id") != staff_id:
                continue
            booking = deserialize_booking(raw)
            if booking.status in wanted and booking.overlaps(start, end):
                return booking
        return None

    @contextmanager
    def transaction(self) -> Iterator[SeriesWriterPort]:
        writer = StagedWriter()
        with self._lock:
            data = self._load()
            yield writer
            for series in writer.series:
                data["series"][series.id] = serialize_series(series)
            for booking in writer.bookings:
                data["bookings"][booking.id] = serialize_booking(booking)
            for reminder in writer.reminders:
                data["reminders"][reminder.id] = serialize_reminder(reminder)
            self._save(data)
            logger.debug(
                "Transaction committed",
                extra={"count": len(writer.bookings)},
            )

    def get_series_detail(self, business_id: str, series_id: str) -> SeriesDetail | None:
        data = self._load()
        raw = data["series"].get(series_id)
        if raw is None or raw.get("business_id") != business_id:
            return None
        bookings = sorted(
            (
                deserialize_booking(b)
                for b in data["bookings"].values()
                if b.get("recurring_series_id") == series_id
            ),
            key=lambda b: b.start_time,
        )
        return SeriesDetail(series=deserialize_series(raw), bookings=tuple(bookings))

    def update_booking_status(self, booking_id: str, status: BookingStatus) -> Booking:
        with self._lock:
            data = self._load()
            raw = data["bookings"][booking_id]
            raw["status"] = status.value
            self._save(data)
        return deserialize_booking(raw)

    def get_reminders(self, booking_id: str) -> list[Reminder]:
        reminders = [
            deserialize_reminder(r)
            for r in self._load()["reminders"].values()
            if r.get("booking_id") == booking_id
        ]
        return sorted(reminders, key=lambda r: r.scheduled_at)

    def cancel_pending_reminders(self, booking_id: str) -> int:
        changed = 0
        with self._lock:
            data = self._load()
            for raw in data["reminders"].values():
                if raw.get("booking_id") == booking_id and raw.get("status") == ReminderStatus.PENDING.value:
                    raw["status"] = ReminderStatus.CANCELLED.value
                    changed += 1
            if changed:
                self._save(data)
        return changed
