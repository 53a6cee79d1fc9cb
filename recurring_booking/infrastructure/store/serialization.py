from __future__ import annotations

from datetime import datetime, time
from typing import Any

from recurring_booking.domain.entities.booking import Booking
from recurring_booking.domain.entities.booking_status import BookingStatus
from recurring_booking.domain.entities.recurring_series import RecurringSeries
from recurring_booking.domain.entities.reminder import Reminder, ReminderStatus
from recurring_booking.domain.entities.service_record import ServiceRecord


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_iso(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def serialize_booking(booking: Booking) -> dict[str, Any]:
    return {
        "id": booking.id,
        "business_id": booking.business_id,
        "customer_id": booking.customer_id,
        "service_id": booking.service_id,
        "staff_id": booking.staff_id,
        "recurring_series_id": booking.recurring_series_id,
        "start_time": booking.start_time.isoformat(),
        "end_time": booking.end_time.isoformat(),
        "status": booking.status.value,
        "notes": booking.notes,
    }


def deserialize_booking(data: dict[str, Any]) -> Booking:
    return Booking(
        id=data["id"],
        business_id=data["business_id"],
        customer_id=data["customer_id"],
        service_id=data["service_id"],
        staff_id=data.get("staff_id"),
        recurring_series_id=data.get("recurring_series_id"),
        start_time=datetime.fromisoformat(data["start_time"]),
        end_time=datetime.fromisoformat(data["end_time"]),
        status=BookingStatus(data.get("status", BookingStatus.CONFIRMED.value)),
        notes=data.get("notes"),
    )


def serialize_series(series: RecurringSeries) -> dict[str, Any]:
    return {
        "id": series.id,
        "business_id": series.business_id,
        "customer_id": series.customer_id,
        "service_id": series.service_id,
        "staff_id": series.staff_id,
        "time_of_day": series.time_of_day.strftime("%H:%M"),
        "days_of_week": list(series.days_of_week),
        "interval_weeks": series.interval_weeks,
        "total_count": series.total_count,
        "ends_at": _iso(series.ends_at),
        "notes": series.notes,
    }


def deserialize_series(data: dict[str, Any]) -> RecurringSeries:
    return RecurringSeries(
        id=data["id"],
        business_id=data["business_id"],
        customer_id=data["customer_id"],
        service_id=data["service_id"],
        staff_id=data.get("staff_id"),
        time_of_day=time.fromisoformat(data["time_of_day"]),
        days_of_week=tuple(data.get("days_of_week", [])),
        interval_weeks=int(data["interval_weeks"]),
        total_count=int(data["total_count"]),
        ends_at=_parse_iso(data.get("ends_at")),
        notes=data.get("notes"),
    )


def serialize_reminder(reminder: Reminder) -> dict[str, Any]:
    return {
        "id": reminder.id,
        "business_id": reminder.business_id,
        "booking_id": reminder.booking_id,
        "scheduled_at": reminder.scheduled_at.isoformat(),
        "status": reminder.status.value,
    }


def deserialize_reminder(data: dict[str, Any]) -> Reminder:
    return Reminder(
        id=data["id"],
        business_id=data["business_id"],
        booking_id=data["booking_id"],
        scheduled_at=datetime.fromisoformat(data["scheduled_at"]),
        status=ReminderStatus(data.get("status", ReminderStatus.PENDING.value)),
    )


def serialize_service(service: ServiceRecord) -> dict[str, Any]:
    return {
        "id": service.id,
        "business_id": service.business_id,
        "name": service.name,
        "duration_mins": service.duration_mins,
    }


def deserialize_service(data: dict[str, Any]) -> ServiceRecord:
    return ServiceRecord(
        id=data["id"],
        business_id=data["business_id"],
        name=data.get("name", ""),
        duration_mins=int(data["duration_mins"]),
    )
