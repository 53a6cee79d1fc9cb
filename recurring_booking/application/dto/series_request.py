from __future__ import annotations

from datetime import datetime, time
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from recurring_booking.application.exceptions import SeriesValidationError
from recurring_booking.application.utils.recurrence import (
    MAX_OCCURRENCES,
    normalize_days_of_week,
    parse_time_of_day,
)
from recurring_booking.domain.wall_time import align_to

MAX_INTERVAL_WEEKS = 4


class CreateSeriesRequest(BaseModel):
    """Parameters of a new recurring series. Accepts snake_case or camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    customer_id: str = Field(min_length=1)
    service_id: str = Field(min_length=1)
    staff_id: str | None = None
    start_date: datetime
    time_of_day: str
    days_of_week: list[int] = Field(min_length=1)
    interval_weeks: int = Field(ge=1, le=MAX_INTERVAL_WEEKS)
    total_count: int | None = Field(default=None, ge=1, le=MAX_OCCURRENCES)
    ends_at: datetime | None = None
    notes: str | None = None

    @field_validator("staff_id")
    @classmethod
    def _blank_staff_is_unassigned(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value

    @field_validator("time_of_day")
    @classmethod
    def _check_time_of_day(cls, value: str) -> str:
        parse_time_of_day(value)
        return value

    @field_validator("days_of_week")
    @classmethod
    def _check_days_of_week(cls, value: list[int]) -> list[int]:
        return list(normalize_days_of_week(value))

    @field_validator("ends_at")
    @classmethod
    def _end_in_start_zone(cls, value: datetime | None, info: ValidationInfo) -> datetime | None:
        # A date-only or offset-less bound is wall time in the start date's zone.
        start = info.data.get("start_date")
        if value is None or start is None:
            return value
        return align_to(value, start)

    @property
    def clock_time(self) -> time:
        return parse_time_of_day(self.time_of_day)

    @staticmethod
    def from_payload(payload: dict[str, Any]) -> "CreateSeriesRequest":
        try:
            return CreateSeriesRequest.model_validate(payload)
        except ValidationError as e:
            raise SeriesValidationError(str(e)) from e
