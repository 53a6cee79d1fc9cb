from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ReminderStatus(str, Enum):
    PENDING = "PENDING"
    SENT = "SENT"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class Reminder:
    id: str
    business_id: str
    booking_id: str
    scheduled_at: datetime
    status: ReminderStatus = ReminderStatus.PENDING
