from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ServiceRecord:
    id: str
    business_id: str
    name: str
    duration_mins: int
