from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class SingleScope:
    """Cancel one booking of the series."""

    booking_id: str


@dataclass(frozen=True)
class FutureScope:
    """Cancel the referenced booking and every later one."""

    booking_id: str


@dataclass(frozen=True)
class AllScope:
    """Cancel every booking of the series regardless of date."""


CancellationScope = Union[SingleScope, FutureScope, AllScope]
