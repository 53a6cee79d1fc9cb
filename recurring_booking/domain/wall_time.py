from __future__ import annotations

from datetime import datetime


def align_to(value: datetime, reference: datetime) -> datetime:
    """
    Make `value` comparable with `reference` when only one of them carries a tzinfo.

    A naive value is read as wall time in the reference's zone; an aware value compared
    against a naive reference drops its tzinfo and keeps its wall time. Nothing is
    converted between zones.
    """
    if (value.tzinfo is None) == (reference.tzinfo is None):
        return value
    return value.replace(tzinfo=reference.tzinfo)
