"""Timestamp helpers shared by services and the statistics engine."""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso_timestamp(moment: Optional[datetime] = None) -> str:
    """
    Render a datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ``.

    Stored dates and window cutoffs share this shape so they can be
    compared as plain strings. Naive datetimes are taken to be UTC.
    """
    if moment is None:
        moment = utc_now()
    elif moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)

    millis = moment.microsecond // 1000
    return f"{moment.strftime('%Y-%m-%dT%H:%M:%S')}.{millis:03d}Z"
