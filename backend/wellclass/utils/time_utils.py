from __future__ import annotations

from datetime import datetime, time, timezone


def to_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to an aware UTC value.

    Naive values are taken to already be UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_hhmm(value: str) -> time:
    """
    Parse an ``HH:MM`` clock string.

    Raises:
        ValueError: If the string is not a valid 24h clock time.
    """
    candidate = value.strip()
    try:
        parsed = datetime.strptime(candidate, "%H:%M")
    except ValueError as exc:
        raise ValueError(f"invalid time {value!r}, expected HH:MM") from exc
    return parsed.time()
