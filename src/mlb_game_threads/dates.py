from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

TIMECODE_FORMAT = "%Y%m%d_%H%M%S"


def to_timecode(moment: datetime) -> str:
    """Format *moment* as a Stats API ``timecode`` (``YYYYMMDD_HHMMSS`` in UTC)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).strftime(TIMECODE_FORMAT)


def from_timecode(timecode: str) -> datetime:
    return datetime.strptime(timecode, TIMECODE_FORMAT).replace(tzinfo=UTC)


def parse_schedule_date(value: str) -> date:
    """Accept either ``YYYY-MM-DD`` or a timecode and return the calendar date."""
    if "_" in value:
        return from_timecode(value).date()
    return date.fromisoformat(value)


def seconds_until_hour(now: datetime, hour: int) -> float:
    """Seconds until the next ``hour:00`` strictly after *now*."""
    if not 0 <= hour <= 23:
        msg = f"hour must be between 0 and 23, got {hour}"
        raise ValueError(msg)
    target = now.replace(hour=hour, minute=0, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=1)
    return (target - now).total_seconds()
