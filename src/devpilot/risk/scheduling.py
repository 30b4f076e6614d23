"""Deployment time helpers: candidate resolution, traffic and alternatives."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

MAINTENANCE_HOUR = 3
TONIGHT_HOUR = 22
ALTERNATIVE_DAYS = frozenset({1, 2, 3, 4})  # Monday-Thursday, 0=Sunday

NEXT_MAINTENANCE_WINDOW = "next_maintenance_window"


def day_of_week(moment: datetime) -> int:
    """0=Sunday … 6=Saturday."""
    return moment.isoweekday() % 7


def _at_hour(moment: datetime, hour: int) -> datetime:
    return moment.replace(hour=hour, minute=0, second=0, microsecond=0)


def next_maintenance_window(now: datetime) -> datetime:
    candidate = _at_hour(now, MAINTENANCE_HOUR)
    if candidate <= now:
        candidate += timedelta(days=1)
    return candidate


def resolve_candidate_time(preferred: str | None, now: datetime) -> datetime:
    value = (preferred or NEXT_MAINTENANCE_WINDOW).strip()
    keyword = value.lower()

    if keyword == "tomorrow":
        return _at_hour(now + timedelta(days=1), MAINTENANCE_HOUR)
    if keyword == "tonight":
        candidate = _at_hour(now, TONIGHT_HOUR)
        return candidate if candidate > now else candidate + timedelta(days=1)
    if keyword == NEXT_MAINTENANCE_WINDOW:
        return next_maintenance_window(now)

    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return next_maintenance_window(now)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def traffic_impact(moment: datetime) -> str:
    hour = moment.hour
    if hour >= TONIGHT_HOUR or hour < 6:
        return "low"
    if day_of_week(moment) in (1, 2, 3, 4, 5) and 9 <= hour < 17:
        return "high"
    return "medium"


def alternative_windows(after: datetime, count: int = 3) -> list[datetime]:
    windows: list[datetime] = []
    day = _at_hour(after, MAINTENANCE_HOUR) + timedelta(days=1)
    while len(windows) < count:
        if day_of_week(day) in ALTERNATIVE_DAYS:
            windows.append(day)
        day += timedelta(days=1)
    return windows
