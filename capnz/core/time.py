from __future__ import annotations

from datetime import datetime, timezone

import pytz


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def parse_cap_datetime(s: str) -> datetime:
    """
    Parse a CAP date-time ("2025-10-21T09:00:00+13:00", "...Z").

    Naive values are taken as UTC. Raises ValueError on anything else;
    callers decide whether that is fatal.
    """
    t = str(s or "").strip()
    if not t:
        raise ValueError("empty date-time")
    if t.endswith("Z"):
        t = t[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(t)
    except ValueError as e:
        raise ValueError(f"Invalid date-time: {s!r}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def to_iso_z(s: str) -> str:
    """Normalize to UTC with millisecond precision: 2025-10-20T20:00:00.000Z"""
    dt = parse_cap_datetime(s).astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def format_local(s: str, tz_name: str) -> str:
    """
    Render for humans in the feed's local zone, NZ locale style:
    "21/10/2025, 9:00:00 am"
    """
    dt = parse_cap_datetime(s).astimezone(pytz.timezone(tz_name))
    hour12 = dt.hour % 12 or 12
    ampm = "am" if dt.hour < 12 else "pm"
    return f"{dt.day:02d}/{dt.month:02d}/{dt.year}, {hour12}:{dt.minute:02d}:{dt.second:02d} {ampm}"
