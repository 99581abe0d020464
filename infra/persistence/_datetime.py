from __future__ import annotations

from datetime import datetime, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def dt_to_iso(dt: datetime | None) -> str | None:
    if dt is None:
        return None
    # Normalised to UTC so ISO strings sort chronologically in SQL.
    return _as_utc(dt).astimezone(timezone.utc).isoformat()


def iso_to_dt(value: object) -> datetime | None:
    """Parse a stored timestamp; unparsable values read as ``None``."""
    if isinstance(value, datetime):
        return _as_utc(value)
    if not isinstance(value, str) or value == "":
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return _as_utc(dt)


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt
