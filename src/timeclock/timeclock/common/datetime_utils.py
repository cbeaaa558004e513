from __future__ import annotations

from datetime import date, datetime, timezone

from ..core.constants import ISO_DATE_FORMAT


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive values, convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_utc_day(value: datetime) -> datetime:
    """Truncate a timestamp to midnight UTC of its UTC calendar date."""
    value = as_utc(value)
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def utc_work_date(value: datetime) -> date:
    """Calendar day key of a timestamp (see ``to_utc_day``)."""
    return to_utc_day(value).date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    A trailing ``Z`` is accepted; naive values are read as UTC.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(text))


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD (or a full timestamp) into its UTC calendar day."""
    text = value.strip()
    try:
        return datetime.strptime(text, ISO_DATE_FORMAT).date()
    except ValueError:
        return utc_work_date(parse_iso_datetime(text))


def isoformat(value: datetime | None) -> str | None:
    if value is None:
        return None
    return as_utc(value).isoformat().replace("+00:00", "Z")
