from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, parse_iso_datetime


def require_datetime(value: Any, field_name: str) -> datetime:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} must be an ISO-8601 date-time string.")
    try:
        return parse_iso_datetime(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be an ISO-8601 date-time string.")


def optional_datetime(value: Any, field_name: str) -> Optional[datetime]:
    if value is None:
        return None
    return require_datetime(value, field_name)


def require_date(value: Any, field_name: str) -> date:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD).")
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD).")


def require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} is invalid.")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is invalid.")
    if number <= 0:
        raise ValidationError(f"{field_name} is invalid.")
    return number


def require_after(later: datetime, earlier: datetime, *, later_name: str, earlier_name: str) -> datetime:
    """Both ends strictly ordered: ``later`` must be after ``earlier``."""
    if later <= earlier:
        raise ValidationError(f"{later_name} must be after {earlier_name}.")
    return later
