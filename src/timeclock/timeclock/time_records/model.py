from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..users.model import UserSummary


@dataclass(frozen=True)
class BreakRecord:
    """Domain entity: one pause interval nested under a TimeRecord."""

    break_id: int
    record_id: int
    started_at: datetime
    ended_at: Optional[datetime] = None
    registered_by_id: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.ended_at is None


@dataclass(frozen=True)
class TimeRecord:
    """Domain entity: one user's attendance window for one UTC calendar day."""

    record_id: int
    user_id: int
    company_id: int
    work_date: date
    clock_in: datetime
    clock_out: Optional[datetime] = None
    closed_by_id: Optional[int] = None
    deleted_at: Optional[datetime] = None
    breaks: tuple[BreakRecord, ...] = ()

    # Admin projection only.
    user: Optional[UserSummary] = field(default=None, compare=False)
    closed_by: Optional[UserSummary] = field(default=None, compare=False)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def open_break(self) -> Optional[BreakRecord]:
        return next((b for b in self.breaks if b.is_open), None)
