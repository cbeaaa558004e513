from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ...core.enums import PunchState
from ..model import BreakRecord, TimeRecord
from ..repository import TimeRecordStore


@dataclass(frozen=True)
class PunchContext:
    user_id: int
    company_id: int
    now: datetime
    work_date: date
    record: Optional[TimeRecord]
    open_break: Optional[BreakRecord]


class PunchTransition(ABC):
    """Strategy Pattern: one step of the daily punch cycle."""

    source: PunchState
    target: PunchState

    @abstractmethod
    def apply(self, store: TimeRecordStore, ctx: PunchContext) -> int:
        """Perform the writes of this step; return the record id."""

        raise NotImplementedError
