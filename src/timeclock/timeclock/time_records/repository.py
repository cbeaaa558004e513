from __future__ import annotations

from datetime import date, datetime
from typing import ContextManager, Optional, Protocol, Sequence

from .model import BreakRecord, TimeRecord


class TimeRecordStore(Protocol):
    """Record/break operations bound to one open transaction.

    Every record read returns live (non-deleted) rows only, with breaks
    ordered by ``started_at``.
    """

    def lock_user(self, user_id: int) -> None:
        """Serialize writers of one user's day for the rest of the transaction."""

        raise NotImplementedError

    def find_for_user_and_date(self, user_id: int, work_date: date, *, for_update: bool = False) -> Optional[TimeRecord]:
        raise NotImplementedError

    def find_in_company(self, record_id: int, company_id: int, *, for_update: bool = False) -> Optional[TimeRecord]:
        """Record with the admin projection (user, closed_by)."""

        raise NotImplementedError

    def find_open_break(self, record_id: int) -> Optional[BreakRecord]:
        raise NotImplementedError

    def find_break(self, record_id: int, break_id: int) -> Optional[BreakRecord]:
        raise NotImplementedError

    def create_record(
        self,
        *,
        user_id: int,
        company_id: int,
        work_date: date,
        clock_in: datetime,
        clock_out: Optional[datetime] = None,
        closed_by_id: Optional[int] = None,
    ) -> int:
        """Insert a day record. Raises ConflictError if a live one exists."""

        raise NotImplementedError

    def update_clock_out(self, *, record_id: int, clock_out: datetime, closed_by_id: Optional[int] = None) -> bool:
        """Set clock_out; ``closed_by_id`` is only written when given."""

        raise NotImplementedError

    def create_break(
        self,
        *,
        record_id: int,
        started_at: datetime,
        ended_at: Optional[datetime] = None,
        registered_by_id: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def update_break(
        self,
        *,
        break_id: int,
        started_at: datetime,
        ended_at: Optional[datetime],
        registered_by_id: Optional[int],
    ) -> bool:
        raise NotImplementedError

    def get_record(self, record_id: int) -> Optional[TimeRecord]:
        """Live record by id with the admin projection."""

        raise NotImplementedError

    def get_break(self, break_id: int) -> Optional[BreakRecord]:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[TimeRecord]:
        """Most recent day first."""

        raise NotImplementedError

    def list_for_company(self, company_id: int) -> Sequence[TimeRecord]:
        """Most recent day first, with the admin projection."""

        raise NotImplementedError


class TimeRecordRepository(Protocol):
    """Repository interface for time records.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def transaction(self) -> ContextManager[TimeRecordStore]:
        """All-or-nothing unit of work: commit on exit, rollback on error."""

        raise NotImplementedError
