from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.validators import require_after
from ..core.exceptions import ConflictError
from .model import BreakRecord
from .repository import TimeRecordStore

logger = logging.getLogger(__name__)


@dataclass
class BreakLedger:
    """Break invariants shared by punches and admin corrections.

    - at most one open break (``ended_at is None``) per record
    - ``ended_at > started_at`` whenever both are set
    """

    def ensure_no_open_break(self, store: TimeRecordStore, record_id: int) -> None:
        if store.find_open_break(record_id) is not None:
            raise ConflictError("An open break already exists on this time record.")

    @staticmethod
    def ensure_ordered(started_at: datetime, ended_at: Optional[datetime]) -> None:
        if ended_at is not None:
            require_after(ended_at, started_at, later_name="endedAt", earlier_name="startedAt")

    @staticmethod
    def effective_interval(
        existing: BreakRecord,
        *,
        started_at: Optional[datetime] = None,
        ended_at: Optional[datetime] = None,
    ) -> tuple[datetime, Optional[datetime]]:
        return (
            started_at if started_at is not None else existing.started_at,
            ended_at if ended_at is not None else existing.ended_at,
        )

    def add(
        self,
        store: TimeRecordStore,
        *,
        record_id: int,
        started_at: datetime,
        ended_at: Optional[datetime] = None,
        registered_by_id: Optional[int] = None,
    ) -> int:
        self.ensure_ordered(started_at, ended_at)
        if ended_at is None:
            self.ensure_no_open_break(store, record_id)

        break_id = store.create_break(
            record_id=record_id,
            started_at=started_at,
            ended_at=ended_at,
            registered_by_id=registered_by_id,
        )
        logger.debug("Break %s added to record %s (open=%s)", break_id, record_id, ended_at is None)
        return break_id

    def edit(
        self,
        store: TimeRecordStore,
        existing: BreakRecord,
        *,
        started_at: Optional[datetime] = None,
        ended_at: Optional[datetime] = None,
        registered_by_id: Optional[int] = None,
    ) -> int:
        """Validate the effective interval, then persist it.

        ``registered_by_id`` is kept as-is when not given.
        """
        new_start, new_end = self.effective_interval(existing, started_at=started_at, ended_at=ended_at)
        self.ensure_ordered(new_start, new_end)

        store.update_break(
            break_id=existing.break_id,
            started_at=new_start,
            ended_at=new_end,
            registered_by_id=registered_by_id if registered_by_id is not None else existing.registered_by_id,
        )
        return existing.break_id
