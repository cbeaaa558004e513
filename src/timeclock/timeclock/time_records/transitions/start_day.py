from __future__ import annotations

from ...core.enums import PunchState
from ..repository import TimeRecordStore
from .base import PunchContext, PunchTransition


class StartDayTransition(PunchTransition):
    """First punch of the day: create the record."""

    source = PunchState.ABSENT
    target = PunchState.CLOCKED_IN

    def apply(self, store: TimeRecordStore, ctx: PunchContext) -> int:
        return store.create_record(
            user_id=ctx.user_id,
            company_id=ctx.company_id,
            work_date=ctx.work_date,
            clock_in=ctx.now,
        )
