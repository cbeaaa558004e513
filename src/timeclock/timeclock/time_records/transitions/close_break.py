from __future__ import annotations

from ...core.enums import PunchState
from ..repository import TimeRecordStore
from .base import PunchContext, PunchTransition


class CloseBreakTransition(PunchTransition):
    """The stored clock-out ends the open break; clock out again at now.

    The break is closed as stored, without re-checking its order: a punch
    never fails once the caller is linked to a company.
    """

    source = PunchState.ON_BREAK
    target = PunchState.CLOSED_PENDING_BREAK_DECISION

    def apply(self, store: TimeRecordStore, ctx: PunchContext) -> int:
        record, open_break = ctx.record, ctx.open_break
        store.update_break(
            break_id=open_break.break_id,
            started_at=open_break.started_at,
            ended_at=record.clock_out,
            registered_by_id=open_break.registered_by_id,
        )
        store.update_clock_out(record_id=record.record_id, clock_out=ctx.now)
        return record.record_id
