from __future__ import annotations

from ...core.enums import PunchState
from ..repository import TimeRecordStore
from .base import PunchContext, PunchTransition


class ClockOutTransition(PunchTransition):
    """Close the working window; the next punch decides whether it was a break."""

    source = PunchState.CLOCKED_IN
    target = PunchState.CLOSED_PENDING_BREAK_DECISION

    def apply(self, store: TimeRecordStore, ctx: PunchContext) -> int:
        store.update_clock_out(record_id=ctx.record.record_id, clock_out=ctx.now)
        return ctx.record.record_id
