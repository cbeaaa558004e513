from __future__ import annotations

from ...core.enums import PunchState
from ..break_ledger import BreakLedger
from ..repository import TimeRecordStore
from .base import PunchContext, PunchTransition


class OpenBreakTransition(PunchTransition):
    """The stored clock-out becomes a break start; clock out again at now."""

    source = PunchState.CLOSED_PENDING_BREAK_DECISION
    target = PunchState.ON_BREAK

    def __init__(self, ledger: BreakLedger):
        self._ledger = ledger

    def apply(self, store: TimeRecordStore, ctx: PunchContext) -> int:
        record = ctx.record
        self._ledger.add(store, record_id=record.record_id, started_at=record.clock_out)
        store.update_clock_out(record_id=record.record_id, clock_out=ctx.now)
        return record.record_id
