from __future__ import annotations

from typing import Optional

from ..core.enums import PunchState
from .model import BreakRecord, TimeRecord


def derive_punch_state(record: Optional[TimeRecord], open_break: Optional[BreakRecord] = None) -> PunchState:
    """The only place the punch state is read off stored fields.

    ``open_break`` defaults to the record's own open break.
    """
    if record is None:
        return PunchState.ABSENT
    if record.clock_out is None:
        return PunchState.CLOCKED_IN
    if open_break is None:
        open_break = record.open_break
    if open_break is None:
        return PunchState.CLOSED_PENDING_BREAK_DECISION
    return PunchState.ON_BREAK
