from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import isoformat
from ..users.model import UserSummary
from .calculator import StandardWorkedTimeCalculator, WorkedTimeCalculator
from .model import BreakRecord, TimeRecord
from .states import derive_punch_state

_calculator: WorkedTimeCalculator = StandardWorkedTimeCalculator()


def break_to_dict(b: BreakRecord) -> dict:
    return {
        "id": b.break_id,
        "time_record_id": b.record_id,
        "started_at": isoformat(b.started_at),
        "ended_at": isoformat(b.ended_at),
        "registered_by_id": b.registered_by_id,
    }


def _summary(s: Optional[UserSummary], *, with_email: bool) -> Optional[dict]:
    if s is None:
        return None
    out = {"id": s.user_id, "name": s.full_name}
    if with_email:
        out["email"] = s.email
    return out


def record_to_dict(r: TimeRecord, *, admin_view: bool = False) -> dict:
    out = {
        "id": r.record_id,
        "user_id": r.user_id,
        "company_id": r.company_id,
        "date": r.work_date.strftime("%Y-%m-%d"),
        "clock_in": isoformat(r.clock_in),
        "clock_out": isoformat(r.clock_out),
        "closed_by_id": r.closed_by_id,
        "state": derive_punch_state(r).value,
        "worked_minutes": _calculator.worked_minutes(r),
        "breaks": [break_to_dict(b) for b in r.breaks],
    }
    if admin_view:
        out["user"] = _summary(r.user, with_email=True)
        out["closed_by"] = _summary(r.closed_by, with_email=False)
    return out
