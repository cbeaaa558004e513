from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ...core.enums import PunchState
from ..break_ledger import BreakLedger
from .base import PunchTransition
from .clock_out import ClockOutTransition
from .close_break import CloseBreakTransition
from .open_break import OpenBreakTransition
from .start_day import StartDayTransition


@dataclass
class PunchTransitionFactory:
    """Factory Pattern: the transition table, keyed by the current state."""

    ledger: BreakLedger = field(default_factory=BreakLedger)
    _table: dict[PunchState, PunchTransition] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        transitions = (
            StartDayTransition(),
            ClockOutTransition(),
            OpenBreakTransition(self.ledger),
            CloseBreakTransition(),
        )
        self._table = {t.source: t for t in transitions}

    def for_state(self, state: PunchState) -> PunchTransition:
        transition: Optional[PunchTransition] = self._table.get(state)
        if transition is None:
            raise LookupError(f"No punch transition from {state.value}")
        return transition
