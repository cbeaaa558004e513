from __future__ import annotations

from abc import ABC, abstractmethod

from .model import TimeRecord


class WorkedTimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def worked_minutes(self, record: TimeRecord) -> int:
        raise NotImplementedError


class StandardWorkedTimeCalculator(WorkedTimeCalculator):
    """Standard rule: (out - in) - closed breaks, not below 0."""

    def worked_minutes(self, record: TimeRecord) -> int:
        if not record.clock_out:
            return 0
        seconds = (record.clock_out - record.clock_in).total_seconds()
        for b in record.breaks:
            if b.ended_at is not None:
                seconds -= (b.ended_at - b.started_at).total_seconds()
        return max(int(seconds // 60), 0)
