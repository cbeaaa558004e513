from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Caller role used by the route guards."""

    ADMIN = "ADMIN"
    USER = "USER"


class PunchState(str, Enum):
    """Where a user's day stands in the punch cycle.

    ABSENT -> CLOCKED_IN -> CLOSED_PENDING_BREAK_DECISION <-> ON_BREAK
    """

    ABSENT = "ABSENT"
    CLOCKED_IN = "CLOCKED_IN"
    CLOSED_PENDING_BREAK_DECISION = "CLOSED_PENDING_BREAK_DECISION"
    ON_BREAK = "ON_BREAK"
