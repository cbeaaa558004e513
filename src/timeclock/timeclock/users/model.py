from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User as seen by the attendance core.

    Note: plain data object, no DB access code.
    """

    user_id: int
    full_name: str
    email: str
    role: Role
    company_id: Optional[int]
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity of the caller for the current request."""

    user_id: int
    company_id: Optional[int]
    role: Role
    name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


@dataclass(frozen=True)
class UserSummary:
    """Read-model: who a record belongs to / who closed it."""

    user_id: int
    full_name: str
    email: Optional[str] = None
