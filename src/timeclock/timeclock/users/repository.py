from __future__ import annotations

from typing import Optional, Protocol

from .model import User


class UserRepository(Protocol):
    """User lookup used by the attendance core.

    Soft-deleted users are never returned.
    """

    def get_active_in_company(self, user_id: int, company_id: int) -> Optional[User]:
        raise NotImplementedError
