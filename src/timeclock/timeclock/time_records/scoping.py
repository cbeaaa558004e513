from __future__ import annotations

from ..core.exceptions import AuthorizationError, NotFoundError
from ..users.model import AuthenticatedUser
from .model import TimeRecord
from .repository import TimeRecordStore


def require_company(user: AuthenticatedUser) -> int:
    """Company of the caller; every attendance operation is scoped by it."""
    if user.company_id is None:
        raise AuthorizationError("User is not linked to a company.")
    return int(user.company_id)


def record_in_company(
    store: TimeRecordStore,
    admin: AuthenticatedUser,
    record_id: int,
    *,
    for_update: bool = False,
) -> TimeRecord:
    """Tenant gate for admin operations.

    Records of other companies and soft-deleted records are reported as not
    found, never as forbidden.
    """
    company_id = require_company(admin)
    record = store.find_in_company(int(record_id), company_id, for_update=for_update)
    if record is None:
        raise NotFoundError("Time record not found.")
    return record
