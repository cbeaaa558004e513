from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, from_db_datetime
from .model import User
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select_active(self, where: str, params: Sequence[Any]) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT user_id, full_name, email, role, company_id, deleted_at
                FROM users
                WHERE deleted_at IS NULL AND {where}
                """,
                tuple(params),
            )
            row = fetchone(cur)
            if not row:
                return None
            return User(
                user_id=int(row["user_id"]),
                full_name=row["full_name"],
                email=row["email"],
                role=Role(row["role"]),
                company_id=row.get("company_id"),
                deleted_at=from_db_datetime(row.get("deleted_at")),
            )

    def get_active_in_company(self, user_id: int, company_id: int) -> Optional[User]:
        return self._select_active("user_id=%s AND company_id=%s", (int(user_id), int(company_id)))
