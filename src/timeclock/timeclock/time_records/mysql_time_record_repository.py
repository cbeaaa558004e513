from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Iterator, Optional, Sequence

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, is_duplicate_key, to_db_datetime
from ..users.model import UserSummary
from .model import BreakRecord, TimeRecord
from .repository import TimeRecordRepository, TimeRecordStore

# Every record read goes through this; soft-deleted rows never leave the DB layer.
_ACTIVE_RECORDS = """
    SELECT
        tr.record_id, tr.user_id, tr.company_id, tr.work_date,
        tr.clock_in, tr.clock_out, tr.closed_by_id, tr.deleted_at,
        u.full_name AS user_name, u.email AS user_email,
        cb.full_name AS closed_by_name
    FROM time_records tr
    JOIN users u ON u.user_id = tr.user_id
    LEFT JOIN users cb ON cb.user_id = tr.closed_by_id
    WHERE tr.deleted_at IS NULL AND {where}
"""

_BREAK_COLUMNS = "break_id, record_id, started_at, ended_at, registered_by_id"


def _to_break(r: dict) -> BreakRecord:
    return BreakRecord(
        break_id=int(r["break_id"]),
        record_id=int(r["record_id"]),
        started_at=from_db_datetime(r["started_at"]),
        ended_at=from_db_datetime(r.get("ended_at")),
        registered_by_id=r.get("registered_by_id"),
    )


class MySQLTimeRecordSession(TimeRecordStore):
    """TimeRecordStore over one cursor (one transaction)."""

    def __init__(self, cur):
        self._cur = cur

    def _select_active(
        self,
        where: str,
        params: Sequence[Any],
        *,
        order_by: str = "",
        for_update: bool = False,
    ) -> list[TimeRecord]:
        sql = _ACTIVE_RECORDS.format(where=where)
        if order_by:
            sql += f" ORDER BY {order_by}"
        if for_update:
            sql += " FOR UPDATE OF tr"
        self._cur.execute(sql, tuple(params))
        rows = fetchall(self._cur)
        if not rows:
            return []

        breaks_by_record = self._breaks_for([int(r["record_id"]) for r in rows])
        return [self._to_record(r, breaks_by_record.get(int(r["record_id"]), ())) for r in rows]

    def _breaks_for(self, record_ids: list[int]) -> dict[int, tuple[BreakRecord, ...]]:
        placeholders = ",".join(["%s"] * len(record_ids))
        self._cur.execute(
            f"""
            SELECT {_BREAK_COLUMNS}
            FROM break_records
            WHERE record_id IN ({placeholders})
            ORDER BY started_at ASC, break_id ASC
            """,
            tuple(record_ids),
        )
        out: dict[int, list[BreakRecord]] = {}
        for r in fetchall(self._cur):
            out.setdefault(int(r["record_id"]), []).append(_to_break(r))
        return {k: tuple(v) for k, v in out.items()}

    @staticmethod
    def _to_record(r: dict, breaks: tuple[BreakRecord, ...]) -> TimeRecord:
        closed_by_id = r.get("closed_by_id")
        return TimeRecord(
            record_id=int(r["record_id"]),
            user_id=int(r["user_id"]),
            company_id=int(r["company_id"]),
            work_date=r["work_date"],
            clock_in=from_db_datetime(r["clock_in"]),
            clock_out=from_db_datetime(r.get("clock_out")),
            closed_by_id=closed_by_id,
            deleted_at=from_db_datetime(r.get("deleted_at")),
            breaks=breaks,
            user=UserSummary(user_id=int(r["user_id"]), full_name=r["user_name"], email=r.get("user_email")),
            closed_by=(
                UserSummary(user_id=int(closed_by_id), full_name=r.get("closed_by_name") or "")
                if closed_by_id is not None
                else None
            ),
        )

    def lock_user(self, user_id: int) -> None:
        self._cur.execute("SELECT user_id FROM users WHERE user_id=%s FOR UPDATE", (int(user_id),))
        fetchall(self._cur)

    def find_for_user_and_date(self, user_id: int, work_date: date, *, for_update: bool = False) -> Optional[TimeRecord]:
        rows = self._select_active("tr.user_id=%s AND tr.work_date=%s", (int(user_id), work_date), for_update=for_update)
        return rows[0] if rows else None

    def find_in_company(self, record_id: int, company_id: int, *, for_update: bool = False) -> Optional[TimeRecord]:
        rows = self._select_active(
            "tr.record_id=%s AND tr.company_id=%s",
            (int(record_id), int(company_id)),
            for_update=for_update,
        )
        return rows[0] if rows else None

    def find_open_break(self, record_id: int) -> Optional[BreakRecord]:
        self._cur.execute(
            f"""
            SELECT {_BREAK_COLUMNS}
            FROM break_records
            WHERE record_id=%s AND ended_at IS NULL
            ORDER BY started_at ASC
            LIMIT 1
            """,
            (int(record_id),),
        )
        r = fetchone(self._cur)
        return _to_break(r) if r else None

    def find_break(self, record_id: int, break_id: int) -> Optional[BreakRecord]:
        self._cur.execute(
            f"SELECT {_BREAK_COLUMNS} FROM break_records WHERE break_id=%s AND record_id=%s",
            (int(break_id), int(record_id)),
        )
        r = fetchone(self._cur)
        return _to_break(r) if r else None

    def create_record(
        self,
        *,
        user_id: int,
        company_id: int,
        work_date: date,
        clock_in: datetime,
        clock_out: Optional[datetime] = None,
        closed_by_id: Optional[int] = None,
    ) -> int:
        try:
            self._cur.execute(
                """
                INSERT INTO time_records(user_id, company_id, work_date, clock_in, clock_out, closed_by_id)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    int(company_id),
                    work_date,
                    to_db_datetime(clock_in),
                    to_db_datetime(clock_out),
                    closed_by_id,
                ),
            )
        except Exception as exc:
            if is_duplicate_key(exc):
                raise ConflictError("A time record already exists for this user on this date.") from exc
            raise
        return int(self._cur.lastrowid)

    def update_clock_out(self, *, record_id: int, clock_out: datetime, closed_by_id: Optional[int] = None) -> bool:
        self._cur.execute(
            """
            UPDATE time_records
            SET clock_out=%s, closed_by_id=COALESCE(%s, closed_by_id)
            WHERE record_id=%s AND deleted_at IS NULL
            """,
            (to_db_datetime(clock_out), closed_by_id, int(record_id)),
        )
        return self._cur.rowcount > 0

    def create_break(
        self,
        *,
        record_id: int,
        started_at: datetime,
        ended_at: Optional[datetime] = None,
        registered_by_id: Optional[int] = None,
    ) -> int:
        self._cur.execute(
            """
            INSERT INTO break_records(record_id, started_at, ended_at, registered_by_id)
            VALUES(%s,%s,%s,%s)
            """,
            (int(record_id), to_db_datetime(started_at), to_db_datetime(ended_at), registered_by_id),
        )
        return int(self._cur.lastrowid)

    def update_break(
        self,
        *,
        break_id: int,
        started_at: datetime,
        ended_at: Optional[datetime],
        registered_by_id: Optional[int],
    ) -> bool:
        self._cur.execute(
            """
            UPDATE break_records
            SET started_at=%s, ended_at=%s, registered_by_id=%s
            WHERE break_id=%s
            """,
            (to_db_datetime(started_at), to_db_datetime(ended_at), registered_by_id, int(break_id)),
        )
        return self._cur.rowcount > 0

    def get_record(self, record_id: int) -> Optional[TimeRecord]:
        rows = self._select_active("tr.record_id=%s", (int(record_id),))
        return rows[0] if rows else None

    def get_break(self, break_id: int) -> Optional[BreakRecord]:
        self._cur.execute(f"SELECT {_BREAK_COLUMNS} FROM break_records WHERE break_id=%s", (int(break_id),))
        r = fetchone(self._cur)
        return _to_break(r) if r else None

    def list_for_user(self, user_id: int) -> Sequence[TimeRecord]:
        return self._select_active("tr.user_id=%s", (int(user_id),), order_by="tr.work_date DESC")

    def list_for_company(self, company_id: int) -> Sequence[TimeRecord]:
        return self._select_active(
            "tr.company_id=%s",
            (int(company_id),),
            order_by="tr.work_date DESC, tr.user_id ASC",
        )


class MySQLTimeRecordRepository(TimeRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def transaction(self) -> Iterator[MySQLTimeRecordSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            yield MySQLTimeRecordSession(cur)
