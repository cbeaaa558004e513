from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.connection import DBConfig, DatabaseConnection
from .time_records.admin_service import AdminCorrectionService
from .time_records.break_ledger import BreakLedger
from .time_records.mysql_time_record_repository import MySQLTimeRecordRepository
from .time_records.repository import TimeRecordRepository
from .time_records.service import TimeRecordService
from .time_records.transitions.factory import PunchTransitionFactory
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    time_records_repo: TimeRecordRepository

    time_record_service: TimeRecordService
    admin_correction_service: AdminCorrectionService

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    users_repo: UserRepository,
    time_records_repo: TimeRecordRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    ledger = BreakLedger()
    return Container(
        users_repo=users_repo,
        time_records_repo=time_records_repo,
        time_record_service=TimeRecordService(
            time_records_repo,
            transition_factory=PunchTransitionFactory(ledger=ledger),
        ),
        admin_correction_service=AdminCorrectionService(time_records_repo, users_repo, ledger=ledger),
        conn=conn,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return wire(
        users_repo=MySQLUserRepository(conn),
        time_records_repo=MySQLTimeRecordRepository(conn),
        conn=conn,
    )
