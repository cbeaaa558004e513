from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import utc_work_date
from ..common.errors import operation
from ..common.validators import require_after
from ..core.exceptions import ConflictError, NotFoundError
from ..users.model import AuthenticatedUser
from ..users.repository import UserRepository
from .break_ledger import BreakLedger
from .model import BreakRecord, TimeRecord
from .repository import TimeRecordRepository
from .scoping import record_in_company, require_company

logger = logging.getLogger(__name__)


class AdminCorrectionService:
    """Use case: out-of-band creation and correction of records by an admin.

    Bypasses the punch cycle but keeps its invariants: one live record per
    user and day, clock-out after clock-in, at most one open break, breaks
    ending after they start. Everything is scoped to the admin's company.
    """

    def __init__(
        self,
        records: TimeRecordRepository,
        users: UserRepository,
        *,
        ledger: Optional[BreakLedger] = None,
    ):
        self._records = records
        self._users = users
        self._ledger = ledger or BreakLedger()

    @operation("Failed to create time record.")
    def create_record(
        self,
        admin: AuthenticatedUser,
        *,
        user_id: int,
        clock_in: datetime,
        clock_out: Optional[datetime] = None,
    ) -> TimeRecord:
        company_id = require_company(admin)

        target = self._users.get_active_in_company(int(user_id), company_id)
        if target is None:
            raise NotFoundError("User not found in this company.")

        work_date = utc_work_date(clock_in)

        with self._records.transaction() as store:
            store.lock_user(target.user_id)
            if store.find_for_user_and_date(target.user_id, work_date) is not None:
                raise ConflictError("A time record already exists for this user on this date.")

            if clock_out is not None:
                require_after(clock_out, clock_in, later_name="clockOut", earlier_name="clockIn")

            record_id = store.create_record(
                user_id=target.user_id,
                company_id=company_id,
                work_date=work_date,
                clock_in=clock_in,
                clock_out=clock_out,
                closed_by_id=admin.user_id if clock_out is not None else None,
            )
            logger.info(
                "Admin %s created record %s for user %s on %s",
                admin.user_id,
                record_id,
                target.user_id,
                work_date.isoformat(),
            )
            return store.get_record(record_id)

    @operation("Failed to register clock-out.")
    def set_clock_out(self, admin: AuthenticatedUser, record_id: int, *, clock_out: datetime) -> TimeRecord:
        with self._records.transaction() as store:
            record = record_in_company(store, admin, record_id, for_update=True)
            require_after(clock_out, record.clock_in, later_name="clockOut", earlier_name="clockIn")

            store.update_clock_out(record_id=record.record_id, clock_out=clock_out, closed_by_id=admin.user_id)
            logger.info("Admin %s set clock-out of record %s", admin.user_id, record.record_id)
            return store.get_record(record.record_id)

    @operation("Failed to add break.")
    def add_break(
        self,
        admin: AuthenticatedUser,
        record_id: int,
        *,
        started_at: datetime,
        ended_at: Optional[datetime] = None,
    ) -> BreakRecord:
        with self._records.transaction() as store:
            record = record_in_company(store, admin, record_id, for_update=True)
            break_id = self._ledger.add(
                store,
                record_id=record.record_id,
                started_at=started_at,
                ended_at=ended_at,
                registered_by_id=admin.user_id,
            )
            logger.info("Admin %s added break %s to record %s", admin.user_id, break_id, record.record_id)
            return store.get_break(break_id)

    @operation("Failed to edit break.")
    def edit_break(
        self,
        admin: AuthenticatedUser,
        record_id: int,
        break_id: int,
        *,
        started_at: Optional[datetime] = None,
        ended_at: Optional[datetime] = None,
    ) -> BreakRecord:
        with self._records.transaction() as store:
            record = record_in_company(store, admin, record_id, for_update=True)
            existing = store.find_break(record.record_id, int(break_id))
            if existing is None:
                raise NotFoundError("Break not found on this time record.")

            self._ledger.edit(
                store,
                existing,
                started_at=started_at,
                ended_at=ended_at,
                registered_by_id=admin.user_id,
            )
            logger.info("Admin %s edited break %s of record %s", admin.user_id, existing.break_id, record.record_id)
            return store.get_break(existing.break_id)
