from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc, utc_work_date
from ..common.errors import operation
from ..core.exceptions import NotFoundError
from ..users.model import AuthenticatedUser
from .model import TimeRecord
from .repository import TimeRecordRepository
from .scoping import record_in_company, require_company
from .states import derive_punch_state
from .transitions.base import PunchContext
from .transitions.factory import PunchTransitionFactory

logger = logging.getLogger(__name__)


class TimeRecordService:
    """Use cases: punch, and read access to time records (self and company)."""

    def __init__(
        self,
        records: TimeRecordRepository,
        *,
        transition_factory: Optional[PunchTransitionFactory] = None,
    ):
        self._records = records
        self._factory = transition_factory or PunchTransitionFactory()

    @operation("Failed to register punch.")
    def punch(self, user: AuthenticatedUser, *, now: Optional[datetime] = None) -> TimeRecord:
        company_id = require_company(user)
        now = now or now_utc()
        today = utc_work_date(now)

        with self._records.transaction() as store:
            store.lock_user(user.user_id)
            record = store.find_for_user_and_date(user.user_id, today, for_update=True)
            open_break = store.find_open_break(record.record_id) if record else None

            state = derive_punch_state(record, open_break)
            transition = self._factory.for_state(state)
            record_id = transition.apply(
                store,
                PunchContext(
                    user_id=user.user_id,
                    company_id=company_id,
                    now=now,
                    work_date=today,
                    record=record,
                    open_break=open_break,
                ),
            )
            logger.info(
                "Punch user=%s day=%s: %s -> %s (record %s)",
                user.user_id,
                today.isoformat(),
                transition.source.value,
                transition.target.value,
                record_id,
            )
            return store.get_record(record_id)

    @operation("Failed to fetch time records.")
    def list_for_user(self, user_id: int) -> Sequence[TimeRecord]:
        with self._records.transaction() as store:
            return list(store.list_for_user(int(user_id)))

    @operation("Failed to fetch time record.")
    def get_for_user_and_date(self, user_id: int, work_date: date) -> TimeRecord:
        with self._records.transaction() as store:
            record = store.find_for_user_and_date(int(user_id), work_date)
        if record is None:
            raise NotFoundError("Time record not found for the given date.")
        return record

    @operation("Failed to fetch time records.")
    def list_for_company(self, admin: AuthenticatedUser) -> Sequence[TimeRecord]:
        company_id = require_company(admin)
        with self._records.transaction() as store:
            return list(store.list_for_company(company_id))

    @operation("Failed to fetch time record.")
    def get_in_company(self, admin: AuthenticatedUser, record_id: int) -> TimeRecord:
        with self._records.transaction() as store:
            return record_in_company(store, admin, record_id)
