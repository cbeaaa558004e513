from __future__ import annotations

from datetime import timedelta

import pytest

from src.timeclock.timeclock.core.enums import PunchState
from src.timeclock.timeclock.core.exceptions import AuthorizationError
from src.timeclock.timeclock.time_records.states import derive_punch_state

from tests.fakes import as_identity, utc


def test_first_punch_creates_open_record(record_service, records_repo, employee, fixed_now):
    rec = record_service.punch(employee, now=fixed_now)

    assert len(records_repo.records) == 1
    assert rec.clock_in == fixed_now
    assert rec.clock_out is None
    assert rec.breaks == ()
    assert rec.work_date == fixed_now.date()
    assert rec.company_id == employee.company_id
    assert derive_punch_state(rec) == PunchState.CLOCKED_IN


def test_four_punches_walk_the_daily_cycle(record_service, records_repo, employee):
    rec = record_service.punch(employee, now=utc(2024, 1, 2, 9, 0))
    assert rec.clock_in == utc(2024, 1, 2, 9, 0)
    assert rec.clock_out is None

    rec = record_service.punch(employee, now=utc(2024, 1, 2, 12, 0))
    assert rec.clock_in == utc(2024, 1, 2, 9, 0)
    assert rec.clock_out == utc(2024, 1, 2, 12, 0)
    assert rec.breaks == ()

    rec = record_service.punch(employee, now=utc(2024, 1, 2, 13, 0))
    assert rec.clock_out == utc(2024, 1, 2, 13, 0)
    assert len(rec.breaks) == 1
    assert rec.breaks[0].started_at == utc(2024, 1, 2, 12, 0)
    assert rec.breaks[0].ended_at is None
    assert derive_punch_state(rec) == PunchState.ON_BREAK

    rec = record_service.punch(employee, now=utc(2024, 1, 2, 17, 0))
    assert rec.clock_out == utc(2024, 1, 2, 17, 0)
    assert len(rec.breaks) == 1
    assert rec.breaks[0].ended_at == utc(2024, 1, 2, 13, 0)
    assert derive_punch_state(rec) == PunchState.CLOSED_PENDING_BREAK_DECISION

    assert len(records_repo.records) == 1
    assert rec.clock_in == utc(2024, 1, 2, 9, 0)


def test_never_more_than_one_open_break(record_service, employee):
    now = utc(2024, 1, 2, 8, 0)
    for _ in range(9):
        rec = record_service.punch(employee, now=now)
        assert sum(1 for b in rec.breaks if b.ended_at is None) <= 1
        now += timedelta(hours=1)

    # punches 3..9 alternate open/close: 4 breaks, the last one open
    assert len(rec.breaks) == 4
    assert [b.ended_at is None for b in rec.breaks] == [False, False, False, True]


def test_punches_do_not_stamp_closed_by(record_service, employee):
    record_service.punch(employee, now=utc(2024, 1, 2, 9, 0))
    rec = record_service.punch(employee, now=utc(2024, 1, 2, 12, 0))
    assert rec.closed_by_id is None


def test_next_utc_day_starts_a_new_record(record_service, records_repo, employee):
    first = record_service.punch(employee, now=utc(2024, 1, 2, 23, 59))
    second = record_service.punch(employee, now=utc(2024, 1, 3, 0, 1))

    assert first.record_id != second.record_id
    assert second.clock_out is None
    assert len(records_repo.records) == 2


def test_soft_deleted_day_record_is_ignored(record_service, records_repo, employee):
    first = record_service.punch(employee, now=utc(2024, 1, 2, 9, 0))
    records_repo.soft_delete(first.record_id, utc(2024, 1, 2, 10, 0))

    rec = record_service.punch(employee, now=utc(2024, 1, 2, 11, 0))

    assert rec.record_id != first.record_id
    assert rec.clock_in == utc(2024, 1, 2, 11, 0)
    assert rec.clock_out is None


def test_punch_locks_the_user_inside_one_transaction(record_service, records_repo, employee, fixed_now):
    record_service.punch(employee, now=fixed_now)

    assert records_repo.transactions == 1
    assert records_repo.locked_users == [employee.user_id]


def test_user_without_company_cannot_punch(record_service, records_repo, people, fixed_now):
    with pytest.raises(AuthorizationError):
        record_service.punch(as_identity(people["unassigned"]), now=fixed_now)
    assert records_repo.records == {}


def test_punch_closes_admin_break_that_starts_after_clock_out(record_service, admin_service, admin, employee):
    record_service.punch(employee, now=utc(2024, 1, 2, 9, 0))
    rec = record_service.punch(employee, now=utc(2024, 1, 2, 17, 0))
    admin_service.add_break(admin, rec.record_id, started_at=utc(2024, 1, 2, 18, 0))

    rec = record_service.punch(employee, now=utc(2024, 1, 2, 19, 0))

    assert rec.clock_out == utc(2024, 1, 2, 19, 0)
    assert rec.breaks[0].started_at == utc(2024, 1, 2, 18, 0)
    assert rec.breaks[0].ended_at == utc(2024, 1, 2, 17, 0)
    assert rec.breaks[0].registered_by_id == admin.user_id
    assert derive_punch_state(rec) == PunchState.CLOSED_PENDING_BREAK_DECISION

    rec = record_service.punch(employee, now=utc(2024, 1, 2, 20, 0))
    assert derive_punch_state(rec) == PunchState.ON_BREAK


def test_punch_closes_break_after_admin_moved_clock_out_back(record_service, admin_service, admin, employee):
    for hour in (9, 12, 13):
        rec = record_service.punch(employee, now=utc(2024, 1, 2, hour, 0))
    admin_service.set_clock_out(admin, rec.record_id, clock_out=utc(2024, 1, 2, 11, 0))

    rec = record_service.punch(employee, now=utc(2024, 1, 2, 17, 0))

    assert rec.clock_out == utc(2024, 1, 2, 17, 0)
    assert rec.breaks[0].started_at == utc(2024, 1, 2, 12, 0)
    assert rec.breaks[0].ended_at == utc(2024, 1, 2, 11, 0)
    assert rec.breaks[0].registered_by_id is None
