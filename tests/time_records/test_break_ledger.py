from datetime import date

import pytest

from src.timeclock.timeclock.core.exceptions import ConflictError, ValidationError
from src.timeclock.timeclock.time_records.break_ledger import BreakLedger

from tests.fakes import utc


@pytest.fixture
def record_id(records_repo):
    return records_repo.create_record(user_id=10, company_id=1, work_date=date(2024, 1, 2), clock_in=utc(2024, 1, 2, 9, 0))


def test_add_open_break(records_repo, record_id):
    ledger = BreakLedger()
    break_id = ledger.add(records_repo, record_id=record_id, started_at=utc(2024, 1, 2, 12, 0))

    brk = records_repo.raw_break(break_id)
    assert brk.is_open
    assert brk.registered_by_id is None


def test_second_open_break_conflicts(records_repo, record_id):
    ledger = BreakLedger()
    ledger.add(records_repo, record_id=record_id, started_at=utc(2024, 1, 2, 12, 0))

    with pytest.raises(ConflictError):
        ledger.add(records_repo, record_id=record_id, started_at=utc(2024, 1, 2, 14, 0))


def test_closed_break_allowed_while_another_is_open(records_repo, record_id):
    ledger = BreakLedger()
    ledger.add(records_repo, record_id=record_id, started_at=utc(2024, 1, 2, 15, 0))
    ledger.add(
        records_repo,
        record_id=record_id,
        started_at=utc(2024, 1, 2, 10, 0),
        ended_at=utc(2024, 1, 2, 10, 15),
    )

    assert len(records_repo.breaks) == 2


@pytest.mark.parametrize("ended_at", [utc(2024, 1, 2, 12, 0), utc(2024, 1, 2, 11, 0)])
def test_break_must_end_after_it_starts(records_repo, record_id, ended_at):
    with pytest.raises(ValidationError, match="endedAt must be after startedAt"):
        BreakLedger().add(records_repo, record_id=record_id, started_at=utc(2024, 1, 2, 12, 0), ended_at=ended_at)
    assert records_repo.breaks == {}


def test_edit_keeps_missing_fields(records_repo, record_id):
    ledger = BreakLedger()
    break_id = ledger.add(
        records_repo,
        record_id=record_id,
        started_at=utc(2024, 1, 2, 12, 0),
        ended_at=utc(2024, 1, 2, 12, 30),
        registered_by_id=1,
    )

    ledger.edit(records_repo, records_repo.raw_break(break_id), ended_at=utc(2024, 1, 2, 12, 45))

    brk = records_repo.raw_break(break_id)
    assert brk.started_at == utc(2024, 1, 2, 12, 0)
    assert brk.ended_at == utc(2024, 1, 2, 12, 45)
    assert brk.registered_by_id == 1


def test_edit_validates_against_stored_end(records_repo, record_id):
    ledger = BreakLedger()
    break_id = ledger.add(
        records_repo,
        record_id=record_id,
        started_at=utc(2024, 1, 2, 12, 0),
        ended_at=utc(2024, 1, 2, 12, 30),
    )

    with pytest.raises(ValidationError):
        ledger.edit(records_repo, records_repo.raw_break(break_id), started_at=utc(2024, 1, 2, 13, 0))

    assert records_repo.raw_break(break_id).started_at == utc(2024, 1, 2, 12, 0)


def test_effective_interval_merges_fields(records_repo, record_id):
    break_id = BreakLedger().add(records_repo, record_id=record_id, started_at=utc(2024, 1, 2, 12, 0))
    existing = records_repo.raw_break(break_id)

    assert BreakLedger.effective_interval(existing) == (utc(2024, 1, 2, 12, 0), None)
    assert BreakLedger.effective_interval(existing, ended_at=utc(2024, 1, 2, 13, 0)) == (
        utc(2024, 1, 2, 12, 0),
        utc(2024, 1, 2, 13, 0),
    )
