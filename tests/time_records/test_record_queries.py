from datetime import date

import pytest

from src.timeclock.timeclock.core.exceptions import AuthorizationError, NotFoundError

from tests.fakes import as_identity, utc


@pytest.fixture
def three_days(record_service, employee):
    for day in (3, 1, 2):
        record_service.punch(employee, now=utc(2024, 1, day, 9, 0))


def test_own_records_are_most_recent_first(record_service, employee, three_days):
    rows = record_service.list_for_user(employee.user_id)
    assert [r.work_date for r in rows] == [date(2024, 1, 3), date(2024, 1, 2), date(2024, 1, 1)]


def test_own_records_exclude_soft_deleted(record_service, records_repo, employee, three_days):
    target = record_service.get_for_user_and_date(employee.user_id, date(2024, 1, 2))
    records_repo.soft_delete(target.record_id, utc(2024, 1, 4))

    rows = record_service.list_for_user(employee.user_id)
    assert [r.work_date for r in rows] == [date(2024, 1, 3), date(2024, 1, 1)]

    with pytest.raises(NotFoundError, match="Time record not found for the given date."):
        record_service.get_for_user_and_date(employee.user_id, date(2024, 1, 2))


def test_own_record_by_date_includes_breaks(record_service, employee):
    for hour in (9, 12, 13, 17):
        record_service.punch(employee, now=utc(2024, 1, 2, hour, 0))

    rec = record_service.get_for_user_and_date(employee.user_id, date(2024, 1, 2))
    assert len(rec.breaks) == 1


def test_empty_history_is_an_empty_list(record_service, employee):
    assert record_service.list_for_user(employee.user_id) == []


def test_company_listing_is_scoped_to_the_admin_company(record_service, admin, other_admin, employee, people, three_days):
    record_service.punch(as_identity(people["other_user"]), now=utc(2024, 1, 2, 9, 0))

    mine = record_service.list_for_company(admin)
    theirs = record_service.list_for_company(other_admin)

    assert len(mine) == 3
    assert {r.company_id for r in mine} == {admin.company_id}
    assert [r.user_id for r in theirs] == [people["other_user"].user_id]


def test_company_listing_carries_user_summary(record_service, admin, three_days):
    rows = record_service.list_for_company(admin)
    assert rows[0].user.full_name == "Uriel User"
    assert rows[0].user.email == "uriel@c1.test"


def test_company_listing_orders_by_date_then_user(record_service, admin, employee):
    record_service.punch(employee, now=utc(2024, 1, 2, 9, 0))
    record_service.punch(admin, now=utc(2024, 1, 2, 9, 0))
    record_service.punch(employee, now=utc(2024, 1, 1, 9, 0))

    rows = record_service.list_for_company(admin)
    assert [(r.work_date.day, r.user_id) for r in rows] == [(2, 1), (2, 10), (1, 10)]


def test_get_in_company(record_service, admin, other_admin, employee):
    rec = record_service.punch(employee, now=utc(2024, 1, 2, 9, 0))

    assert record_service.get_in_company(admin, rec.record_id).record_id == rec.record_id
    with pytest.raises(NotFoundError):
        record_service.get_in_company(other_admin, rec.record_id)
    with pytest.raises(NotFoundError):
        record_service.get_in_company(admin, 999)


def test_company_listing_requires_company(record_service, people):
    with pytest.raises(AuthorizationError):
        record_service.list_for_company(as_identity(people["unassigned"]))
