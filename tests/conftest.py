from __future__ import annotations

from datetime import datetime

import pytest

from src.timeclock.timeclock.core.enums import Role
from src.timeclock.timeclock.time_records.admin_service import AdminCorrectionService
from src.timeclock.timeclock.time_records.service import TimeRecordService
from src.timeclock.timeclock.users.model import AuthenticatedUser, User

from tests.fakes import COMPANY_1, COMPANY_2, InMemoryTimeRecords, InMemoryUsers, as_identity, utc


@pytest.fixture
def fixed_now() -> datetime:
    return utc(2024, 1, 2, 9, 0, 0)


@pytest.fixture
def people() -> dict[str, User]:
    return {
        "admin": User(user_id=1, full_name="Ana Admin", email="ana@c1.test", role=Role.ADMIN, company_id=COMPANY_1),
        "user": User(user_id=10, full_name="Uriel User", email="uriel@c1.test", role=Role.USER, company_id=COMPANY_1),
        "deleted": User(
            user_id=11,
            full_name="Dora Deleted",
            email="dora@c1.test",
            role=Role.USER,
            company_id=COMPANY_1,
            deleted_at=utc(2023, 12, 1),
        ),
        "unassigned": User(user_id=12, full_name="Nico Nobody", email="nico@none.test", role=Role.USER, company_id=None),
        "other_admin": User(user_id=2, full_name="Bea Boss", email="bea@c2.test", role=Role.ADMIN, company_id=COMPANY_2),
        "other_user": User(user_id=20, full_name="Vic Visitor", email="vic@c2.test", role=Role.USER, company_id=COMPANY_2),
    }


@pytest.fixture
def users_repo(people) -> InMemoryUsers:
    return InMemoryUsers(people.values())


@pytest.fixture
def records_repo(users_repo) -> InMemoryTimeRecords:
    return InMemoryTimeRecords(users_repo)


@pytest.fixture
def record_service(records_repo) -> TimeRecordService:
    return TimeRecordService(records_repo)


@pytest.fixture
def admin_service(records_repo, users_repo) -> AdminCorrectionService:
    return AdminCorrectionService(records_repo, users_repo)


@pytest.fixture
def admin(people) -> AuthenticatedUser:
    return as_identity(people["admin"])


@pytest.fixture
def employee(people) -> AuthenticatedUser:
    return as_identity(people["user"])


@pytest.fixture
def other_admin(people) -> AuthenticatedUser:
    return as_identity(people["other_admin"])
