"""Example: drive the service layer directly (no Flask).

Punches user 10 of company 1 once and prints their history.
"""

import importlib

from config import get_settings_module

from src.timeclock.timeclock.container import build_container
from src.timeclock.timeclock.core.enums import Role
from src.timeclock.timeclock.time_records.serializers import record_to_dict
from src.timeclock.timeclock.users.model import AuthenticatedUser


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    me = AuthenticatedUser(user_id=10, company_id=1, role=Role.USER)
    record = container.time_record_service.punch(me)
    print(record_to_dict(record))

    for row in container.time_record_service.list_for_user(me.user_id):
        print(row.work_date, row.clock_in, row.clock_out, len(row.breaks))


if __name__ == "__main__":
    main()
