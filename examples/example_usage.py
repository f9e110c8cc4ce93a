"""Example: use the service layer directly (no Flask).

Controllers are thin; the rules live in the services wired by the container.
"""

import importlib
from datetime import date

from flowhr_attendance.config import get_settings_module
from flowhr_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)

    schedule = container.schedule_resolver.resolve_for_employee(1, date.today())
    print("Today's schedule:", schedule.to_dict() if schedule else None)

    for record in container.attendance_service.get_recent(1, limit=5):
        print(record.to_dict())


if __name__ == "__main__":
    main()
