"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the rules live in the services.
"""

import importlib

from config import get_settings_module

from src.classroom_ledger.classroom_ledger.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    container.attendance_service.record_attendance(1, "Ada", "Present")
    container.points_service.apply_points_batch(1, [{"name": "Ada", "points": 12}])
    print(container.attendance_service.get_attendance_for_teacher(1))
    print([p.to_dict() for p in container.points_service.get_points(1)])


if __name__ == "__main__":
    main()
