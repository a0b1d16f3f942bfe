"""Example: drive the service layer without Flask.

Controllers stay thin; the rules (submission window, summaries) live in services.
"""

import importlib

from config import get_settings_module

from class_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    classes = container.classroom_service.list_classes()
    if not classes:
        print("No classes yet; run scripts/seed_db.py first.")
        return

    class_id = classes[0]["id"]
    subjects = container.classroom_service.list_subjects(class_id)
    subject_name = subjects[0]["subject_name"] if subjects else None

    if subject_name:
        decision = container.attendance_service.can_submit(class_id=class_id, subject_name=subject_name)
        print(f"{classes[0]['name']} / {subject_name}: can submit = {decision.allowed}")

    analytics = container.analytics_service.class_analytics(class_id, subject_name)
    for bucket in analytics.week:
        print(f"{bucket.label:<10} present={bucket.present:<3} absent={bucket.absent:<3} {bucket.present_percentage}%")


if __name__ == "__main__":
    main()
