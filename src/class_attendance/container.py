from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .analytics.live import LiveAnalytics
from .analytics.service import AnalyticsService
from .attendance.service import AttendanceService
from .attendance.store_attendance_repository import StoreAttendanceRepository
from .classes.service import ClassroomService
from .classes.store_class_repository import StoreClassRepository
from .common.datetime_utils import now_local
from .core.constants import ANALYTICS_MAX_AGE_SECONDS, REPORT_PAGE_SIZE, SUBMISSION_COOLDOWN_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import ReportService
from .store.mysql_store import MySQLRecordStore
from .store.repository import RecordStore
from .students.store_student_repository import StoreStudentRepository
from .subjects.store_subject_repository import StoreSubjectRepository
from .users.service import AuthService, UserService
from .users.store_user_repository import StoreUserRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    store: RecordStore

    users_repo: StoreUserRepository
    classes_repo: StoreClassRepository
    subjects_repo: StoreSubjectRepository
    students_repo: StoreStudentRepository
    attendance_repo: StoreAttendanceRepository

    auth_service: AuthService
    user_service: UserService
    classroom_service: ClassroomService
    attendance_service: AttendanceService
    analytics_service: AnalyticsService
    report_service: ReportService
    live_analytics: LiveAnalytics

    report_page_size: int = REPORT_PAGE_SIZE


def build_container(
    *,
    db_config: Optional[dict] = None,
    store: Optional[RecordStore] = None,
    cooldown_seconds: int = SUBMISSION_COOLDOWN_SECONDS,
    report_page_size: int = REPORT_PAGE_SIZE,
    analytics_max_age_seconds: float = ANALYTICS_MAX_AGE_SECONDS,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Wire repositories and services.

    Pass ``store`` to run on an already built store (tests use an in-memory
    one); otherwise ``db_config`` selects the MySQL database.
    """

    conn = None
    if store is None:
        if db_config is None:
            raise ValueError("build_container needs either db_config or store")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        store = MySQLRecordStore(conn)

    users_repo = StoreUserRepository(store)
    classes_repo = StoreClassRepository(store)
    subjects_repo = StoreSubjectRepository(store)
    students_repo = StoreStudentRepository(store)
    attendance_repo = StoreAttendanceRepository(store)

    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo)
    classroom_service = ClassroomService(classes_repo, subjects_repo, students_repo)
    attendance_service = AttendanceService(attendance_repo, cooldown_seconds=cooldown_seconds)
    analytics_service = AnalyticsService(attendance_repo, students_repo, clock=clock)
    report_service = ReportService(attendance_repo, students_repo, classes_repo, clock=clock)
    live_analytics = LiveAnalytics(analytics_service, store, clock=clock, max_age_seconds=analytics_max_age_seconds)

    return Container(
        conn=conn,
        store=store,
        users_repo=users_repo,
        classes_repo=classes_repo,
        subjects_repo=subjects_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        auth_service=auth_service,
        user_service=user_service,
        classroom_service=classroom_service,
        attendance_service=attendance_service,
        analytics_service=analytics_service,
        report_service=report_service,
        live_analytics=live_analytics,
        report_page_size=report_page_size,
    )
