from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .auth.service import AuthService
from .classes.mysql_class_repository import MySQLClassRepository
from .classes.service import ClassService
from .core.constants import DEFAULT_RECEIPT_URL_TTL_SECONDS, DEFAULT_TODAY_OFFSET_HOURS
from .core.events import ChangeFeed
from .database.connection import DBConfig, DatabaseConnection
from .receipts.s3_receipt_storage import S3ReceiptStorage
from .registrations.mysql_registration_repository import MySQLRegistrationRepository
from .registrations.service import RegistrationService
from .reports.service import ReportService
from .settings.mysql_setting_repository import MySQLSettingRepository
from .settings.service import SystemLockGate
from .students.attendance_history import AttendanceHistoryService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    change_feed: ChangeFeed

    classes_repo: MySQLClassRepository
    students_repo: MySQLStudentRepository
    registrations_repo: MySQLRegistrationRepository
    settings_repo: MySQLSettingRepository
    receipt_storage: S3ReceiptStorage

    lock_gate: SystemLockGate
    auth_service: AuthService
    class_service: ClassService
    student_service: StudentService
    registration_service: RegistrationService
    report_service: ReportService
    attendance_history_service: AttendanceHistoryService


def build_container(
    *,
    db_config: dict,
    receipts_bucket: str,
    admin_password_hash: str,
    aws_region: Optional[str] = None,
    s3_endpoint_url: Optional[str] = None,
    today_offset_hours: int = DEFAULT_TODAY_OFFSET_HOURS,
    receipt_url_ttl_seconds: int = DEFAULT_RECEIPT_URL_TTL_SECONDS,
    magazines_by_category: Optional[Mapping[str, int]] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    change_feed = ChangeFeed()

    classes_repo = MySQLClassRepository(conn)
    students_repo = MySQLStudentRepository(conn)
    registrations_repo = MySQLRegistrationRepository(conn)
    settings_repo = MySQLSettingRepository(conn)
    receipt_storage = S3ReceiptStorage(receipts_bucket, region_name=aws_region, endpoint_url=s3_endpoint_url)

    lock_gate = SystemLockGate(settings_repo)
    registration_service = RegistrationService(
        registrations_repo,
        classes_repo,
        lock_gate,
        receipt_storage,
        change_feed=change_feed,
        today_offset_hours=today_offset_hours,
        receipt_url_ttl_seconds=receipt_url_ttl_seconds,
    )

    return Container(
        conn=conn,
        change_feed=change_feed,
        classes_repo=classes_repo,
        students_repo=students_repo,
        registrations_repo=registrations_repo,
        settings_repo=settings_repo,
        receipt_storage=receipt_storage,
        lock_gate=lock_gate,
        auth_service=AuthService(admin_password_hash),
        class_service=ClassService(classes_repo),
        student_service=StudentService(students_repo),
        registration_service=registration_service,
        report_service=ReportService(
            registrations_repo,
            students_repo,
            classes_repo,
            magazines_by_category=magazines_by_category,
        ),
        attendance_history_service=AttendanceHistoryService(students_repo, registrations_repo, classes_repo),
    )
