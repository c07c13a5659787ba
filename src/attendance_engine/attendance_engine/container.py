from __future__ import annotations

from dataclasses import dataclass

from .attendance.lateness import LatenessClassifier
from .attendance.mysql_attendance_store import MySQLAttendanceStore
from .attendance.service import AttendanceEventProcessor
from .attendance.validation import AttendanceValidationService
from .clock.source import MonotonicClockSource
from .core.constants import REGULAR_GRACE_MINUTES, REQUIRED_REGULAR_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .hours.reallocator import RegularHoursReallocator
from .hours.service import HoursCreditService
from .summary.service import AttendanceSummaryService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    clock: MonotonicClockSource

    attendance_store: MySQLAttendanceStore

    hours_service: HoursCreditService
    attendance_processor: AttendanceEventProcessor
    validation_service: AttendanceValidationService
    summary_service: AttendanceSummaryService


def build_container(
    *,
    db_config: dict,
    required_regular_hours: float = REQUIRED_REGULAR_HOURS,
    grace_minutes: int = REGULAR_GRACE_MINUTES,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    clock = MonotonicClockSource()

    attendance_store = MySQLAttendanceStore(conn)

    hours_service = HoursCreditService(reallocator=RegularHoursReallocator(required_regular_hours))
    attendance_processor = AttendanceEventProcessor(
        attendance_store,
        clock=clock,
        hours=hours_service,
        lateness=LatenessClassifier(grace_minutes=grace_minutes),
    )
    validation_service = AttendanceValidationService(attendance_store, hours=hours_service)
    summary_service = AttendanceSummaryService(attendance_store)

    return Container(
        conn=conn,
        clock=clock,
        attendance_store=attendance_store,
        hours_service=hours_service,
        attendance_processor=attendance_processor,
        validation_service=validation_service,
        summary_service=summary_service,
    )
