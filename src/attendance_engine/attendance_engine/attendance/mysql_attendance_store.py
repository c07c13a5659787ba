from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import ClockEventKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone, read_cursor
from ..hours.model import HoursResult, SessionStatistics
from .model import AttendanceRecord, NewAttendanceRecord
from .repository import AttendanceStore

_COLUMNS = "record_id, employee_id, clock_type, clock_time, work_date, regular_hours, overtime_hours, is_late, anomalous"
_OUT_KINDS = tuple(k.value for k in ClockEventKind if k.is_out)


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        employee_id=int(r["employee_id"]),
        kind=ClockEventKind(r["clock_type"]),
        clock_time=r["clock_time"],
        work_date=as_date(r["work_date"]),
        regular_hours=float(r.get("regular_hours") or 0),
        overtime_hours=float(r.get("overtime_hours") or 0),
        is_late=bool(r.get("is_late")),
        anomalous=bool(r.get("anomalous")),
    )


class MySQLAttendanceStore(AttendanceStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_last_event_for_day(self, employee_id: int, work_date: date) -> AttendanceRecord | None:
        with read_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_events
                WHERE employee_id=%s AND work_date=%s
                ORDER BY clock_time DESC, record_id DESC
                LIMIT 1
                """,
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_pending_clock_in(self, employee_id: int, work_date: date) -> AttendanceRecord | None:
        last = self.get_last_event_for_day(employee_id, work_date)
        if last is not None and last.kind.is_in:
            return last
        return None

    def find_clock_in(self, employee_id: int, work_date: date, kind: ClockEventKind) -> AttendanceRecord | None:
        with read_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_events
                WHERE employee_id=%s AND work_date=%s AND clock_type=%s
                ORDER BY clock_time DESC, record_id DESC
                LIMIT 1
                """,
                (employee_id, work_date, kind.value),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def has_completed_sessions_today(self, employee_id: int, work_date: date) -> bool:
        placeholders = ", ".join(["%s"] * len(_OUT_KINDS))
        with read_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT COUNT(*) AS n
                FROM attendance_events
                WHERE employee_id=%s AND work_date=%s AND clock_type IN ({placeholders})
                """,
                (employee_id, work_date, *_OUT_KINDS),
            )
            r = fetchone(cur)
            return bool(r and int(r["n"]) > 0)

    def has_pending_clock_ins_today(self, employee_id: int, work_date: date) -> bool:
        return self.get_pending_clock_in(employee_id, work_date) is not None

    def append(self, record: NewAttendanceRecord) -> int:
        event = record.event
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_events(
                    employee_id, clock_type, clock_time, work_date,
                    regular_hours, overtime_hours, is_late, anomalous
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    event.employee_id,
                    event.kind.value,
                    event.timestamp,
                    event.work_date,
                    record.hours.regular_hours,
                    record.hours.overtime_hours,
                    int(record.is_late),
                    int(record.anomalous),
                ),
            )
            record_id = int(cur.lastrowid)
            if record.statistics is not None:
                self._insert_statistics(cur, record_id, record.statistics)
            return record_id

    def list_events_for_day(self, employee_id: int, work_date: date) -> Sequence[AttendanceRecord]:
        with read_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_events
                WHERE employee_id=%s AND work_date=%s
                ORDER BY clock_time ASC, record_id ASC
                """,
                (employee_id, work_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_records(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: int | None = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)
        with read_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_events
                WHERE {where}
                ORDER BY employee_id ASC, work_date ASC, clock_time ASC, record_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def update_hours(self, *, record_id: int, hours: HoursResult) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_events
                SET regular_hours=%s, overtime_hours=%s
                WHERE record_id=%s
                """,
                (hours.regular_hours, hours.overtime_hours, int(record_id)),
            )
            return cur.rowcount > 0

    @staticmethod
    def _insert_statistics(cur, record_id: int, stats: SessionStatistics) -> None:
        cur.execute(
            """
            INSERT INTO attendance_statistics(
                record_id, session_type, total_minutes_worked,
                early_morning_overtime_hours, morning_session_hours, afternoon_session_hours,
                evening_session_hours, regular_overtime_hours, night_shift_hours,
                overnight_shift, lunch_break_excluded, lateness_minutes,
                calculation_method, notes
            )
            VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
            """,
            (
                record_id,
                stats.session_type.value if stats.session_type else "",
                stats.total_minutes_worked,
                stats.early_morning_overtime_hours,
                stats.morning_session_hours,
                stats.afternoon_session_hours,
                stats.evening_session_hours,
                stats.regular_overtime_hours,
                stats.night_shift_hours,
                int(stats.overnight_shift),
                int(stats.lunch_break_excluded),
                stats.lateness_minutes,
                stats.calculation_method,
                "; ".join(stats.notes) or None,
            ),
        )
