from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..attendance.repository import AttendanceStore
from ..core.enums import SessionFamily
from ..core.exceptions import ValidationError
from ..hours.model import round_hours


@dataclass(frozen=True)
class SummaryData:
    rows: list[dict]
    summary: list[dict]


class AttendanceSummaryService:
    """Tổng hợp giờ công theo ngày và theo nhân viên trong một khoảng ngày."""

    def __init__(self, store: AttendanceStore):
        self._store = store

    def build_summary(
        self,
        *,
        start: date,
        end: date,
        employee_id: int | None = None,
    ) -> SummaryData:
        if end < start:
            raise ValidationError("Ngày kết thúc không được trước ngày bắt đầu")

        records = self._store.list_records(start_date=start, end_date=end, employee_id=employee_id)

        daily: dict[tuple[int, date], dict] = {}
        for r in sorted(records, key=lambda r: r.clock_time):
            key = (r.employee_id, r.work_date)
            d = daily.get(key)
            if not d:
                d = {
                    "employee_id": r.employee_id,
                    "date": r.work_date.isoformat(),
                    "first_clock_in": None,
                    "last_clock_out": None,
                    "regular_hours": 0.0,
                    "overtime_hours": 0.0,
                    "sessions": 0,
                    "late": False,
                }
                daily[key] = d

            if r.kind.is_in:
                if d["first_clock_in"] is None:
                    d["first_clock_in"] = r.clock_time.strftime("%H:%M")
                d["late"] = d["late"] or r.is_late
                continue

            d["last_clock_out"] = r.clock_time.strftime("%H:%M")
            d["regular_hours"] += r.regular_hours
            d["overtime_hours"] += r.overtime_hours
            d["sessions"] += 1
            if r.kind.family in (SessionFamily.EVENING, SessionFamily.OVERTIME):
                d["extra_sessions"] = d.get("extra_sessions", 0) + 1

        rows: list[dict] = []
        summary_map: dict[int, dict] = {}
        for (emp_id, _), d in sorted(daily.items()):
            d["regular_hours"] = round_hours(d["regular_hours"])
            d["overtime_hours"] = round_hours(d["overtime_hours"])
            d["total_hours"] = round_hours(d["regular_hours"] + d["overtime_hours"])
            extra_sessions = d.pop("extra_sessions", 0)
            rows.append(d)

            s = summary_map.get(emp_id)
            if not s:
                s = {
                    "employee_id": emp_id,
                    "regular_hours": 0.0,
                    "overtime_hours": 0.0,
                    "total_hours": 0.0,
                    "sessions": 0,
                    "evening_overtime_sessions": 0,
                    "days_worked": 0,
                    "late_days": 0,
                }
                summary_map[emp_id] = s
            s["regular_hours"] += d["regular_hours"]
            s["overtime_hours"] += d["overtime_hours"]
            s["sessions"] += d["sessions"]
            s["evening_overtime_sessions"] += extra_sessions
            s["days_worked"] += 1
            s["late_days"] += int(d["late"])

        summary = []
        for s in summary_map.values():
            s["regular_hours"] = round_hours(s["regular_hours"])
            s["overtime_hours"] = round_hours(s["overtime_hours"])
            s["total_hours"] = round_hours(s["regular_hours"] + s["overtime_hours"])
            summary.append(s)

        summary.sort(key=lambda x: x["total_hours"], reverse=True)
        return SummaryData(rows=rows, summary=summary)
