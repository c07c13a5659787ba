from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Sequence

from ..core.constants import HOURS_TOLERANCE
from ..core.exceptions import ValidationError
from ..hours.model import HoursResult
from ..hours.service import HoursCreditService
from .model import AttendanceRecord
from .repository import AttendanceStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HoursCorrection:
    """Một bản ghi _out có giờ công lưu khác với giờ công tính lại."""

    record_id: int
    employee_id: int
    work_date: date
    kind: str
    clock_time: datetime
    original: HoursResult
    corrected: HoursResult

    @property
    def regular_diff(self) -> float:
        return abs(self.original.regular_hours - self.corrected.regular_hours)

    @property
    def overtime_diff(self) -> float:
        return abs(self.original.overtime_hours - self.corrected.overtime_hours)

    def as_dict(self) -> dict:
        return {
            "record_id": self.record_id,
            "employee_id": self.employee_id,
            "date": self.work_date.isoformat(),
            "kind": self.kind,
            "clock_time": self.clock_time.isoformat(),
            "original_regular": self.original.regular_hours,
            "original_overtime": self.original.overtime_hours,
            "corrected_regular": self.corrected.regular_hours,
            "corrected_overtime": self.corrected.overtime_hours,
            "regular_diff": round(self.regular_diff, 4),
            "overtime_diff": round(self.overtime_diff, 4),
        }


@dataclass
class ValidationReport:
    total_records: int = 0
    valid_records: int = 0
    corrected_records: int = 0
    error_records: int = 0
    auto_corrected: bool = False
    corrections: list[HoursCorrection] = field(default_factory=list)

    @property
    def correction_rate(self) -> float:
        if not self.total_records:
            return 0.0
        return round(self.corrected_records / self.total_records * 100, 2)

    def as_dict(self) -> dict:
        return {
            "summary": {
                "total_records": self.total_records,
                "valid_records": self.valid_records,
                "corrected_records": self.corrected_records,
                "error_records": self.error_records,
                "correction_rate": self.correction_rate,
                "auto_corrected": self.auto_corrected,
            },
            "corrections": [c.as_dict() for c in self.corrections],
        }


def find_clock_in(clock_out: AttendanceRecord, records: Sequence[AttendanceRecord]) -> AttendanceRecord | None:
    """Most recent _in of the same family at or before ``clock_out``."""
    paired = clock_out.kind.paired()
    candidates = [r for r in records if r.kind is paired and r.clock_time <= clock_out.clock_time]
    if not candidates:
        return None
    return max(candidates, key=lambda r: r.clock_time)


class AttendanceValidationService:
    """Reprocess stored _out records and fix hours that no longer match the rules."""

    def __init__(self, store: AttendanceStore, *, hours: HoursCreditService | None = None):
        self._store = store
        self._hours = hours or HoursCreditService()

    def validate(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: int | None = None,
        auto_correct: bool = True,
    ) -> ValidationReport:
        if end_date < start_date:
            raise ValidationError("Ngày kết thúc không được trước ngày bắt đầu")

        records = self._store.list_records(start_date=start_date, end_date=end_date, employee_id=employee_id)
        by_day: dict[tuple[int, date], list[AttendanceRecord]] = defaultdict(list)
        for r in records:
            by_day[(r.employee_id, r.work_date)].append(r)

        report = ValidationReport(auto_corrected=auto_correct)
        for key in sorted(by_day):
            day_records = sorted(by_day[key], key=lambda r: r.clock_time)
            for record in day_records:
                if record.kind.is_out:
                    self._validate_record(record, day_records, report, auto_correct=auto_correct)

        logger.info(
            "Validated %s..%s: %d records, %d valid, %d corrected, %d errors",
            start_date.isoformat(),
            end_date.isoformat(),
            report.total_records,
            report.valid_records,
            report.corrected_records,
            report.error_records,
        )
        return report

    def _validate_record(
        self,
        record: AttendanceRecord,
        day_records: Sequence[AttendanceRecord],
        report: ValidationReport,
        *,
        auto_correct: bool,
    ) -> None:
        report.total_records += 1

        clock_in = find_clock_in(record, day_records)
        if clock_in is None:
            logger.warning("No %s found for record %s", record.kind.paired().value, record.record_id)
            report.error_records += 1
            return

        expected = self._hours.credit(record.kind, record.clock_time, clock_in.clock_time).hours
        correction = HoursCorrection(
            record_id=record.record_id,
            employee_id=record.employee_id,
            work_date=record.work_date,
            kind=record.kind.value,
            clock_time=record.clock_time,
            original=record.hours,
            corrected=expected,
        )
        if correction.regular_diff <= HOURS_TOLERANCE and correction.overtime_diff <= HOURS_TOLERANCE:
            report.valid_records += 1
            return

        report.corrected_records += 1
        report.corrections.append(correction)
        if auto_correct:
            self._store.update_hours(record_id=record.record_id, hours=expected)
            logger.info(
                "Corrected record %s: regular %.2f -> %.2f, overtime %.2f -> %.2f",
                record.record_id,
                record.regular_hours,
                expected.regular_hours,
                record.overtime_hours,
                expected.overtime_hours,
            )
        else:
            logger.warning("Hours mismatch on record %s left as is", record.record_id)
