"""Ví dụ: dùng các thành phần thuần (không qua Flask, không cần CSDL).

Phân loại một ngày quẹt thẻ rồi tính giờ công cho từng lần chấm ra.
"""

from datetime import datetime

from src.attendance_engine.attendance_engine.attendance.model import ClockEvent
from src.attendance_engine.attendance_engine.attendance.resolver import ClockTypeResolver
from src.attendance_engine.attendance_engine.hours.service import HoursCreditService


def main():
    resolver = ClockTypeResolver()
    hours = HoursCreditService()

    scans = [
        datetime(2025, 3, 3, 7, 58),
        datetime(2025, 3, 3, 12, 2),
        datetime(2025, 3, 3, 13, 4),
        datetime(2025, 3, 3, 17, 30),
        datetime(2025, 3, 3, 17, 40),
        datetime(2025, 3, 3, 20, 10),
    ]

    last = None
    for ts in scans:
        resolution = resolver.resolve_event(last, ts)
        clock_in = last.timestamp if last is not None and last.kind.is_in else None
        calc = hours.credit(resolution.kind, ts, clock_in)
        print(f"{ts:%H:%M} {resolution.kind.value:<14} {calc.hours.as_dict()}")
        last = ClockEvent(employee_id=1, kind=resolution.kind, timestamp=ts, work_date=resolution.work_date)


if __name__ == "__main__":
    main()
