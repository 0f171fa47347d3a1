from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from src.workforce.workforce.attendance.model import AttendanceRecord
from src.workforce.workforce.core.enums import AttendanceStatus
from src.workforce.workforce.core.exceptions import ValidationError
from src.workforce.workforce.sessions.model import WorkSession

from tests.fakes import build_test_container, make_employee


def utc(day: int, hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 1, day, hour, minute, tzinfo=timezone.utc)


def closed_session(*, day: int, start: datetime, end: datetime, working: int, overtime: int = 0) -> WorkSession:
    return WorkSession(
        session_id=day,
        employee_id=1,
        work_date=date(2025, 1, day),
        start_time=start,
        end_time=end,
        working_minutes=working,
        overtime_minutes=overtime,
    )


def test_record_session_uses_local_check_in_time(clock):
    # 05:30 UTC is 11:15 at UTC+05:45.
    container = build_test_container(clock, employees=[make_employee(1)], utc_offset_minutes=345)
    session = closed_session(day=6, start=utc(6, 5, 30), end=utc(6, 14, 30), working=540, overtime=60)

    status = container.attendance_service.record_session(session)

    assert status == AttendanceStatus.LATE
    record = container.attendance_repo.get_for_employee_and_date(1, date(2025, 1, 6))
    assert record.notes == "Checked in at 11:15"
    assert record.working_hours == 9
    assert record.overtime_hours == 1


def test_record_session_short_day_is_half_day(container):
    session = closed_session(day=6, start=utc(6, 9), end=utc(6, 12), working=180)
    assert container.attendance_service.record_session(session) == AttendanceStatus.HALF_DAY


def test_record_session_rejects_open_sessions(container):
    session = WorkSession(session_id=1, employee_id=1, work_date=date(2025, 1, 6), start_time=utc(6, 9))
    with pytest.raises(ValidationError):
        container.attendance_service.record_session(session)


def test_monthly_summary_counts_statuses_and_hours(container):
    repo = container.attendance_repo
    statuses = [
        (6, AttendanceStatus.PRESENT, 540, 60),
        (7, AttendanceStatus.LATE, 480, 0),
        (8, AttendanceStatus.HALF_DAY, 200, 0),
        (9, AttendanceStatus.ABSENT, 0, 0),
        (10, AttendanceStatus.ON_LEAVE, 0, 0),
    ]
    for i, (day, status, working, overtime) in enumerate(statuses, start=1):
        repo.add(
            AttendanceRecord(
                attendance_id=i,
                employee_id=1,
                work_date=date(2025, 1, day),
                check_in=None,
                check_out=None,
                status=status,
                working_minutes=working,
                overtime_minutes=overtime,
            )
        )

    summary = container.attendance_service.monthly_summary(1, 1, 2025)

    assert summary.total_working_days == 3
    assert summary.total_present_days == 2
    assert summary.total_half_days == 1
    assert summary.total_late_days == 1
    assert summary.total_absent_days == 1
    assert summary.total_leave_days == 1
    assert summary.total_working_hours == round(1220 / 60, 2)
    assert summary.total_overtime_hours == 1


def test_my_attendance_validates_month(container):
    with pytest.raises(ValidationError):
        container.attendance_service.my_attendance(1, 0, 2025)


def test_organization_summary_groups_by_employee_sorted_by_code(clock):
    container = build_test_container(
        clock,
        employees=[make_employee(1, code="B-01"), make_employee(2, code="A-01", department=None)],
    )
    svc = container.attendance_service
    svc.record_session(closed_session(day=6, start=utc(6, 9), end=utc(6, 18), working=540, overtime=60))
    svc.record_session(
        WorkSession(
            session_id=2,
            employee_id=2,
            work_date=date(2025, 1, 6),
            start_time=utc(6, 9),
            end_time=utc(6, 11),
            working_minutes=120,
            overtime_minutes=0,
        )
    )

    rows = svc.organization_summary(1, 2025)

    assert [r.employee_code for r in rows] == ["A-01", "B-01"]
    assert rows[0].half_days == 1
    assert rows[0].department == "N/A"
    assert rows[1].present_days == 1
    assert rows[1].total_overtime_hours == 1


def test_today_overview_uses_local_day(container, fixed_now):
    svc = container.attendance_service
    svc.record_session(closed_session(day=6, start=utc(6, 9), end=utc(6, 18), working=540))
    svc.record_session(closed_session(day=5, start=utc(5, 9), end=utc(5, 18), working=540))

    rows = svc.today_overview(now=fixed_now)
    assert [r.work_date for r in rows] == [date(2025, 1, 6)]
