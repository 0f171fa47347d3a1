from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import Clock, local_work_date, minutes_to_hours, month_bounds, to_local, utc_now
from ..common.validators import require_month_year
from ..core.constants import DEFAULT_ORG_UTC_OFFSET_MINUTES
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..sessions.model import WorkSession
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, AttendanceReportRow, EmployeeMonthlySummary, MonthlySummary
from .repository import AttendanceRepository, AttendanceWriter

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        utc_offset_minutes: int = DEFAULT_ORG_UTC_OFFSET_MINUTES,
        clock: Clock = utc_now,
    ):
        self._attendance = attendance
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._offset = int(utc_offset_minutes)
        self._clock = clock

    def record_session(self, session: WorkSession, *, writer: Optional[AttendanceWriter] = None) -> AttendanceStatus:
        """Upsert the daily attendance row for a session that just closed.

        Pass the open session transaction as `writer` so the row commits with the session.
        """

        if session.end_time is None or session.working_minutes is None:
            raise ValidationError("Only closed sessions can be recorded")

        local_check_in = to_local(session.start_time, self._offset)
        strategy = self._factory.for_session(working_minutes=session.working_minutes, local_check_in=local_check_in)
        decision = strategy.decide(working_minutes=session.working_minutes, local_check_in=local_check_in)

        (writer or self._attendance).upsert_from_session(
            employee_id=session.employee_id,
            work_date=session.work_date,
            check_in=session.start_time,
            check_out=session.end_time,
            status=decision.status,
            working_minutes=session.working_minutes,
            overtime_minutes=session.overtime_minutes or 0,
            notes=decision.note,
        )
        logger.info(
            "attendance recorded as %s",
            decision.status.value,
            extra={"employee_id": session.employee_id, "session_id": session.session_id},
        )
        return decision.status

    def my_attendance(self, employee_id: int, month: int, year: int) -> Sequence[AttendanceRecord]:
        month, year = require_month_year(month, year)
        start, end = month_bounds(month, year)
        return self._attendance.list_for_employee(employee_id, start, end)

    def monthly_summary(self, employee_id: int, month: int, year: int) -> MonthlySummary:
        records = self.my_attendance(employee_id, month, year)

        def count(*statuses: AttendanceStatus) -> int:
            return sum(1 for r in records if r.status in statuses)

        return MonthlySummary(
            total_working_days=count(AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.HALF_DAY),
            total_present_days=count(AttendanceStatus.PRESENT, AttendanceStatus.LATE),
            total_absent_days=count(AttendanceStatus.ABSENT),
            total_leave_days=count(AttendanceStatus.ON_LEAVE),
            total_half_days=count(AttendanceStatus.HALF_DAY),
            total_late_days=count(AttendanceStatus.LATE),
            total_working_hours=minutes_to_hours(sum(r.working_minutes for r in records)),
            total_overtime_hours=minutes_to_hours(sum(r.overtime_minutes for r in records)),
        )

    def organization_summary(self, month: int, year: int) -> list[EmployeeMonthlySummary]:
        month, year = require_month_year(month, year)
        start, end = month_bounds(month, year)
        rows = self._attendance.get_report_rows(start_date=start, end_date=end)

        totals: dict[int, dict] = {}
        for r in rows:
            s = totals.get(r.employee_id)
            if not s:
                s = {
                    "employee_code": r.employee_code,
                    "name": r.full_name,
                    "department": r.department or "N/A",
                    "statuses": [],
                    "working_minutes": 0,
                    "overtime_minutes": 0,
                }
                totals[r.employee_id] = s
            s["statuses"].append(r.status)
            s["working_minutes"] += r.working_minutes
            s["overtime_minutes"] += r.overtime_minutes

        summary = [
            EmployeeMonthlySummary(
                employee_id=employee_id,
                employee_code=s["employee_code"],
                name=s["name"],
                department=s["department"],
                present_days=s["statuses"].count(AttendanceStatus.PRESENT),
                absent_days=s["statuses"].count(AttendanceStatus.ABSENT),
                leave_days=s["statuses"].count(AttendanceStatus.ON_LEAVE),
                half_days=s["statuses"].count(AttendanceStatus.HALF_DAY),
                late_days=s["statuses"].count(AttendanceStatus.LATE),
                total_working_hours=minutes_to_hours(s["working_minutes"]),
                total_overtime_hours=minutes_to_hours(s["overtime_minutes"]),
            )
            for employee_id, s in totals.items()
        ]
        summary.sort(key=lambda x: x.employee_code)
        return summary

    def today_overview(self, *, now: Optional[datetime] = None) -> Sequence[AttendanceReportRow]:
        today = local_work_date(now or self._clock(), self._offset)
        return self._attendance.get_report_rows(start_date=today, end_date=today)
