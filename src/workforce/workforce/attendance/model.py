from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import minutes_to_hours
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: the daily attendance row derived from a closed session."""

    attendance_id: int
    employee_id: int
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    status: AttendanceStatus
    working_minutes: int = 0
    overtime_minutes: int = 0
    notes: Optional[str] = None

    @property
    def working_hours(self) -> float:
        return minutes_to_hours(self.working_minutes)

    @property
    def overtime_hours(self) -> float:
        return minutes_to_hours(self.overtime_minutes)


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for summaries and the admin overview (joined with employees)."""

    employee_id: int
    employee_code: str
    full_name: str
    department: Optional[str]
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    status: AttendanceStatus
    working_minutes: int = 0
    overtime_minutes: int = 0


@dataclass(frozen=True)
class MonthlySummary:
    total_working_days: int
    total_present_days: int
    total_absent_days: int
    total_leave_days: int
    total_half_days: int
    total_late_days: int
    total_working_hours: float
    total_overtime_hours: float


@dataclass(frozen=True)
class EmployeeMonthlySummary:
    employee_id: int
    employee_code: str
    name: str
    department: str
    present_days: int
    absent_days: int
    leave_days: int
    half_days: int
    late_days: int
    total_working_hours: float
    total_overtime_hours: float
