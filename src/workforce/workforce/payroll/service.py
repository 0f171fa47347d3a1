from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..common.datetime_utils import Clock, iter_days, local_work_date, month_bounds, utc_now
from ..common.validators import require_month_year
from ..core.constants import DEFAULT_ORG_UTC_OFFSET_MINUTES, FULL_DAY_HOURS, HALF_DAY_THRESHOLD_HOURS
from ..core.enums import PAID_LEAVE_TYPES, LeaveType
from ..core.exceptions import ValidationError
from ..leaves.repository import LeaveRepository
from ..sessions.service import SessionService

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class AttendanceDays:
    total_working_days: int
    present_days: Decimal
    paid_leave_days: Decimal
    unpaid_leave_days: Decimal
    absent_days: Decimal


class AttendanceCalculationService:
    """Attendance figures a pay run needs: working, present, leave and absent days."""

    def __init__(
        self,
        sessions: SessionService,
        leaves: LeaveRepository,
        *,
        half_day_hours: float = HALF_DAY_THRESHOLD_HOURS,
        full_day_hours: float = FULL_DAY_HOURS,
        utc_offset_minutes: int = DEFAULT_ORG_UTC_OFFSET_MINUTES,
        clock: Clock = utc_now,
    ):
        self._sessions = sessions
        self._leaves = leaves
        self._half_day_minutes = int(half_day_hours * 60)
        self._full_day_minutes = int(full_day_hours * 60)
        self._offset = int(utc_offset_minutes)
        self._clock = clock

    def _today(self, now: Optional[datetime]) -> date:
        return local_work_date(now or self._clock(), self._offset)

    def total_working_days(self, month: int, year: int, *, today: date) -> int:
        """Monday to Friday dates of the month, up to and including today."""

        start, end = month_bounds(month, year)
        return sum(1 for d in iter_days(start, min(end, today)) if d.weekday() < 5)

    def present_days(self, employee_id: int, start: date, end: date, *, now: Optional[datetime] = None) -> Decimal:
        minutes_by_day = self._sessions.worked_minutes_by_day(employee_id, start, end, now=now)

        present = Decimal("0")
        for minutes in minutes_by_day.values():
            if minutes >= self._full_day_minutes:
                present += Decimal("1")
            elif minutes >= self._half_day_minutes:
                present += Decimal("0.5")
        return present

    def paid_leave_days(self, employee_id: int, start: date, end: date) -> Decimal:
        leaves = self._leaves.find_approved_in_range(employee_id, start, end)
        return sum((l.total_days for l in leaves if l.leave_type in PAID_LEAVE_TYPES), Decimal("0"))

    def unpaid_leave_days(self, employee_id: int, start: date, end: date) -> Decimal:
        leaves = self._leaves.find_approved_in_range(employee_id, start, end)
        return sum((l.total_days for l in leaves if l.leave_type == LeaveType.UNPAID_LEAVE), Decimal("0"))

    def absent_days(self, employee_id: int, month: int, year: int, *, now: Optional[datetime] = None) -> AttendanceDays:
        month, year = require_month_year(month, year)
        start, end = month_bounds(month, year)

        total = self.total_working_days(month, year, today=self._today(now))
        present = self.present_days(employee_id, start, end, now=now)
        paid = self.paid_leave_days(employee_id, start, end)
        unpaid = self.unpaid_leave_days(employee_id, start, end)

        absent = max(Decimal("0"), Decimal(total) - present - paid - unpaid)
        return AttendanceDays(
            total_working_days=total,
            present_days=present,
            paid_leave_days=paid,
            unpaid_leave_days=unpaid,
            absent_days=absent,
        )

    @staticmethod
    def lop_deduction(
        gross_salary: Decimal,
        total_working_days: int,
        absent_days: Decimal,
        unpaid_leave_days: Decimal,
    ) -> Decimal:
        """Loss-of-pay: per-day rate times absent plus unpaid days."""

        gross_salary = Decimal(gross_salary)
        if gross_salary < 0:
            raise ValidationError("gross salary cannot be negative")
        if total_working_days == 0:
            return Decimal("0.00")

        per_day = gross_salary / Decimal(total_working_days)
        deduction = per_day * (Decimal(absent_days) + Decimal(unpaid_leave_days))
        return deduction.quantize(_CENT, rounding=ROUND_HALF_UP)
