from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceReportRow


class AttendanceWriter(Protocol):
    """Anything that can write the daily attendance row (the repository or an open session transaction)."""

    def upsert_from_session(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: datetime,
        check_out: datetime,
        status: AttendanceStatus,
        working_minutes: int,
        overtime_minutes: int,
        notes: Optional[str] = None,
    ) -> None:
        """Insert the day's row, or update check-out/totals/status keeping the first check-in."""

        raise NotImplementedError


class AttendanceRepository(AttendanceWriter, Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError
