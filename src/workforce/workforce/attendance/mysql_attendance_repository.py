from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in=from_db_datetime(r.get("check_in")),
        check_out=from_db_datetime(r.get("check_out")),
        status=AttendanceStatus(r["status"]),
        working_minutes=int(r.get("working_minutes") or 0),
        overtime_minutes=int(r.get("overtime_minutes") or 0),
        notes=r.get("notes"),
    )


def upsert_attendance_row(
    cur,
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
    """Insert or update the day's row on an open cursor; the first check-in is kept."""

    cur.execute(
        """
        INSERT INTO attendance(employee_id, work_date, check_in, check_out, status,
                               working_minutes, overtime_minutes, notes)
        VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
        ON DUPLICATE KEY UPDATE
            check_out=VALUES(check_out),
            status=VALUES(status),
            working_minutes=VALUES(working_minutes),
            overtime_minutes=VALUES(overtime_minutes),
            notes=COALESCE(VALUES(notes), notes)
        """,
        (
            int(employee_id),
            work_date,
            to_db_datetime(check_in),
            to_db_datetime(check_out),
            status.value,
            int(working_minutes),
            int(overtime_minutes),
            notes,
        ),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, employee_id, work_date, check_in, check_out, status,
                       working_minutes, overtime_minutes, notes
                FROM attendance
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_employee(self, employee_id: int, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, employee_id, work_date, check_in, check_out, status,
                       working_minutes, overtime_minutes, notes
                FROM attendance
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (int(employee_id), start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            upsert_attendance_row(
                cur,
                employee_id=employee_id,
                work_date=work_date,
                check_in=check_in,
                check_out=check_out,
                status=status,
                working_minutes=working_minutes,
                overtime_minutes=overtime_minutes,
                notes=notes,
            )

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["a.work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if employee_id is not None:
            clauses.append("a.employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    e.employee_id, e.employee_code, e.first_name, e.last_name, e.department,
                    a.work_date, a.check_in, a.check_out, a.status,
                    a.working_minutes, a.overtime_minutes
                FROM attendance a
                JOIN employees e ON e.employee_id = a.employee_id
                WHERE {where}
                ORDER BY a.work_date DESC, e.employee_code ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

            return [
                AttendanceReportRow(
                    employee_id=int(r["employee_id"]),
                    employee_code=r["employee_code"],
                    full_name=f"{r['first_name']} {r['last_name']}".strip(),
                    department=r.get("department"),
                    work_date=r["work_date"],
                    check_in=from_db_datetime(r.get("check_in")),
                    check_out=from_db_datetime(r.get("check_out")),
                    status=AttendanceStatus(r["status"]),
                    working_minutes=int(r.get("working_minutes") or 0),
                    overtime_minutes=int(r.get("overtime_minutes") or 0),
                )
                for r in rows
            ]
