from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import Iterator, Optional, Sequence

from ..attendance.mysql_attendance_repository import upsert_attendance_row
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import WorkSession
from .repository import SessionRepository, SessionTransaction

_COLUMNS = """
    session_id, employee_id, work_date, start_time, end_time,
    break_start_time, break_end_time, total_break_minutes,
    working_minutes, overtime_minutes
"""


def _to_session(r: dict) -> WorkSession:
    return WorkSession(
        session_id=int(r["session_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        start_time=from_db_datetime(r["start_time"]),
        end_time=from_db_datetime(r.get("end_time")),
        break_start_time=from_db_datetime(r.get("break_start_time")),
        break_end_time=from_db_datetime(r.get("break_end_time")),
        total_break_minutes=int(r.get("total_break_minutes") or 0),
        working_minutes=None if r.get("working_minutes") is None else int(r["working_minutes"]),
        overtime_minutes=None if r.get("overtime_minutes") is None else int(r["overtime_minutes"]),
    )


class _MySQLSessionTransaction(SessionTransaction):
    def __init__(self, cur, employee_id: int):
        self.cur = cur
        self.employee_id = employee_id

    def get_open(self) -> Optional[WorkSession]:
        self.cur.execute(
            f"""
            SELECT {_COLUMNS}
            FROM work_sessions
            WHERE employee_id=%s AND end_time IS NULL
            ORDER BY start_time DESC
            LIMIT 1
            FOR UPDATE
            """,
            (self.employee_id,),
        )
        r = fetchone(self.cur)
        return _to_session(r) if r else None

    def get_for_date(self, work_date: date) -> Optional[WorkSession]:
        self.cur.execute(
            f"SELECT {_COLUMNS} FROM work_sessions WHERE employee_id=%s AND work_date=%s FOR UPDATE",
            (self.employee_id, work_date),
        )
        r = fetchone(self.cur)
        return _to_session(r) if r else None

    def create(self, *, work_date: date, start_time: datetime) -> WorkSession:
        self.cur.execute(
            """
            INSERT INTO work_sessions(employee_id, work_date, start_time, total_break_minutes)
            VALUES(%s,%s,%s,0)
            """,
            (self.employee_id, work_date, to_db_datetime(start_time)),
        )
        return WorkSession(
            session_id=int(self.cur.lastrowid),
            employee_id=self.employee_id,
            work_date=work_date,
            start_time=start_time,
        )

    def save(self, session: WorkSession) -> None:
        # start_time and work_date are never rewritten.
        self.cur.execute(
            """
            UPDATE work_sessions
            SET end_time=%s, break_start_time=%s, break_end_time=%s,
                total_break_minutes=%s, working_minutes=%s, overtime_minutes=%s
            WHERE session_id=%s AND employee_id=%s
            """,
            (
                to_db_datetime(session.end_time),
                to_db_datetime(session.break_start_time),
                to_db_datetime(session.break_end_time),
                int(session.total_break_minutes),
                session.working_minutes,
                session.overtime_minutes,
                session.session_id,
                self.employee_id,
            ),
        )

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
        if int(employee_id) != self.employee_id:
            raise ValidationError("Attendance row belongs to another employee")
        upsert_attendance_row(
            self.cur,
            employee_id=self.employee_id,
            work_date=work_date,
            check_in=check_in,
            check_out=check_out,
            status=status,
            working_minutes=working_minutes,
            overtime_minutes=overtime_minutes,
            notes=notes,
        )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def lock_employee(self, employee_id: int) -> Iterator[SessionTransaction]:
        with db_cursor(self._conn_factory) as (_, cur):
            # Row lock on the employee serializes every session writer for them.
            cur.execute("SELECT employee_id FROM employees WHERE employee_id=%s FOR UPDATE", (int(employee_id),))
            if not fetchone(cur):
                raise NotFoundError("Employee not found")
            yield _MySQLSessionTransaction(cur=cur, employee_id=int(employee_id))

    def get_open(self, employee_id: int) -> Optional[WorkSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_sessions
                WHERE employee_id=%s AND end_time IS NULL
                ORDER BY start_time DESC
                LIMIT 1
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def get_for_date(self, employee_id: int, work_date: date) -> Optional[WorkSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM work_sessions WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def list_for_range(self, employee_id: int, start_date: date, end_date: date) -> Sequence[WorkSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_sessions
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC, start_time ASC
                """,
                (int(employee_id), start_date, end_date),
            )
            return [_to_session(r) for r in fetchall(cur)]
