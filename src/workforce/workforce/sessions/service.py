from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..attendance.service import AttendanceService
from ..common.datetime_utils import Clock, as_utc, local_work_date, minutes_between, utc_now
from ..core.constants import DEFAULT_ORG_UTC_OFFSET_MINUTES
from ..core.enums import SessionState
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .calculator.base import WorkingHoursCalculator
from .calculator.standard_calculator import StandardHoursCalculator
from .model import ActiveSessionSnapshot, BreakResult, StartResult, StopResult, TodayHours, WorkSession
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class SessionService:
    """Use cases: check-in, breaks, check-out and the read views over them.

    Every transition runs inside `SessionRepository.lock_employee`, so the
    state check and the write happen under the same per-employee lock. All
    guards raise before anything is written.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        employees: EmployeeRepository,
        *,
        calculator: WorkingHoursCalculator | None = None,
        attendance: AttendanceService | None = None,
        utc_offset_minutes: int = DEFAULT_ORG_UTC_OFFSET_MINUTES,
        clock: Clock = utc_now,
    ):
        self._sessions = sessions
        self._employees = employees
        self._calculator = calculator or StandardHoursCalculator()
        self._attendance = attendance
        self._offset = int(utc_offset_minutes)
        self._clock = clock

    def _now(self, now: Optional[datetime]) -> datetime:
        return as_utc(now or self._clock())

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def today(self, *, now: Optional[datetime] = None) -> date:
        return local_work_date(self._now(now), self._offset)

    def start_session(self, employee_id: int, *, now: Optional[datetime] = None) -> StartResult:
        employee = self._require_employee(employee_id)
        if not employee.is_active:
            raise AuthorizationError("Only active employees can start a work session")

        now = self._now(now)
        work_date = local_work_date(now, self._offset)

        with self._sessions.lock_employee(employee.employee_id) as tx:
            open_session = tx.get_open()
            if open_session:
                if open_session.work_date == work_date:
                    raise ConflictError("You already have an active session")
                raise ConflictError(
                    f"Your session from {open_session.work_date.isoformat()} is still open, stop it first"
                )
            if tx.get_for_date(work_date):
                raise ConflictError("A work session was already recorded for today")

            session = tx.create(work_date=work_date, start_time=now)

        logger.info(
            "session started",
            extra={"employee_id": employee.employee_id, "session_id": session.session_id},
        )
        return StartResult(session_id=session.session_id, work_date=session.work_date, start_time=session.start_time)

    def stop_session(self, employee_id: int, *, now: Optional[datetime] = None) -> StopResult:
        now = self._now(now)

        with self._sessions.lock_employee(employee_id) as tx:
            session = tx.get_open()
            if not session:
                raise NotFoundError("No active session found to stop")

            # Stopping while on break closes the break at the stop time.
            if session.on_break:
                session = self._close_break(session, now)

            breakdown = self._calculator.breakdown(
                start=session.start_time,
                end=now,
                break_minutes=session.total_break_minutes,
            )
            session = replace(
                session,
                end_time=now,
                working_minutes=breakdown.working_minutes,
                overtime_minutes=breakdown.overtime_minutes,
            )
            tx.save(session)
            # The attendance row commits or rolls back with the session.
            status = self._attendance.record_session(session, writer=tx) if self._attendance else None

        logger.info(
            "session stopped after %s working minutes",
            session.working_minutes,
            extra={"employee_id": employee_id, "session_id": session.session_id},
        )

        return StopResult(
            session_id=session.session_id,
            work_date=session.work_date,
            start_time=session.start_time,
            end_time=now,
            total_break_minutes=session.total_break_minutes,
            working_minutes=breakdown.working_minutes,
            overtime_minutes=breakdown.overtime_minutes,
            attendance_status=status,
        )

    def start_break(self, employee_id: int, *, now: Optional[datetime] = None) -> BreakResult:
        now = self._now(now)

        with self._sessions.lock_employee(employee_id) as tx:
            session = tx.get_open()
            if not session:
                raise ConflictError("No active session to take a break")
            if session.on_break:
                raise ConflictError("Break already in progress")

            session = replace(session, break_start_time=now, break_end_time=None)
            tx.save(session)

        logger.info("break started", extra={"employee_id": employee_id, "session_id": session.session_id})
        return BreakResult(
            session_id=session.session_id,
            break_start_time=now,
            break_end_time=None,
            break_minutes=0,
            total_break_minutes=session.total_break_minutes,
        )

    def end_break(self, employee_id: int, *, now: Optional[datetime] = None) -> BreakResult:
        now = self._now(now)

        with self._sessions.lock_employee(employee_id) as tx:
            session = tx.get_open()
            if not session:
                raise NotFoundError("No active session found")
            if not session.on_break:
                raise NotFoundError("No break in progress")

            closed = self._close_break(session, now)
            tx.save(closed)

        logger.info("break ended", extra={"employee_id": employee_id, "session_id": closed.session_id})
        return BreakResult(
            session_id=closed.session_id,
            break_start_time=closed.break_start_time,
            break_end_time=closed.break_end_time,
            break_minutes=closed.total_break_minutes - session.total_break_minutes,
            total_break_minutes=closed.total_break_minutes,
        )

    @staticmethod
    def _close_break(session: WorkSession, now: datetime) -> WorkSession:
        minutes = max(minutes_between(session.break_start_time, now), 0)
        return replace(
            session,
            break_end_time=now,
            total_break_minutes=session.total_break_minutes + minutes,
        )

    def worked_minutes(self, session: WorkSession, *, now: Optional[datetime] = None) -> int:
        """Working minutes of a closed session, or elapsed-so-far for an open one."""

        if not session.is_open:
            return int(session.working_minutes or 0)

        now = self._now(now)
        break_minutes = session.total_break_minutes
        if session.on_break:
            break_minutes += max(minutes_between(session.break_start_time, now), 0)
        return self._calculator.working_minutes(start=session.start_time, end=now, break_minutes=break_minutes)

    def get_active(self, employee_id: int, *, now: Optional[datetime] = None) -> ActiveSessionSnapshot:
        """Read-only view of the employee's current state; never writes."""

        now = self._now(now)
        session = self._sessions.get_open(employee_id)
        if session:
            current_break = max(minutes_between(session.break_start_time, now), 0) if session.on_break else 0
            return ActiveSessionSnapshot(
                state=session.state,
                session=session,
                elapsed_work_minutes=self.worked_minutes(session, now=now),
                current_break_minutes=current_break,
            )

        closed = self._sessions.get_for_date(employee_id, local_work_date(now, self._offset))
        if closed:
            return ActiveSessionSnapshot(
                state=SessionState.CLOSED,
                session=closed,
                elapsed_work_minutes=int(closed.working_minutes or 0),
            )
        return ActiveSessionSnapshot(state=SessionState.NO_SESSION, session=None)

    def today_sessions(self, employee_id: int, *, now: Optional[datetime] = None) -> Sequence[WorkSession]:
        today = self.today(now=now)
        return self._sessions.list_for_range(employee_id, today, today)

    def today_hours(self, employee_id: int, *, now: Optional[datetime] = None) -> TodayHours:
        now = self._now(now)
        sessions = self.today_sessions(employee_id, now=now)
        return TodayHours(
            total_minutes=sum(self.worked_minutes(s, now=now) for s in sessions),
            has_active_session=any(s.is_open for s in sessions),
            session_count=len(sessions),
        )

    def worked_minutes_by_day(
        self,
        employee_id: int,
        start_date: date,
        end_date: date,
        *,
        now: Optional[datetime] = None,
    ) -> dict[date, int]:
        now = self._now(now)
        totals: dict[date, int] = {}
        for s in self._sessions.list_for_range(employee_id, start_date, end_date):
            totals[s.work_date] = totals.get(s.work_date, 0) + self.worked_minutes(s, now=now)
        return totals
