from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_minutes, minutes_to_hours
from ..core.enums import AttendanceStatus, SessionState


@dataclass(frozen=True)
class WorkSession:
    """Domain entity: one employee's work session for a local calendar day.

    `break_start_time`/`break_end_time` hold the open or most recent break.
    Minutes fields are the source of truth; hours are derived for display.
    """

    session_id: int
    employee_id: int
    work_date: date
    start_time: datetime
    end_time: Optional[datetime] = None
    break_start_time: Optional[datetime] = None
    break_end_time: Optional[datetime] = None
    total_break_minutes: int = 0
    working_minutes: Optional[int] = None
    overtime_minutes: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    @property
    def on_break(self) -> bool:
        return self.is_open and self.break_start_time is not None and self.break_end_time is None

    @property
    def state(self) -> SessionState:
        if not self.is_open:
            return SessionState.CLOSED
        if self.on_break:
            return SessionState.ON_BREAK
        return SessionState.ACTIVE

    @property
    def working_hours(self) -> Optional[float]:
        if self.working_minutes is None:
            return None
        return minutes_to_hours(self.working_minutes)

    @property
    def overtime_hours(self) -> Optional[float]:
        if self.overtime_minutes is None:
            return None
        return minutes_to_hours(self.overtime_minutes)


@dataclass(frozen=True)
class ActiveSessionSnapshot:
    """Read model for the "what am I doing now" query."""

    state: SessionState
    session: Optional[WorkSession]
    elapsed_work_minutes: int = 0
    current_break_minutes: int = 0

    @property
    def has_active_session(self) -> bool:
        return self.session is not None and self.session.is_open


@dataclass(frozen=True)
class StartResult:
    session_id: int
    work_date: date
    start_time: datetime


@dataclass(frozen=True)
class StopResult:
    session_id: int
    work_date: date
    start_time: datetime
    end_time: datetime
    total_break_minutes: int
    working_minutes: int
    overtime_minutes: int
    attendance_status: Optional[AttendanceStatus] = None

    @property
    def working_hours(self) -> float:
        return minutes_to_hours(self.working_minutes)

    @property
    def overtime_hours(self) -> float:
        return minutes_to_hours(self.overtime_minutes)


@dataclass(frozen=True)
class BreakResult:
    session_id: int
    break_start_time: datetime
    break_end_time: Optional[datetime]
    break_minutes: int
    total_break_minutes: int


@dataclass(frozen=True)
class TodayHours:
    total_minutes: int
    has_active_session: bool
    session_count: int

    @property
    def hours(self) -> int:
        return self.total_minutes // 60

    @property
    def minutes(self) -> int:
        return self.total_minutes % 60

    @property
    def formatted(self) -> str:
        return format_minutes(self.total_minutes)
