from __future__ import annotations

from datetime import date, datetime
from typing import ContextManager, Optional, Protocol, Sequence

from ..attendance.repository import AttendanceWriter
from .model import WorkSession


class SessionTransaction(AttendanceWriter, Protocol):
    """Reads and writes for one employee while that employee is locked.

    Every read reflects writes made earlier in the same transaction. The
    attendance row written through `upsert_from_session` commits or rolls back
    together with the session.
    """

    def get_open(self) -> Optional[WorkSession]:
        raise NotImplementedError

    def get_for_date(self, work_date: date) -> Optional[WorkSession]:
        raise NotImplementedError

    def create(self, *, work_date: date, start_time: datetime) -> WorkSession:
        raise NotImplementedError

    def save(self, session: WorkSession) -> None:
        raise NotImplementedError


class SessionRepository(Protocol):
    def lock_employee(self, employee_id: int) -> ContextManager[SessionTransaction]:
        """Serialize writers for one employee; commit on exit, roll back on error."""

        raise NotImplementedError

    def get_open(self, employee_id: int) -> Optional[WorkSession]:
        raise NotImplementedError

    def get_for_date(self, employee_id: int, work_date: date) -> Optional[WorkSession]:
        raise NotImplementedError

    def list_for_range(self, employee_id: int, start_date: date, end_date: date) -> Sequence[WorkSession]:
        raise NotImplementedError
