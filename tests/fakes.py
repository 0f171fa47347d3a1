"""In-memory repositories and a settable clock for service and controller tests."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import replace
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from src.workforce.workforce.attendance.model import AttendanceRecord, AttendanceReportRow
from src.workforce.workforce.container import Container, wire
from src.workforce.workforce.core.enums import AttendanceStatus, EmploymentStatus, LeaveStatus, LeaveType, Role
from src.workforce.workforce.core.exceptions import ConflictError, NotFoundError
from src.workforce.workforce.employees.model import Employee
from src.workforce.workforce.leaves.model import LeaveRequest
from src.workforce.workforce.permissions.model import DEFAULT_PERMISSIONS, Capability
from src.workforce.workforce.sessions.model import WorkSession


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now

    def set(self, now: datetime) -> datetime:
        self.now = now
        return now


def make_employee(
    employee_id: int = 1,
    *,
    role: Role = Role.EMPLOYEE,
    status: EmploymentStatus = EmploymentStatus.ACTIVE,
    code: Optional[str] = None,
    department: Optional[str] = "Engineering",
) -> Employee:
    return Employee(
        employee_id=employee_id,
        user_id=f"user-{employee_id}",
        employee_code=code or f"EMP{employee_id:03d}",
        first_name="Emp",
        last_name=str(employee_id),
        role=role,
        employment_status=status,
        department=department,
    )


class InMemoryEmployees:
    def __init__(self, employees: Iterable[Employee] = ()):
        self._by_id = {e.employee_id: e for e in employees}

    def add(self, employee: Employee) -> Employee:
        self._by_id[employee.employee_id] = employee
        return employee

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def get_by_user_id(self, user_id: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.user_id == user_id), None)


class _InMemorySessionTransaction:
    """Stages writes and publishes them only when the lock block exits cleanly."""

    def __init__(self, repo: "InMemorySessions", employee_id: int):
        self._repo = repo
        self._employee_id = employee_id
        self.staged: dict[int, WorkSession] = {}
        self.attendance_writes: list[dict] = []

    def _rows(self) -> list[WorkSession]:
        merged = {sid: s for sid, s in self._repo.rows.items() if s.employee_id == self._employee_id}
        merged.update(self.staged)
        return list(merged.values())

    def get_open(self) -> Optional[WorkSession]:
        return next((s for s in self._rows() if s.is_open), None)

    def get_for_date(self, work_date: date) -> Optional[WorkSession]:
        return next((s for s in self._rows() if s.work_date == work_date), None)

    def create(self, *, work_date: date, start_time: datetime) -> WorkSession:
        if self.get_for_date(work_date):
            raise ConflictError("Record already exists")
        session = WorkSession(
            session_id=self._repo.next_id(),
            employee_id=self._employee_id,
            work_date=work_date,
            start_time=start_time,
        )
        self.staged[session.session_id] = session
        return session

    def save(self, session: WorkSession) -> None:
        current = self._repo.rows.get(session.session_id) or self.staged.get(session.session_id)
        if current is None:
            raise NotFoundError("Session not found")
        # start_time is written once at check-in.
        self.staged[session.session_id] = replace(session, start_time=current.start_time)

    def upsert_from_session(self, **row) -> None:
        self.attendance_writes.append(row)


class InMemorySessions:
    def __init__(self, sessions: Iterable[WorkSession] = (), *, attendance: Optional["InMemoryAttendance"] = None):
        self._attendance = attendance
        self.rows: dict[int, WorkSession] = {s.session_id: s for s in sessions}
        self._ids = max(self.rows, default=0)
        self._guard = threading.Lock()
        self._locks: dict[int, threading.Lock] = {}
        self.commits = 0

    def next_id(self) -> int:
        with self._guard:
            self._ids += 1
            return self._ids

    @contextmanager
    def lock_employee(self, employee_id: int):
        with self._guard:
            lock = self._locks.setdefault(employee_id, threading.Lock())
        with lock:
            tx = _InMemorySessionTransaction(self, employee_id)
            yield tx
            for row in tx.attendance_writes:
                self._attendance.upsert_from_session(**row)
            self.rows.update(tx.staged)
            self.commits += 1

    def get_open(self, employee_id: int) -> Optional[WorkSession]:
        return next((s for s in self.rows.values() if s.employee_id == employee_id and s.is_open), None)

    def get_for_date(self, employee_id: int, work_date: date) -> Optional[WorkSession]:
        return next(
            (s for s in self.rows.values() if s.employee_id == employee_id and s.work_date == work_date),
            None,
        )

    def list_for_range(self, employee_id: int, start_date: date, end_date: date) -> list[WorkSession]:
        rows = [
            s for s in self.rows.values() if s.employee_id == employee_id and start_date <= s.work_date <= end_date
        ]
        return sorted(rows, key=lambda s: s.start_time)


class InMemoryAttendance:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self._by_key: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        self._by_key[(record.employee_id, record.work_date)] = record
        self._id = max(self._id, record.attendance_id)
        return record

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_key.get((employee_id, work_date))

    def list_for_employee(self, employee_id: int, start_date: date, end_date: date) -> list[AttendanceRecord]:
        rows = [
            r for (eid, d), r in self._by_key.items() if eid == employee_id and start_date <= d <= end_date
        ]
        return sorted(rows, key=lambda r: r.work_date, reverse=True)

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
        existing = self._by_key.get((employee_id, work_date))
        if existing:
            self._by_key[(employee_id, work_date)] = replace(
                existing,
                check_out=check_out,
                status=status,
                working_minutes=working_minutes,
                overtime_minutes=overtime_minutes,
                notes=notes,
            )
            return

        self._id += 1
        self._by_key[(employee_id, work_date)] = AttendanceRecord(
            attendance_id=self._id,
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
    ) -> list[AttendanceReportRow]:
        out = []
        for (eid, d), r in sorted(self._by_key.items(), key=lambda kv: (kv[0][1], kv[0][0])):
            if not (start_date <= d <= end_date) or (employee_id is not None and eid != employee_id):
                continue
            emp = self._employees.get_by_id(eid)
            out.append(
                AttendanceReportRow(
                    employee_id=eid,
                    employee_code=emp.employee_code,
                    full_name=emp.full_name,
                    department=emp.department,
                    work_date=d,
                    check_in=r.check_in,
                    check_out=r.check_out,
                    status=r.status,
                    working_minutes=r.working_minutes,
                    overtime_minutes=r.overtime_minutes,
                )
            )
        return out


class InMemoryLeaves:
    def __init__(self, leaves: Iterable[LeaveRequest] = ()):
        self._leaves = list(leaves)

    def add(
        self,
        employee_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        days: str,
        status: LeaveStatus = LeaveStatus.APPROVED,
    ) -> LeaveRequest:
        leave = LeaveRequest(
            leave_id=len(self._leaves) + 1,
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            total_days=Decimal(days),
            status=status,
        )
        self._leaves.append(leave)
        return leave

    def find_approved_in_range(self, employee_id: int, start_date: date, end_date: date) -> list[LeaveRequest]:
        return [
            l
            for l in self._leaves
            if l.employee_id == employee_id
            and l.status == LeaveStatus.APPROVED
            and l.start_date <= end_date
            and l.end_date >= start_date
        ]


class InMemoryPermissions:
    def __init__(self, matrix: Optional[Mapping[Role, Iterable[Capability]]] = None):
        source = DEFAULT_PERMISSIONS if matrix is None else matrix
        self._rows: dict[Role, set[Capability]] = {role: set(caps) for role, caps in source.items()}
        self.reads = 0

    def list_for_role(self, role: Role) -> list[Capability]:
        self.reads += 1
        return sorted(self._rows.get(role, set()), key=lambda c: (c.module.value, c.action.value))

    def replace_for_role(self, role: Role, capabilities: Iterable[Capability]) -> None:
        self._rows[role] = set(capabilities)

    def replace_all(self, matrix: Mapping[Role, Iterable[Capability]]) -> None:
        self._rows = {role: set(caps) for role, caps in matrix.items()}


def build_test_container(
    clock: FakeClock,
    *,
    employees: Iterable[Employee] = (),
    standard_shift_hours: float = 8,
    utc_offset_minutes: int = 0,
    permissions: Optional[InMemoryPermissions] = None,
    leaves: Optional[InMemoryLeaves] = None,
) -> Container:
    employees_repo = InMemoryEmployees(employees)
    attendance_repo = InMemoryAttendance(employees_repo)
    return wire(
        conn=None,
        employees_repo=employees_repo,
        sessions_repo=InMemorySessions(attendance=attendance_repo),
        attendance_repo=attendance_repo,
        leaves_repo=leaves or InMemoryLeaves(),
        permissions_repo=permissions or InMemoryPermissions(),
        standard_shift_hours=standard_shift_hours,
        utc_offset_minutes=utc_offset_minutes,
        clock=clock,
    )
