from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, utc_now
from .core.constants import DEFAULT_ORG_UTC_OFFSET_MINUTES, DEFAULT_STANDARD_SHIFT_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .payroll.service import AttendanceCalculationService
from .permissions.mysql_permission_repository import MySQLPermissionRepository
from .permissions.repository import PermissionRepository
from .permissions.service import PermissionService
from .sessions.calculator.standard_calculator import StandardHoursCalculator
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    sessions_repo: SessionRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    permissions_repo: PermissionRepository

    session_service: SessionService
    attendance_service: AttendanceService
    attendance_calculation_service: AttendanceCalculationService
    permission_service: PermissionService


def wire(
    *,
    conn: Optional[DatabaseConnection],
    employees_repo: EmployeeRepository,
    sessions_repo: SessionRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    permissions_repo: PermissionRepository,
    standard_shift_hours: float = DEFAULT_STANDARD_SHIFT_HOURS,
    utc_offset_minutes: int = DEFAULT_ORG_UTC_OFFSET_MINUTES,
    clock: Clock = utc_now,
) -> Container:
    """Build services on top of any set of repositories (MySQL or in-memory)."""

    attendance_service = AttendanceService(
        attendance_repo,
        strategy_factory=AttendanceStrategyFactory(),
        utc_offset_minutes=utc_offset_minutes,
        clock=clock,
    )
    session_service = SessionService(
        sessions_repo,
        employees_repo,
        calculator=StandardHoursCalculator(standard_shift_hours),
        attendance=attendance_service,
        utc_offset_minutes=utc_offset_minutes,
        clock=clock,
    )
    attendance_calculation_service = AttendanceCalculationService(
        session_service,
        leaves_repo,
        utc_offset_minutes=utc_offset_minutes,
        clock=clock,
    )
    permission_service = PermissionService(permissions_repo)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        permissions_repo=permissions_repo,
        session_service=session_service,
        attendance_service=attendance_service,
        attendance_calculation_service=attendance_calculation_service,
        permission_service=permission_service,
    )


def build_container(
    *,
    db_config: dict,
    standard_shift_hours: float = DEFAULT_STANDARD_SHIFT_HOURS,
    utc_offset_minutes: int = DEFAULT_ORG_UTC_OFFSET_MINUTES,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        conn=conn,
        employees_repo=MySQLEmployeeRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        permissions_repo=MySQLPermissionRepository(conn),
        standard_shift_hours=standard_shift_hours,
        utc_offset_minutes=utc_offset_minutes,
    )
