from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Employee role used for permission lookups."""

    ADMIN = "ADMIN"
    HR_OFFICER = "HR_OFFICER"
    PAYROLL_OFFICER = "PAYROLL_OFFICER"
    EMPLOYEE = "EMPLOYEE"


ADMIN_ROLES = frozenset({Role.ADMIN, Role.HR_OFFICER, Role.PAYROLL_OFFICER})


class EmploymentStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    TERMINATED = "TERMINATED"


class SessionState(str, Enum):
    """Lifecycle of an employee's work session for a day."""

    NO_SESSION = "NO_SESSION"
    ACTIVE = "ACTIVE"
    ON_BREAK = "ON_BREAK"
    CLOSED = "CLOSED"


class AttendanceStatus(str, Enum):
    """Normalized daily attendance status stored in the database."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    HALF_DAY = "HALF_DAY"
    LATE = "LATE"
    ON_LEAVE = "ON_LEAVE"
    HOLIDAY = "HOLIDAY"
    WEEKEND = "WEEKEND"


class LeaveType(str, Enum):
    PAID_TIME_OFF = "PAID_TIME_OFF"
    SICK_LEAVE = "SICK_LEAVE"
    UNPAID_LEAVE = "UNPAID_LEAVE"


PAID_LEAVE_TYPES = frozenset({LeaveType.PAID_TIME_OFF, LeaveType.SICK_LEAVE})


class LeaveStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
