from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping

from ..core.enums import Role


class PermissionModule(str, Enum):
    DASHBOARD = "Dashboard"
    EMPLOYEES = "Employees"
    ATTENDANCE = "Attendance"
    TIME_OFF = "Time Off"
    PAYROLL = "Payroll"
    REPORTS = "Reports"
    SETTINGS = "Settings"
    PROFILE = "Profile"


class PermissionAction(str, Enum):
    VIEW = "View"
    CREATE = "Create"
    EDIT = "Edit"
    DELETE = "Delete"
    APPROVE = "Approve"
    EXPORT = "Export"
    EXPORT_DATA = "Export Data"
    PROCESS = "Process"
    GENERATE = "Generate"
    SCHEDULE = "Schedule"
    MANAGE_USERS = "Manage Users"
    SYSTEM_CONFIGURATION = "System Configuration"


M = PermissionModule
A = PermissionAction

# The closed set of actions each module understands.
MODULE_ACTIONS: Mapping[PermissionModule, frozenset[PermissionAction]] = {
    M.DASHBOARD: frozenset({A.VIEW, A.EXPORT_DATA}),
    M.EMPLOYEES: frozenset({A.VIEW, A.CREATE, A.EDIT, A.DELETE, A.EXPORT}),
    M.ATTENDANCE: frozenset({A.VIEW, A.CREATE, A.EDIT, A.DELETE, A.APPROVE, A.EXPORT}),
    M.TIME_OFF: frozenset({A.VIEW, A.CREATE, A.EDIT, A.DELETE, A.APPROVE, A.EXPORT}),
    M.PAYROLL: frozenset({A.VIEW, A.CREATE, A.EDIT, A.DELETE, A.PROCESS, A.EXPORT}),
    M.REPORTS: frozenset({A.VIEW, A.GENERATE, A.EXPORT, A.SCHEDULE}),
    M.SETTINGS: frozenset({A.VIEW, A.EDIT, A.MANAGE_USERS, A.SYSTEM_CONFIGURATION}),
    M.PROFILE: frozenset({A.VIEW, A.EDIT}),
}


@dataclass(frozen=True)
class Capability:
    module: PermissionModule
    action: PermissionAction


@dataclass(frozen=True)
class CapabilitySet:
    """What one role may do, built fresh for each request."""

    capabilities: frozenset[Capability] = field(default_factory=frozenset)

    @classmethod
    def of(cls, capabilities: Iterable[Capability]) -> "CapabilitySet":
        return cls(frozenset(capabilities))

    def can(self, module: PermissionModule, action: PermissionAction) -> bool:
        return Capability(module, action) in self.capabilities

    def can_any(self, checks: Iterable[tuple[PermissionModule, PermissionAction]]) -> bool:
        return any(self.can(module, action) for module, action in checks)

    def grouped(self) -> dict[str, list[str]]:
        out: dict[str, list[str]] = {}
        for cap in sorted(self.capabilities, key=lambda c: (c.module.value, c.action.value)):
            out.setdefault(cap.module.value, []).append(cap.action.value)
        return out


def _caps(matrix: Mapping[PermissionModule, Iterable[PermissionAction]]) -> frozenset[Capability]:
    return frozenset(Capability(m, a) for m, actions in matrix.items() for a in actions)


DEFAULT_PERMISSIONS: Mapping[Role, frozenset[Capability]] = {
    Role.EMPLOYEE: _caps({
        M.DASHBOARD: [A.VIEW],
        M.EMPLOYEES: [A.VIEW],
        M.ATTENDANCE: [A.VIEW, A.CREATE],
        M.TIME_OFF: [A.VIEW, A.CREATE],
        M.PAYROLL: [A.VIEW],
        M.REPORTS: [A.VIEW],
        M.PROFILE: [A.VIEW, A.EDIT],
    }),
    Role.HR_OFFICER: _caps({
        M.DASHBOARD: [A.VIEW, A.EXPORT_DATA],
        M.EMPLOYEES: [A.VIEW, A.CREATE, A.EDIT, A.EXPORT],
        M.ATTENDANCE: [A.VIEW, A.CREATE, A.EDIT, A.APPROVE, A.EXPORT],
        M.TIME_OFF: [A.VIEW, A.CREATE, A.EDIT, A.APPROVE, A.EXPORT],
        M.PAYROLL: [A.VIEW],
        M.REPORTS: [A.VIEW, A.GENERATE, A.EXPORT],
        M.SETTINGS: [A.VIEW],
        M.PROFILE: [A.VIEW, A.EDIT],
    }),
    Role.PAYROLL_OFFICER: _caps({
        M.DASHBOARD: [A.VIEW, A.EXPORT_DATA],
        M.EMPLOYEES: [A.VIEW, A.EXPORT],
        M.ATTENDANCE: [A.VIEW, A.EXPORT],
        M.TIME_OFF: [A.VIEW, A.EXPORT],
        M.PAYROLL: [A.VIEW, A.CREATE, A.EDIT, A.PROCESS, A.EXPORT],
        M.REPORTS: [A.VIEW, A.GENERATE, A.EXPORT],
        M.SETTINGS: [A.VIEW],
        M.PROFILE: [A.VIEW, A.EDIT],
    }),
    Role.ADMIN: _caps({module: actions for module, actions in MODULE_ACTIONS.items()}),
}
