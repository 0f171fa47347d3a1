from __future__ import annotations

import logging
from functools import wraps

from flask import g, request

from ..common.web import current_employee, get_container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from .model import CapabilitySet, PermissionAction, PermissionModule

logger = logging.getLogger("security")


def current_capabilities() -> CapabilitySet:
    """Capabilities of the current employee's role, loaded once per request."""

    if "capabilities" not in g:
        employee = current_employee()
        g.capabilities = get_container().permission_service.capabilities_for_role(employee.role)
    return g.capabilities


def _deny(message: str):
    employee = current_employee()
    logger.warning(
        "forbidden",
        extra={"employee_id": employee.employee_id, "path": request.path, "method": request.method},
    )
    raise AuthorizationError(message)


def require_permission(module: PermissionModule, action: PermissionAction):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not current_capabilities().can(module, action):
                _deny(f"You don't have permission to {action.value.lower()} {module.value.lower()}")
            return view(*args, **kwargs)

        return wrapper

    return decorator


def require_roles(*roles: Role):
    allowed = frozenset(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if current_employee().role not in allowed:
                _deny("Forbidden")
            return view(*args, **kwargs)

        return wrapper

    return decorator
