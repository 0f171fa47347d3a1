from __future__ import annotations

import logging
from typing import Any, Mapping

from ..core.enums import Role
from ..core.exceptions import ValidationError
from .model import DEFAULT_PERMISSIONS, MODULE_ACTIONS, Capability, CapabilitySet, PermissionAction, PermissionModule
from .repository import PermissionRepository

logger = logging.getLogger(__name__)


def parse_role(value: str) -> Role:
    try:
        return Role(str(value).upper())
    except ValueError:
        raise ValidationError("Invalid role") from None


class PermissionService:
    """Role -> capability mapping.

    Nothing is cached here: every call reads the store, so a change made by an
    admin applies to the very next request.
    """

    def __init__(self, permissions: PermissionRepository):
        self._permissions = permissions

    def capabilities_for_role(self, role: Role) -> CapabilitySet:
        return CapabilitySet.of(self._permissions.list_for_role(role))

    def grouped_for_role(self, role: str) -> dict[str, list[str]]:
        return self.capabilities_for_role(parse_role(role)).grouped()

    def replace_for_role(self, role: str, permissions: Any) -> CapabilitySet:
        """Replace a role's permissions from a `{module: [action, ...]}` payload."""

        parsed_role = parse_role(role)
        capabilities = self._parse_matrix(permissions)
        self._permissions.replace_for_role(parsed_role, capabilities)
        logger.info("permissions replaced for %s (%d rows)", parsed_role.value, len(capabilities))
        return CapabilitySet.of(capabilities)

    def initialize_defaults(self) -> None:
        self._permissions.replace_all(DEFAULT_PERMISSIONS)
        logger.info("default permissions initialized")

    @staticmethod
    def _parse_matrix(permissions: Any) -> list[Capability]:
        if not isinstance(permissions, Mapping):
            raise ValidationError("Invalid permissions data")

        out: list[Capability] = []
        for module_name, actions in permissions.items():
            try:
                module = PermissionModule(module_name)
            except ValueError:
                raise ValidationError(f"Unknown module: {module_name}") from None
            if not isinstance(actions, (list, tuple)):
                raise ValidationError(f"Permissions for {module_name} must be a list")

            for action_name in actions:
                try:
                    action = PermissionAction(action_name)
                except ValueError:
                    raise ValidationError(f"Unknown permission: {action_name}") from None
                if action not in MODULE_ACTIONS[module]:
                    raise ValidationError(f"{action_name} does not apply to {module_name}")
                cap = Capability(module, action)
                if cap not in out:
                    out.append(cap)
        return out
