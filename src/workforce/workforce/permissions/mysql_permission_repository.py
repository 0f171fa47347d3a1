from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Capability, PermissionAction, PermissionModule
from .repository import PermissionRepository

logger = logging.getLogger(__name__)


class MySQLPermissionRepository(PermissionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_role(self, role: Role) -> Sequence[Capability]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT module, action FROM role_permissions WHERE role=%s", (role.value,))
            out = []
            for r in fetchall(cur):
                try:
                    out.append(Capability(PermissionModule(r["module"]), PermissionAction(r["action"])))
                except ValueError:
                    logger.warning("ignoring unknown permission row %s/%s for %s", r["module"], r["action"], role.value)
            return out

    def replace_for_role(self, role: Role, capabilities: Iterable[Capability]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            self._replace(cur, role, capabilities)

    def replace_all(self, matrix: Mapping[Role, Iterable[Capability]]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM role_permissions")
            for role, capabilities in matrix.items():
                self._replace(cur, role, capabilities)

    @staticmethod
    def _replace(cur, role: Role, capabilities: Iterable[Capability]) -> None:
        cur.execute("DELETE FROM role_permissions WHERE role=%s", (role.value,))
        rows = [(role.value, c.module.value, c.action.value) for c in capabilities]
        if rows:
            cur.executemany("INSERT INTO role_permissions(role, module, action) VALUES(%s,%s,%s)", rows)
