from __future__ import annotations

from typing import Iterable, Mapping, Protocol, Sequence

from ..core.enums import Role
from .model import Capability


class PermissionRepository(Protocol):
    def list_for_role(self, role: Role) -> Sequence[Capability]:
        raise NotImplementedError

    def replace_for_role(self, role: Role, capabilities: Iterable[Capability]) -> None:
        """Swap a role's rows atomically."""

        raise NotImplementedError

    def replace_all(self, matrix: Mapping[Role, Iterable[Capability]]) -> None:
        raise NotImplementedError
