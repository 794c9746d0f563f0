"""Permission checker port - RBAC authorization."""

from typing import Protocol
from uuid import UUID

from moodlog.domain.value_objects import Permission


class PermissionChecker(Protocol):
    """Port for checking whether an actor's role grants a permission."""

    async def check(self, actor_id: UUID, permission: Permission) -> bool: ...
