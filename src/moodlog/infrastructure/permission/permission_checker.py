"""Permission checker implementation - resolves the actor's role closure."""

from uuid import UUID

from moodlog.domain.services import OwnerPolicy
from moodlog.domain.value_objects import Permission


class RolePermissionChecker:
    """Checks actor permissions against the role registry closure."""

    def __init__(self, unit_of_work_factory: type, policy: OwnerPolicy) -> None:
        self._uow_factory = unit_of_work_factory
        self._policy = policy

    async def check(self, actor_id: UUID, permission: Permission) -> bool:
        """Check if actor's role grants permission. Unknown or deleted actors get nothing."""
        async with self._uow_factory() as uow:
            actor = await uow.owners.get_by_id(actor_id)
            if not actor or actor.deleted:
                return False
            return self._policy.bind(actor).has_permission(permission)
