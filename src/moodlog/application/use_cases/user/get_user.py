"""Get user use case."""

from uuid import UUID

from moodlog.application.dto.user_dto import UserOutput
from moodlog.application.ports import PermissionChecker
from moodlog.domain.exceptions import NotFound, PermissionDenied
from moodlog.domain.value_objects import Permission


class GetUserUseCase:
    """Get a user's profile. Anyone may read their own."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: UUID, owner_id: UUID) -> UserOutput:
        """Get user by id."""
        if actor_id != owner_id:
            has_read = await self._permission_checker.check(actor_id, Permission.USERS_READ)
            if not has_read:
                raise PermissionDenied("User does not have read access to users")

        async with self._uow_factory() as uow:
            user = await uow.owners.get_by_id(owner_id)
            if not user or user.deleted:
                raise NotFound("User", str(owner_id))
            return UserOutput.from_entity(user)
