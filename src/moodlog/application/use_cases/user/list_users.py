"""List users use case."""

from uuid import UUID

from moodlog.application.dto.user_dto import UserOutput
from moodlog.application.ports import PermissionChecker
from moodlog.domain.exceptions import PermissionDenied
from moodlog.domain.value_objects import Permission


class ListUsersUseCase:
    """List users that are not tombstoned."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: UUID) -> list[UserOutput]:
        """Active users, oldest first."""
        if not await self._permission_checker.check(actor_id, Permission.USERS_READ):
            raise PermissionDenied("User does not have read access to users")
        async with self._uow_factory() as uow:
            users = await uow.owners.list_active()
        return [UserOutput.from_entity(u) for u in users if not u.deleted]
