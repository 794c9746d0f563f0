"""Delete user use case."""

from uuid import UUID

from moodlog.application.ports import PermissionChecker
from moodlog.application.use_cases.authorization import authorize
from moodlog.application.use_cases.owner_mutation import OwnerMutationRunner
from moodlog.domain.value_objects import Permission


class DeleteUserUseCase:
    """Soft-delete a whole account."""

    def __init__(
        self,
        runner: OwnerMutationRunner,
        permission_checker: PermissionChecker,
    ) -> None:
        self._runner = runner
        self._permission_checker = permission_checker

    async def execute(self, actor_id: UUID, owner_id: UUID) -> None:
        """Tombstone account. A tombstoned account is no longer found."""
        await authorize(
            self._permission_checker,
            actor_id,
            owner_id,
            Permission.ACCOUNT_DELETE_OWN,
            Permission.USERS_DELETE,
            "delete",
        )
        await self._runner.run(owner_id, lambda record: record.soft_delete())
