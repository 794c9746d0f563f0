"""Delete day use case."""

from uuid import UUID

from moodlog.application.ports import PermissionChecker
from moodlog.application.use_cases.authorization import authorize
from moodlog.application.use_cases.owner_mutation import OwnerMutationRunner
from moodlog.domain.value_objects import Permission


class DeleteDayUseCase:
    """Soft-delete a day, freeing its date."""

    def __init__(
        self,
        runner: OwnerMutationRunner,
        permission_checker: PermissionChecker,
    ) -> None:
        self._runner = runner
        self._permission_checker = permission_checker

    async def execute(self, actor_id: UUID, owner_id: UUID, date: str) -> bool:
        """Tombstone the day dated ``date``. Returns False when already tombstoned."""
        await authorize(
            self._permission_checker,
            actor_id,
            owner_id,
            Permission.DAYS_WRITE_OWN,
            Permission.DAYS_WRITE_ANY,
            "write",
        )
        return await self._runner.run(owner_id, lambda record: record.soft_delete_day(date))
