"""Delete emotion use case."""

from uuid import UUID

from moodlog.application.ports import PermissionChecker
from moodlog.application.use_cases.authorization import authorize
from moodlog.application.use_cases.owner_mutation import OwnerMutationRunner
from moodlog.domain.value_objects import Permission


class DeleteEmotionUseCase:
    """Soft-delete an emotion. Days keep their references to it."""

    def __init__(
        self,
        runner: OwnerMutationRunner,
        permission_checker: PermissionChecker,
    ) -> None:
        self._runner = runner
        self._permission_checker = permission_checker

    async def execute(self, actor_id: UUID, owner_id: UUID, emotion_id: UUID) -> bool:
        """Tombstone emotion. Returns False when it was already tombstoned."""
        await authorize(
            self._permission_checker,
            actor_id,
            owner_id,
            Permission.EMOTIONS_WRITE_OWN,
            Permission.EMOTIONS_WRITE_ANY,
            "write",
        )
        return await self._runner.run(
            owner_id, lambda record: record.soft_delete_emotion(emotion_id)
        )
