"""Add emotion use case."""

from uuid import UUID

from moodlog.application.dto.emotion_dto import EmotionCreateInput, EmotionOutput
from moodlog.application.ports import PermissionChecker
from moodlog.application.use_cases.authorization import authorize
from moodlog.application.use_cases.owner_mutation import OwnerMutationRunner
from moodlog.domain.value_objects import Permission


class AddEmotionUseCase:
    """Add an emotion to a user's collection."""

    def __init__(
        self,
        runner: OwnerMutationRunner,
        permission_checker: PermissionChecker,
    ) -> None:
        self._runner = runner
        self._permission_checker = permission_checker

    async def execute(
        self, actor_id: UUID, owner_id: UUID, input_data: EmotionCreateInput
    ) -> EmotionOutput:
        """Create emotion. Name must be unique among the owner's active emotions."""
        await authorize(
            self._permission_checker,
            actor_id,
            owner_id,
            Permission.EMOTIONS_WRITE_OWN,
            Permission.EMOTIONS_WRITE_ANY,
            "write",
        )
        emotion = await self._runner.run(
            owner_id, lambda record: record.add_emotion(input_data.name, input_data.color)
        )
        return EmotionOutput.from_entity(emotion)
