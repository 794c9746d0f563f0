"""Update emotion use case."""

from uuid import UUID

from moodlog.application.dto.emotion_dto import EmotionOutput, EmotionUpdateInput
from moodlog.application.ports import PermissionChecker
from moodlog.application.use_cases.authorization import authorize
from moodlog.application.use_cases.owner_mutation import OwnerMutationRunner
from moodlog.domain.value_objects import Permission


class UpdateEmotionUseCase:
    """Rename or recolor an active emotion."""

    def __init__(
        self,
        runner: OwnerMutationRunner,
        permission_checker: PermissionChecker,
    ) -> None:
        self._runner = runner
        self._permission_checker = permission_checker

    async def execute(
        self,
        actor_id: UUID,
        owner_id: UUID,
        emotion_id: UUID,
        input_data: EmotionUpdateInput,
    ) -> EmotionOutput:
        """Update emotion fields that are set on ``input_data``."""
        await authorize(
            self._permission_checker,
            actor_id,
            owner_id,
            Permission.EMOTIONS_WRITE_OWN,
            Permission.EMOTIONS_WRITE_ANY,
            "write",
        )
        emotion = await self._runner.run(
            owner_id,
            lambda record: record.update_emotion(
                emotion_id, name=input_data.name, color=input_data.color
            ),
        )
        return EmotionOutput.from_entity(emotion)
