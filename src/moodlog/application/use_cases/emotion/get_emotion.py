"""Get emotion use case."""

from uuid import UUID

from moodlog.application.dto.emotion_dto import EmotionOutput
from moodlog.application.ports import PermissionChecker
from moodlog.application.use_cases.authorization import authorize
from moodlog.domain.exceptions import NotFound
from moodlog.domain.services import OwnerPolicy
from moodlog.domain.value_objects import Permission


class GetEmotionUseCase:
    """Get one active emotion of a user."""

    def __init__(
        self,
        unit_of_work_factory: type,
        policy: OwnerPolicy,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._policy = policy
        self._permission_checker = permission_checker

    async def execute(self, actor_id: UUID, owner_id: UUID, emotion_id: UUID) -> EmotionOutput:
        """Get emotion by id. Tombstoned emotions are not found."""
        await authorize(
            self._permission_checker,
            actor_id,
            owner_id,
            Permission.EMOTIONS_READ_OWN,
            Permission.EMOTIONS_READ_ANY,
            "read",
        )
        async with self._uow_factory() as uow:
            user = await uow.owners.get_by_id(owner_id)
            if not user or user.deleted:
                raise NotFound("User", str(owner_id))
            return EmotionOutput.from_entity(self._policy.bind(user).get_emotion(emotion_id))
