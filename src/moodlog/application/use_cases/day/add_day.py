"""Add day use case."""

from uuid import UUID

from moodlog.application.dto.day_dto import DayCreateInput, DayOutput
from moodlog.application.ports import PermissionChecker
from moodlog.application.use_cases.authorization import authorize
from moodlog.application.use_cases.owner_mutation import OwnerMutationRunner
from moodlog.domain.value_objects import Permission


class AddDayUseCase:
    """Record a day referencing the owner's emotions."""

    def __init__(
        self,
        runner: OwnerMutationRunner,
        permission_checker: PermissionChecker,
    ) -> None:
        self._runner = runner
        self._permission_checker = permission_checker

    async def execute(
        self, actor_id: UUID, owner_id: UUID, input_data: DayCreateInput
    ) -> DayOutput:
        """Create day. Date must be free among the owner's active days."""
        await authorize(
            self._permission_checker,
            actor_id,
            owner_id,
            Permission.DAYS_WRITE_OWN,
            Permission.DAYS_WRITE_ANY,
            "write",
        )
        day = await self._runner.run(
            owner_id,
            lambda record: record.add_day(
                input_data.date, input_data.emotions, input_data.description
            ),
        )
        return DayOutput.from_entity(day)
