"""Update day use case."""

from uuid import UUID

from moodlog.application.dto.day_dto import DayOutput, DayUpdateInput
from moodlog.application.ports import PermissionChecker
from moodlog.application.use_cases.authorization import authorize
from moodlog.application.use_cases.owner_mutation import OwnerMutationRunner
from moodlog.domain.value_objects import Permission


class UpdateDayUseCase:
    """Change the date, description or emotions of an active day."""

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
        date: str,
        input_data: DayUpdateInput,
    ) -> DayOutput:
        """Update the day dated ``date``."""
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
            lambda record: record.update_day(
                date,
                new_date=input_data.date,
                description=input_data.description,
                emotions=input_data.emotions,
            ),
        )
        return DayOutput.from_entity(day)
