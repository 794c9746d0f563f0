"""List days use case."""

from uuid import UUID

from moodlog.application.dto.day_dto import DayOutput
from moodlog.application.ports import PermissionChecker
from moodlog.application.use_cases.authorization import authorize
from moodlog.domain.exceptions import NotFound
from moodlog.domain.services import OwnerPolicy
from moodlog.domain.value_objects import Permission


class ListDaysUseCase:
    """List a user's active days, optionally for a single date."""

    def __init__(
        self,
        unit_of_work_factory: type,
        policy: OwnerPolicy,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._policy = policy
        self._permission_checker = permission_checker

    async def execute(
        self, actor_id: UUID, owner_id: UUID, date: str | None = None
    ) -> list[DayOutput]:
        """Active days sorted by date."""
        await authorize(
            self._permission_checker,
            actor_id,
            owner_id,
            Permission.DAYS_READ_OWN,
            Permission.DAYS_READ_ANY,
            "read",
        )
        async with self._uow_factory() as uow:
            user = await uow.owners.get_by_id(owner_id)
            if not user or user.deleted:
                raise NotFound("User", str(owner_id))
            days = [
                d
                for d in self._policy.bind(user).active_days()
                if date is None or d.date == date
            ]
            return [DayOutput.from_entity(d) for d in sorted(days, key=lambda d: d.date)]
