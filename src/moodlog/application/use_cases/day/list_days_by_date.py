"""List days of every user, grouped by date."""

from uuid import UUID

from moodlog.application.dto.day_dto import DayOutput
from moodlog.application.ports import PermissionChecker
from moodlog.domain.exceptions import PermissionDenied
from moodlog.domain.services import OwnerPolicy
from moodlog.domain.value_objects import Permission


class ListDaysByDateUseCase:
    """Active days of all active users, keyed by date."""

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
        self, actor_id: UUID, date: str | None = None
    ) -> dict[str, list[DayOutput]]:
        """Dates in ascending order; each maps to its days, owner by owner."""
        if not await self._permission_checker.check(actor_id, Permission.DAYS_READ_ANY):
            raise PermissionDenied("User does not have read access to all days")

        async with self._uow_factory() as uow:
            users = await uow.owners.list_active()

        grouped: dict[str, list[DayOutput]] = {}
        for user in users:
            if user.deleted:
                continue
            for day in self._policy.bind(user).active_days():
                if date is None or day.date == date:
                    grouped.setdefault(day.date, []).append(DayOutput.from_entity(day, user.id))
        return dict(sorted(grouped.items()))
