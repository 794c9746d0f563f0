"""Owner policy - binds loaded users to the process-wide consistency rules."""

from collections.abc import Callable
from datetime import UTC, datetime
from uuid import uuid4

from moodlog.domain.entities import User
from moodlog.domain.services.owner_record import ConsistencyLimits, OwnerRecord
from moodlog.domain.services.permission_resolver import PermissionResolver
from moodlog.domain.services.referential_validator import ReferentialValidator


def utcnow() -> datetime:
    return datetime.now(UTC)


class OwnerPolicy:
    """Shared resolver, validator, limits and clock for every OwnerRecord."""

    def __init__(
        self,
        resolver: PermissionResolver,
        limits: ConsistencyLimits | None = None,
        now: Callable[[], datetime] = utcnow,
    ) -> None:
        self.resolver = resolver
        self.limits = limits or ConsistencyLimits()
        self._now = now
        self._validator = ReferentialValidator(
            today=lambda: self._now().date(),
            date_floor=self.limits.date_floor,
        )

    def bind(self, user: User) -> OwnerRecord:
        """Wrap ``user`` in an OwnerRecord."""
        return OwnerRecord(
            user=user,
            resolver=self.resolver,
            validator=self._validator,
            limits=self.limits,
            now=self._now,
        )

    def new_user(self, name: str) -> User:
        """Blank user with the registry's default role. Not yet persisted."""
        now = self._now()
        return User(
            id=uuid4(),
            name=name,
            role=self.resolver.registry.default_role.name,
            created_at=now,
            updated_at=now,
        )
