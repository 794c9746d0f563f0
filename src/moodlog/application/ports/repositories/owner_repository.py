"""Owner repository port."""

from typing import Protocol
from uuid import UUID

from moodlog.domain.entities import User


class OwnerRepository(Protocol):
    """Port for owner document persistence.

    Embedded emotions and days travel with the owner; filtering of active
    versus tombstoned items happens in memory after load.
    """

    async def get_by_id(self, owner_id: UUID) -> User | None: ...

    async def get_by_name(self, name: str) -> User | None: ...

    async def list_active(self) -> list[User]:
        """Users not tombstoned, oldest first."""
        ...

    async def persist(self, user: User) -> User:
        """Write ``user`` if its ``version`` still matches storage.

        Raises ``Conflict`` on a concurrent write and ``StorageError`` when the
        store fails. On success the returned user carries the new version.
        """
        ...
