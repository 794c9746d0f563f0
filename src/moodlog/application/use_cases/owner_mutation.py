"""Owner mutation runner - serialized load, validate, persist per owner."""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import TypeVar
from uuid import UUID

from moodlog.domain.exceptions import MoodlogError, NotFound
from moodlog.domain.services import OwnerPolicy, OwnerRecord

logger = logging.getLogger(__name__)

R = TypeVar("R")


class OwnerLocks:
    """One asyncio lock per owner, dropped once nobody holds or waits on it."""

    def __init__(self) -> None:
        self._locks: dict[UUID, asyncio.Lock] = {}
        self._users: dict[UUID, int] = {}

    @asynccontextmanager
    async def hold(self, owner_id: UUID) -> AsyncIterator[None]:
        lock = self._locks.setdefault(owner_id, asyncio.Lock())
        self._users[owner_id] = self._users.get(owner_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[owner_id] -= 1
            if not self._users[owner_id]:
                del self._users[owner_id]
                del self._locks[owner_id]

    def __len__(self) -> int:
        return len(self._locks)


class OwnerMutationRunner:
    """Runs one mutation as a single logical transaction on an owner.

    The owner is loaded, mutated in memory, validated by its OwnerRecord and
    persisted with an optimistic version check, all under the owner's lock.
    ``Conflict`` and ``StorageError`` restart the whole cycle from a fresh
    load up to ``max_attempts`` times; every other error surfaces at once.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        policy: OwnerPolicy,
        locks: OwnerLocks | None = None,
        max_attempts: int = 3,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._uow_factory = unit_of_work_factory
        self._policy = policy
        self._locks = locks or OwnerLocks()
        self._max_attempts = max_attempts

    async def run(self, owner_id: UUID, mutate: Callable[[OwnerRecord], R]) -> R:
        """Apply ``mutate`` to the owner's record and persist it if it changed."""
        async with self._locks.hold(owner_id):
            attempt = 1
            while True:
                try:
                    return await self._attempt(owner_id, mutate)
                except MoodlogError as e:
                    if not e.retryable:
                        raise
                    if attempt >= self._max_attempts:
                        logger.error(
                            "Giving up on user %s after %d attempt(s): %s", owner_id, attempt, e
                        )
                        raise
                    logger.warning(
                        "Retrying mutation on user %s (attempt %d/%d): %s",
                        owner_id,
                        attempt,
                        self._max_attempts,
                        e,
                    )
                    attempt += 1

    async def _attempt(self, owner_id: UUID, mutate: Callable[[OwnerRecord], R]) -> R:
        async with self._uow_factory() as uow:
            user = await uow.owners.get_by_id(owner_id)
            if not user or user.deleted:
                raise NotFound("User", str(owner_id))
            record = self._policy.bind(user)
            result = mutate(record)
            if record.changed:
                await uow.owners.persist(record.user)
            return result
