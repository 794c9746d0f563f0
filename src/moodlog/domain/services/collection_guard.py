"""Collection guard - capacity, uniqueness and tombstoning for embedded collections."""

from collections.abc import Callable, Hashable, Iterable
from typing import Generic, Protocol, TypeVar

from moodlog.domain.value_objects import Violation, ViolationCode


class Tombstoned(Protocol):
    """Item that is soft-deleted through a ``deleted`` flag."""

    deleted: bool


T = TypeVar("T", bound=Tombstoned)


class CollectionGuard(Generic[T]):
    """Enforces per-owner rules over one embedded collection.

    ``key`` extracts the value that must be unique among active items,
    ``identity`` tells apart the candidate from its siblings so an update in
    place does not collide with itself.
    """

    def __init__(
        self,
        field: str,
        key: Callable[[T], Hashable],
        identity: Callable[[T], Hashable],
        max_active: int | None = None,
    ) -> None:
        self._field = field
        self._key = key
        self._identity = identity
        self._max_active = max_active

    @staticmethod
    def active(items: Iterable[T]) -> list[T]:
        """Items not tombstoned."""
        return [item for item in items if not item.deleted]

    def check_capacity(self, active_count: int, maximum: int | None = None) -> Violation | None:
        """Violation if the post-mutation active count exceeds the limit."""
        limit = self._max_active if maximum is None else maximum
        if limit is None or active_count <= limit:
            return None
        return Violation(
            field=self._field,
            code=ViolationCode.CAPACITY_EXCEEDED,
            message=f"At most {limit} active items allowed (got {active_count})",
        )

    def check_uniqueness(self, candidate: T, siblings: Iterable[T]) -> Violation | None:
        """Violation if the candidate key collides with another active sibling."""
        key = self._key(candidate)
        identity = self._identity(candidate)
        for sibling in siblings:
            if sibling.deleted or self._identity(sibling) == identity:
                continue
            if self._key(sibling) == key:
                return Violation(
                    field=self._field,
                    code=ViolationCode.DUPLICATE_KEY,
                    message=f"{key!s} already exists",
                )
        return None

    def check(self, candidate: T, collection: Iterable[T]) -> list[Violation]:
        """Uniqueness then capacity, against the post-mutation collection."""
        items = list(collection)
        violations = []
        duplicate = self.check_uniqueness(candidate, items)
        if duplicate:
            violations.append(duplicate)
        over = self.check_capacity(len(self.active(items)))
        if over:
            violations.append(over)
        return violations

    @staticmethod
    def soft_delete(item: T) -> bool:
        """Tombstone ``item``. Returns False when it already was."""
        if item.deleted:
            return False
        item.deleted = True
        return True
