"""Owner record - the user aggregate and its consistency rules.

Every mutation is staged on a copy of the user state, validated against the
full post-mutation collections and only then committed to the record. A
rejected mutation raises a ``ValidationError`` subclass and leaves the record
exactly as it was.
"""

import copy
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime
from typing import TypeVar
from uuid import UUID, uuid4

from moodlog.domain.entities import Day, Emotion, User
from moodlog.domain.exceptions import NotFound, ValidationError
from moodlog.domain.services.collection_guard import CollectionGuard
from moodlog.domain.services.field_rules import (
    DATE_FLOOR,
    check_color,
    check_description,
    check_emotion_name,
    check_password,
)
from moodlog.domain.services.permission_resolver import PermissionResolver
from moodlog.domain.services.referential_validator import ReferentialValidator
from moodlog.domain.value_objects import Permission, Violation

logger = logging.getLogger(__name__)

R = TypeVar("R")


@dataclass(frozen=True)
class ConsistencyLimits:
    """Per-owner limits applied by the record."""

    max_emotions: int = 1000
    description_max_length: int = 1024
    date_floor: date = DATE_FLOOR
    collect_all: bool = True


class OwnerRecord:
    """User aggregate: emotions and days plus the rules guarding them."""

    def __init__(
        self,
        user: User,
        resolver: PermissionResolver,
        validator: ReferentialValidator,
        limits: ConsistencyLimits,
        now: Callable[[], datetime],
    ) -> None:
        self._user = user
        self._resolver = resolver
        self._validator = validator
        self._limits = limits
        self._now = now
        self._changed = False
        self._emotion_guard = CollectionGuard[Emotion](
            field="name",
            key=lambda emotion: emotion.name,
            identity=lambda emotion: emotion.id,
            max_active=limits.max_emotions,
        )
        self._day_guard = CollectionGuard[Day](
            field="date",
            key=lambda day: day.date,
            identity=lambda day: day.id,
        )

    @property
    def user(self) -> User:
        return self._user

    @property
    def id(self) -> UUID:
        return self._user.id

    @property
    def changed(self) -> bool:
        """True once a mutation has been committed to this record."""
        return self._changed

    # --- Queries ---

    def has_permission(self, permission: Permission) -> bool:
        """True if the user's role grants ``permission``."""
        return self._resolver.has_permission(self._user.role, permission)

    def active_emotions(self) -> list[Emotion]:
        return self._emotion_guard.active(self._user.emotions)

    def active_days(self) -> list[Day]:
        return self._day_guard.active(self._user.days)

    def get_emotion(self, emotion_id: UUID) -> Emotion:
        """Active emotion by id."""
        emotion = _find(self._user.emotions, lambda e: e.id == emotion_id and not e.deleted)
        if emotion is None:
            raise NotFound("Emotion", str(emotion_id))
        return emotion

    def get_day(self, day_date: str) -> Day:
        """Active day by date."""
        day = _find(self._user.days, lambda d: d.date == day_date and not d.deleted)
        if day is None:
            raise NotFound("Day", day_date)
        return day

    # --- Emotions ---

    def add_emotion(self, name: str, color: str) -> Emotion:
        """Create an emotion."""

        def mutate(user: User) -> Emotion:
            now = self._now()
            emotion = Emotion(id=uuid4(), name=name, color=color, created_at=now, updated_at=now)
            user.emotions.append(emotion)
            self._validate_emotion(emotion, user, adding=True)
            user.updated_at = now
            return emotion

        return self._apply("add_emotion", mutate)

    def update_emotion(
        self, emotion_id: UUID, *, name: str | None = None, color: str | None = None
    ) -> Emotion:
        """Rename and/or recolor an active emotion. None leaves a field unchanged."""

        def mutate(user: User) -> Emotion:
            emotion = _find(user.emotions, lambda e: e.id == emotion_id and not e.deleted)
            if emotion is None:
                raise NotFound("Emotion", str(emotion_id))
            if name is not None:
                emotion.name = name
            if color is not None:
                emotion.color = color
            self._validate_emotion(emotion, user)
            emotion.updated_at = user.updated_at = self._now()
            return emotion

        return self._apply("update_emotion", mutate)

    def soft_delete_emotion(self, emotion_id: UUID) -> bool:
        """Tombstone an emotion. Returns False if it already was."""
        emotion = _find(self._user.emotions, lambda e: e.id == emotion_id)
        if emotion is None:
            raise NotFound("Emotion", str(emotion_id))
        if emotion.deleted:
            return False

        def mutate(user: User) -> bool:
            staged = _find(user.emotions, lambda e: e.id == emotion_id)
            self._emotion_guard.soft_delete(staged)
            staged.updated_at = user.updated_at = self._now()
            return True

        return self._apply("soft_delete_emotion", mutate)

    # --- Days ---

    def add_day(
        self, day_date: str, emotions: Iterable[UUID], description: str | None = None
    ) -> Day:
        """Create a day referencing existing emotions."""

        def mutate(user: User) -> Day:
            now = self._now()
            day = Day(
                id=uuid4(),
                date=day_date,
                emotions=list(emotions),
                description=description,
                created_at=now,
                updated_at=now,
            )
            user.days.append(day)
            self._validate_day(day, user)
            user.updated_at = now
            return day

        return self._apply("add_day", mutate)

    def update_day(
        self,
        day_date: str,
        *,
        new_date: str | None = None,
        description: str | None = None,
        emotions: Iterable[UUID] | None = None,
    ) -> Day:
        """Update the active day dated ``day_date``. None leaves a field unchanged."""

        def mutate(user: User) -> Day:
            day = _find(user.days, lambda d: d.date == day_date and not d.deleted)
            if day is None:
                raise NotFound("Day", day_date)
            retained = frozenset(day.emotions)
            if new_date is not None:
                day.date = new_date
            if description is not None:
                day.description = description
            if emotions is not None:
                day.emotions = list(emotions)
            self._validate_day(day, user, retained=retained)
            day.updated_at = user.updated_at = self._now()
            return day

        return self._apply("update_day", mutate)

    def soft_delete_day(self, day_date: str) -> bool:
        """Tombstone the active day dated ``day_date``. Returns False if already tombstoned."""
        try:
            day_id = self.get_day(day_date).id
        except NotFound:
            if _find(self._user.days, lambda d: d.date == day_date) is not None:
                return False
            raise

        def mutate(user: User) -> bool:
            staged = _find(user.days, lambda d: d.id == day_id)
            self._day_guard.soft_delete(staged)
            staged.updated_at = user.updated_at = self._now()
            return True

        return self._apply("soft_delete_day", mutate)

    # --- Account ---

    def set_password(self, password: str, hash_password: Callable[[str], str]) -> None:
        """Validate ``password`` and store its one-way hash."""
        violation = check_password(password)
        if violation:
            self._reject("set_password", [violation])
        self._user.password_hash = hash_password(password)
        self._user.updated_at = self._now()
        self._changed = True

    def soft_delete(self) -> bool:
        """Tombstone the whole account. Returns False if it already was."""
        if self._user.deleted:
            return False
        self._user.deleted = True
        self._user.updated_at = self._now()
        self._changed = True
        return True

    # --- Internals ---

    def _apply(self, operation: str, mutate: Callable[[User], R]) -> R:
        staged = copy.deepcopy(self._user)
        result = mutate(staged)
        self._user = staged
        self._changed = True
        logger.debug("Applied %s to user %s", operation, self._user.id)
        return result

    def _validate_emotion(self, emotion: Emotion, user: User, adding: bool = False) -> None:
        violations = [
            v for v in (check_emotion_name(emotion.name), check_color(emotion.color)) if v
        ]
        if not violations or self._limits.collect_all:
            if adding:
                violations.extend(self._emotion_guard.check(emotion, user.emotions))
            else:
                # Renames never change the active count.
                duplicate = self._emotion_guard.check_uniqueness(emotion, user.emotions)
                if duplicate:
                    violations.append(duplicate)
        if violations:
            self._reject("emotion", violations)

    def _validate_day(self, day: Day, user: User, retained: frozenset[UUID] = frozenset()) -> None:
        violations = self._validator.validate_day(
            day,
            user.emotions,
            user.days,
            retained=retained,
            collect_all=self._limits.collect_all,
        )
        if not violations or self._limits.collect_all:
            too_long = check_description(day.description, self._limits.description_max_length)
            if too_long:
                violations.append(too_long)
        if violations:
            self._reject("day", violations)

    def _reject(self, subject: str, violations: list[Violation]) -> None:
        logger.info(
            "Rejected %s mutation for user %s: %s",
            subject,
            self._user.id,
            ", ".join(f"{v.field}:{v.code}" for v in violations),
        )
        raise ValidationError.from_violations(violations)


def _find(items: Iterable[R], predicate: Callable[[R], bool]) -> R | None:
    for item in items:
        if predicate(item):
            return item
    return None
