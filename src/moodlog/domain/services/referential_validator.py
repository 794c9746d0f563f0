"""Referential validator - checks a day against its owner's emotions and days."""

from collections.abc import Callable, Iterable
from datetime import date
from uuid import UUID

from moodlog.domain.entities import Day, Emotion
from moodlog.domain.services.collection_guard import CollectionGuard
from moodlog.domain.services.field_rules import DATE_FLOOR, check_day_date
from moodlog.domain.value_objects import Violation, ViolationCode


class ReferentialValidator:
    """Validates Day -> Emotion references, the date window and date uniqueness.

    Checks run in a fixed order and stop at the first failure unless
    ``collect_all`` is requested.
    """

    def __init__(
        self,
        today: Callable[[], date],
        date_floor: date = DATE_FLOOR,
    ) -> None:
        self._today = today
        self._date_floor = date_floor
        self._days = CollectionGuard[Day](
            field="date",
            key=lambda day: day.date,
            identity=lambda day: day.id,
        )

    def validate_day(
        self,
        day: Day,
        owner_emotions: Iterable[Emotion],
        sibling_days: Iterable[Day],
        *,
        retained: frozenset[UUID] = frozenset(),
        collect_all: bool = False,
    ) -> list[Violation]:
        """Return the violations of ``day``; empty when valid.

        ``retained`` lists references the day already held before an update;
        those may point at tombstoned emotions of the same owner.
        """
        emotions = {emotion.id: emotion for emotion in owner_emotions}
        checks: list[Callable[[], list[Violation]]] = [
            lambda: self._check_not_empty(day),
            lambda: self._check_no_duplicates(day),
            lambda: self._check_references(day, emotions, retained),
            lambda: self._check_date(day),
            lambda: self._check_unique_date(day, sibling_days),
        ]
        violations: list[Violation] = []
        for check in checks:
            found = check()
            if found:
                violations.extend(found)
                if not collect_all:
                    break
        return violations

    @staticmethod
    def _check_not_empty(day: Day) -> list[Violation]:
        if day.emotions:
            return []
        return [Violation("emotions", ViolationCode.REQUIRED, "Day emotions are required")]

    @staticmethod
    def _check_no_duplicates(day: Day) -> list[Violation]:
        seen: set[UUID] = set()
        violations = []
        for emotion_id in day.emotions:
            if emotion_id in seen:
                violations.append(
                    Violation(
                        "emotions",
                        ViolationCode.DUPLICATE_REFERENCE,
                        f"Emotion {emotion_id} is referenced more than once",
                    )
                )
            seen.add(emotion_id)
        return violations

    @staticmethod
    def _check_references(
        day: Day, emotions: dict[UUID, Emotion], retained: frozenset[UUID]
    ) -> list[Violation]:
        violations = []
        for emotion_id in dict.fromkeys(day.emotions):
            emotion = emotions.get(emotion_id)
            if emotion is not None and (not emotion.deleted or emotion_id in retained):
                continue
            violations.append(
                Violation(
                    "emotions",
                    ViolationCode.UNKNOWN_OR_DELETED_EMOTION,
                    f"Emotion {emotion_id} is not an active emotion of the user",
                )
            )
        return violations

    def _check_date(self, day: Day) -> list[Violation]:
        violation = check_day_date(day.date, self._today(), self._date_floor)
        return [violation] if violation else []

    def _check_unique_date(self, day: Day, sibling_days: Iterable[Day]) -> list[Violation]:
        violation = self._days.check_uniqueness(day, sibling_days)
        return [violation] if violation else []
