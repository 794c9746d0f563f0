"""Domain exceptions."""

from collections.abc import Sequence

from moodlog.domain.value_objects.violation import Violation, ViolationCode


class MoodlogError(Exception):
    """Base exception for moodlog."""

    retryable: bool = False


class ConfigError(MoodlogError):
    """Role registry or settings are malformed. Fatal at startup."""

    pass


class PermissionDenied(MoodlogError):
    """Actor does not have permission for the requested action."""

    pass


class NotFound(MoodlogError):
    """Requested owner or embedded item was not found."""

    def __init__(self, kind: str, key: str) -> None:
        super().__init__(f"{kind} not found: {key}")
        self.kind = kind
        self.key = key


class ValidationError(MoodlogError):
    """A mutation broke one or more consistency rules.

    Carries every violation found so callers can report them all at once.
    """

    code: ViolationCode | None = None

    def __init__(self, violations: Sequence[Violation]) -> None:
        self.violations = list(violations)
        super().__init__("; ".join(f"{v.field}: {v.message}" for v in self.violations))

    @classmethod
    def from_violations(cls, violations: Sequence[Violation]) -> "ValidationError":
        """Build the subclass matching the first violation's code."""
        if not violations:
            raise ValueError("from_violations needs at least one violation")
        kind = _BY_CODE.get(violations[0].code, ValidationError)
        return kind(violations)


class CapacityExceeded(ValidationError):
    """Active item count would exceed the collection limit."""

    code = ViolationCode.CAPACITY_EXCEEDED


class DuplicateKey(ValidationError):
    """Key collides with an active sibling."""

    code = ViolationCode.DUPLICATE_KEY


class InvalidDate(ValidationError):
    """Day date is malformed, not a calendar date, or outside the window."""

    code = ViolationCode.INVALID_DATE


class UnknownOrDeletedEmotion(ValidationError):
    """Day references an emotion the owner does not have, or has tombstoned."""

    code = ViolationCode.UNKNOWN_OR_DELETED_EMOTION


class Conflict(MoodlogError):
    """Concurrent write detected on persist."""

    retryable = True


class StorageError(MoodlogError):
    """Storage collaborator failed. Transient."""

    retryable = True


_BY_CODE: dict[ViolationCode, type[ValidationError]] = {
    kind.code: kind
    for kind in (CapacityExceeded, DuplicateKey, InvalidDate, UnknownOrDeletedEmotion)
}
