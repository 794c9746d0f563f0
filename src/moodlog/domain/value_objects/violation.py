"""Field-scoped validation violations."""

from dataclasses import dataclass
from enum import StrEnum


class ViolationCode(StrEnum):
    """Kinds of rule a mutation can break."""

    REQUIRED = "required"
    TOO_LONG = "too_long"
    TOO_SHORT = "too_short"
    INVALID_FORMAT = "invalid_format"
    DUPLICATE_KEY = "duplicate_key"
    DUPLICATE_REFERENCE = "duplicate_reference"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    INVALID_DATE = "invalid_date"
    UNKNOWN_OR_DELETED_EMOTION = "unknown_or_deleted_emotion"


@dataclass(frozen=True)
class Violation:
    """One broken rule, scoped to the field that broke it."""

    field: str
    code: ViolationCode
    message: str

    def as_dict(self) -> dict[str, str]:
        """Plain representation for transport layers."""
        return {"field": self.field, "code": self.code.value, "message": self.message}
