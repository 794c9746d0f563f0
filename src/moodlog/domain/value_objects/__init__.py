"""Domain value objects."""

from moodlog.domain.value_objects.permission import Permission
from moodlog.domain.value_objects.violation import Violation, ViolationCode

__all__ = [
    "Permission",
    "Violation",
    "ViolationCode",
]
