"""Domain entities."""

from moodlog.domain.entities.day import Day
from moodlog.domain.entities.emotion import Emotion
from moodlog.domain.entities.role import Role
from moodlog.domain.entities.user import User

__all__ = [
    "Day",
    "Emotion",
    "Role",
    "User",
]
