"""User entity - state of an owner record."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from moodlog.domain.entities.day import Day
from moodlog.domain.entities.emotion import Emotion


@dataclass
class User:
    """User - owns its emotions and days. ``version`` is 0 until first persisted."""

    id: UUID
    name: str
    role: str
    created_at: datetime
    updated_at: datetime
    password_hash: str | None = None
    emotions: list[Emotion] = field(default_factory=list)
    days: list[Day] = field(default_factory=list)
    deleted: bool = False
    version: int = 0
