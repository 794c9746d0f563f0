"""Emotion DTOs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from moodlog.domain.entities import Emotion


@dataclass
class EmotionCreateInput:
    """Input for creating an emotion."""

    name: str
    color: str


@dataclass
class EmotionUpdateInput:
    """Partial update - None fields are left unchanged."""

    name: str | None = None
    color: str | None = None


@dataclass
class EmotionOutput:
    """Output DTO for emotion."""

    id: UUID
    name: str
    color: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, emotion: Emotion) -> "EmotionOutput":
        return cls(
            id=emotion.id,
            name=emotion.name,
            color=emotion.color,
            created_at=emotion.created_at,
            updated_at=emotion.updated_at,
        )
