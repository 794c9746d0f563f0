"""Day DTOs."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from moodlog.domain.entities import Day


@dataclass
class DayCreateInput:
    """Input for creating a day."""

    date: str
    emotions: list[UUID]
    description: str | None = None


@dataclass
class DayUpdateInput:
    """Partial update - None fields are left unchanged."""

    date: str | None = None
    description: str | None = None
    emotions: list[UUID] | None = None


@dataclass
class DayOutput:
    """Output DTO for day."""

    id: UUID
    date: str
    description: str | None
    created_at: datetime
    updated_at: datetime
    emotions: list[UUID] = field(default_factory=list)
    owner_id: UUID | None = None

    @classmethod
    def from_entity(cls, day: Day, owner_id: UUID | None = None) -> "DayOutput":
        return cls(
            id=day.id,
            date=day.date,
            description=day.description,
            emotions=list(day.emotions),
            created_at=day.created_at,
            updated_at=day.updated_at,
            owner_id=owner_id,
        )
