"""Day entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass
class Day:
    """Day - journal entry for one calendar date.

    ``emotions`` holds plain emotion ids, resolved against the owner's
    emotion collection when needed.
    """

    id: UUID
    date: str
    created_at: datetime
    updated_at: datetime
    emotions: list[UUID] = field(default_factory=list)
    description: str | None = None
    deleted: bool = False
