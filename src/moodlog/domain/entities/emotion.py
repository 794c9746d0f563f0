"""Emotion entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Emotion:
    """Emotion - named, colored label owned by a single user."""

    id: UUID
    name: str
    color: str
    created_at: datetime
    updated_at: datetime
    deleted: bool = False
