"""User DTOs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from moodlog.domain.entities import User


@dataclass
class UserCreateInput:
    """Input for registering a user."""

    name: str
    password: str


@dataclass
class UserOutput:
    """Output DTO for user. Never carries the password hash."""

    id: UUID
    name: str
    role: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserOutput":
        return cls(
            id=user.id,
            name=user.name,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
