"""Repository ports."""

from moodlog.application.ports.repositories.owner_repository import OwnerRepository

__all__ = [
    "OwnerRepository",
]
