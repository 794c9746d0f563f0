"""Password hasher port."""

from typing import Protocol


class PasswordHasher(Protocol):
    """Opaque one-way transform for passwords."""

    def hash(self, password: str) -> str: ...
