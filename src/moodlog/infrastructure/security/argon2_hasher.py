"""Argon2id password hasher."""

from argon2 import PasswordHasher


class Argon2PasswordHasher:
    """Hashes passwords with Argon2id. Salt is embedded in the hash output."""

    def __init__(self, time_cost: int = 3, memory_cost: int = 65536, parallelism: int = 4) -> None:
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            hash_len=32,
            salt_len=16,
        )

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)
