"""PostgreSQL owner repository - one row per user, embedded collections in JSONB."""

import logging
from dataclasses import replace
from uuid import UUID

import psycopg
from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from moodlog.domain.entities import User
from moodlog.domain.exceptions import Conflict, StorageError
from moodlog.infrastructure.persistence.postgres.document_codec import (
    decode_document,
    encode_document,
)

logger = logging.getLogger(__name__)

_COLUMNS = "id, name, role, password_hash, deleted, version, document, created_at, updated_at"


class PostgresOwnerRepository:
    """Owner repository implementation with optimistic versioning."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, owner_id: UUID) -> User | None:
        """Get owner by id, tombstoned or not."""
        return await self._fetch_one(f"SELECT {_COLUMNS} FROM owner WHERE id = %s", (owner_id,))

    async def get_by_name(self, name: str) -> User | None:
        """Get owner by name."""
        return await self._fetch_one(f"SELECT {_COLUMNS} FROM owner WHERE name = %s", (name,))

    async def list_active(self) -> list[User]:
        """Users not tombstoned, oldest first."""
        try:
            cur = await self._conn.execute(
                f"SELECT {_COLUMNS} FROM owner WHERE deleted = false ORDER BY created_at, id"
            )
            rows = await cur.fetchall()
        except psycopg.Error as e:
            logger.error("Failed to list users: %s", e)
            raise StorageError("Failed to list users") from e
        return [_row_to_user(r) for r in rows]

    async def persist(self, user: User) -> User:
        """Insert a new owner (version 0) or update one whose version still matches."""
        document = Jsonb(encode_document(user.emotions, user.days))
        try:
            if user.version == 0:
                cur = await self._conn.execute(
                    "INSERT INTO owner (id, name, role, password_hash, deleted, version, "
                    "document, created_at, updated_at) "
                    "VALUES (%s, %s, %s, %s, %s, 1, %s, %s, %s) ON CONFLICT (id) DO NOTHING",
                    (
                        user.id,
                        user.name,
                        user.role,
                        user.password_hash,
                        user.deleted,
                        document,
                        user.created_at,
                        user.updated_at,
                    ),
                )
            else:
                cur = await self._conn.execute(
                    "UPDATE owner SET name = %s, role = %s, password_hash = %s, deleted = %s, "
                    "document = %s, updated_at = %s, version = version + 1 "
                    "WHERE id = %s AND version = %s",
                    (
                        user.name,
                        user.role,
                        user.password_hash,
                        user.deleted,
                        document,
                        user.updated_at,
                        user.id,
                        user.version,
                    ),
                )
        except psycopg.errors.UniqueViolation as e:
            raise Conflict(f"User {user.name!r} already exists") from e
        except psycopg.Error as e:
            logger.error("Failed to persist user %s: %s", user.id, e)
            raise StorageError(f"Failed to persist user {user.id}") from e

        if cur.rowcount != 1:
            raise Conflict(f"User {user.id} was modified concurrently (version {user.version})")
        return replace(user, version=user.version + 1)

    async def _fetch_one(self, query: str, params: tuple) -> User | None:
        try:
            cur = await self._conn.execute(query, params)
            r = await cur.fetchone()
        except psycopg.Error as e:
            logger.error("Failed to load user: %s", e)
            raise StorageError("Failed to load user") from e
        if not r:
            return None
        return _row_to_user(r)


def _row_to_user(r: tuple) -> User:
    emotions, days = decode_document(r[6])
    return User(
        id=r[0],
        name=r[1],
        role=r[2],
        password_hash=r[3],
        deleted=r[4],
        version=r[5],
        emotions=emotions,
        days=days,
        created_at=r[7],
        updated_at=r[8],
    )
