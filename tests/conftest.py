"""Pytest fixtures for moodlog tests."""

from __future__ import annotations

import copy
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from moodlog.application.use_cases.owner_mutation import OwnerMutationRunner
from moodlog.config import DEFAULT_ROLES
from moodlog.domain.entities import User
from moodlog.domain.exceptions import Conflict
from moodlog.domain.services import (
    ConsistencyLimits,
    OwnerPolicy,
    OwnerRecord,
    PermissionResolver,
    RoleRegistry,
)
from moodlog.infrastructure.permission.permission_checker import RolePermissionChecker

# Fixed "now" so date-window checks are deterministic.
NOW = datetime(2024, 6, 15, 12, 0, tzinfo=UTC)


# --- Fake repositories ---


class FakeOwnerRepository:
    """In-memory owner repository with optimistic versioning.

    Stores deep copies so callers never share state with storage.
    """

    def __init__(self) -> None:
        self._by_id: dict[UUID, User] = {}
        self.failures: list[Exception] = []
        self.persist_calls = 0

    async def get_by_id(self, owner_id: UUID) -> User | None:
        user = self._by_id.get(owner_id)
        return copy.deepcopy(user) if user else None

    async def get_by_name(self, name: str) -> User | None:
        for user in self._by_id.values():
            if user.name == name:
                return copy.deepcopy(user)
        return None

    async def persist(self, user: User) -> User:
        self.persist_calls += 1
        if self.failures:
            raise self.failures.pop(0)
        stored = self._by_id.get(user.id)
        current = stored.version if stored else 0
        if current != user.version:
            raise Conflict(f"User {user.id} was modified concurrently")
        saved = replace(copy.deepcopy(user), version=current + 1)
        self._by_id[user.id] = saved
        return copy.deepcopy(saved)

    async def list_active(self) -> list[User]:
        return [copy.deepcopy(u) for u in self._by_id.values() if not u.deleted]

    def add(self, user: User) -> User:
        """Helper to seed a user for tests."""
        saved = replace(copy.deepcopy(user), version=max(user.version, 1))
        self._by_id[user.id] = saved
        return copy.deepcopy(saved)

    def stored(self, owner_id: UUID) -> User:
        """Helper to inspect what storage holds."""
        return self._by_id[owner_id]


class FakePasswordHasher:
    """Reversible stand-in for the argon2 hasher."""

    def hash(self, password: str) -> str:
        return f"hashed:{password}"


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work over a shared repository."""

    def __init__(self, owners: FakeOwnerRepository | None = None) -> None:
        self.owners = owners or FakeOwnerRepository()
        self.committed = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        pass


def make_uow_factory(owners: FakeOwnerRepository):
    """Factory yielding a FakeUnitOfWork bound to ``owners`` per call."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        uow = FakeUnitOfWork(owners)
        yield uow
        await uow.commit()

    return _factory


# --- Fixtures ---


@pytest.fixture
def registry() -> RoleRegistry:
    """Built-in roles: user (default) and admin extending user."""
    return RoleRegistry.from_mapping(DEFAULT_ROLES)


@pytest.fixture
def resolver(registry: RoleRegistry) -> PermissionResolver:
    return PermissionResolver(registry)


@pytest.fixture
def policy(resolver: PermissionResolver) -> OwnerPolicy:
    """Policy with a frozen clock at NOW."""
    return OwnerPolicy(resolver, ConsistencyLimits(), now=lambda: NOW)


@pytest.fixture
def record(policy: OwnerPolicy) -> OwnerRecord:
    """Fresh OwnerRecord for a default-role user."""
    return policy.bind(policy.new_user("alice"))


@pytest.fixture
def owners() -> FakeOwnerRepository:
    return FakeOwnerRepository()


@pytest.fixture
def uow_factory(owners: FakeOwnerRepository):
    return make_uow_factory(owners)


@pytest.fixture
def runner(uow_factory, policy: OwnerPolicy) -> OwnerMutationRunner:
    return OwnerMutationRunner(unit_of_work_factory=uow_factory, policy=policy)


@pytest.fixture
def permission_checker(uow_factory, policy: OwnerPolicy) -> RolePermissionChecker:
    return RolePermissionChecker(uow_factory, policy)


@pytest.fixture
def seed_user(owners: FakeOwnerRepository, policy: OwnerPolicy):
    """Seed a stored user; returns the stored copy."""

    def _seed(name: str | None = None, role: str = "user") -> User:
        user = policy.new_user(name or f"user-{uuid4().hex[:8]}")
        user.role = role
        return owners.add(user)

    return _seed
