"""Unit tests for use cases with fake repositories."""

import asyncio
from uuid import uuid4

import pytest

from moodlog.application.dto.day_dto import DayCreateInput, DayUpdateInput
from moodlog.application.dto.emotion_dto import EmotionCreateInput, EmotionUpdateInput
from moodlog.application.dto.user_dto import UserCreateInput
from moodlog.application.use_cases.day.add_day import AddDayUseCase
from moodlog.application.use_cases.day.delete_day import DeleteDayUseCase
from moodlog.application.use_cases.day.list_days import ListDaysUseCase
from moodlog.application.use_cases.day.list_days_by_date import ListDaysByDateUseCase
from moodlog.application.use_cases.day.update_day import UpdateDayUseCase
from moodlog.application.use_cases.emotion.add_emotion import AddEmotionUseCase
from moodlog.application.use_cases.emotion.delete_emotion import DeleteEmotionUseCase
from moodlog.application.use_cases.emotion.get_emotion import GetEmotionUseCase
from moodlog.application.use_cases.emotion.list_emotions import ListEmotionsUseCase
from moodlog.application.use_cases.emotion.update_emotion import UpdateEmotionUseCase
from moodlog.application.use_cases.owner_mutation import OwnerLocks, OwnerMutationRunner
from moodlog.application.use_cases.user.create_user import CreateUserUseCase
from moodlog.application.use_cases.user.delete_user import DeleteUserUseCase
from moodlog.application.use_cases.user.get_user import GetUserUseCase
from moodlog.application.use_cases.user.list_users import ListUsersUseCase
from moodlog.domain.exceptions import (
    Conflict,
    DuplicateKey,
    InvalidDate,
    NotFound,
    PermissionDenied,
    StorageError,
    ValidationError,
)
from tests.conftest import FakePasswordHasher


@pytest.mark.asyncio
async def test_create_user(uow_factory, policy, owners) -> None:
    """CreateUser stores a default-role user with a hashed password."""
    use_case = CreateUserUseCase(uow_factory, policy, FakePasswordHasher())
    result = await use_case.execute(UserCreateInput(name="alice", password="secret-pw"))
    assert result.name == "alice"
    assert result.role == "user"
    stored = owners.stored(result.id)
    assert stored.password_hash == "hashed:secret-pw"
    assert stored.version == 1


@pytest.mark.asyncio
async def test_create_user_duplicate_name(uow_factory, policy, seed_user) -> None:
    seed_user("alice")
    use_case = CreateUserUseCase(uow_factory, policy, FakePasswordHasher())
    with pytest.raises(DuplicateKey):
        await use_case.execute(UserCreateInput(name="alice", password="secret-pw"))


@pytest.mark.asyncio
async def test_create_user_name_taken_concurrently(uow_factory, policy, owners) -> None:
    """A name lost to a racing registration is a duplicate, not a retryable conflict."""
    owners.failures = [Conflict("name already exists")]
    use_case = CreateUserUseCase(uow_factory, policy, FakePasswordHasher())
    with pytest.raises(DuplicateKey) as exc_info:
        await use_case.execute(UserCreateInput(name="alice", password="secret-pw"))
    assert exc_info.value.violations[0].field == "name"
    assert not exc_info.value.retryable
    assert owners.persist_calls == 1


@pytest.mark.asyncio
async def test_create_user_short_password(uow_factory, policy, owners) -> None:
    use_case = CreateUserUseCase(uow_factory, policy, FakePasswordHasher())
    with pytest.raises(ValidationError):
        await use_case.execute(UserCreateInput(name="alice", password="short"))
    assert owners.persist_calls == 0


@pytest.mark.asyncio
async def test_get_user_own_and_other(uow_factory, permission_checker, seed_user) -> None:
    alice = seed_user("alice")
    bob = seed_user("bob")
    admin = seed_user("root", role="admin")
    use_case = GetUserUseCase(uow_factory, permission_checker)
    assert (await use_case.execute(alice.id, alice.id)).name == "alice"
    with pytest.raises(PermissionDenied):
        await use_case.execute(alice.id, bob.id)
    assert (await use_case.execute(admin.id, bob.id)).name == "bob"


@pytest.mark.asyncio
async def test_add_and_list_emotions(runner, uow_factory, policy, permission_checker, seed_user) -> None:
    alice = seed_user("alice")
    add = AddEmotionUseCase(runner, permission_checker)
    listing = ListEmotionsUseCase(uow_factory, policy, permission_checker)
    joy = await add.execute(alice.id, alice.id, EmotionCreateInput(name="Joy", color="#ffcc00"))
    await add.execute(alice.id, alice.id, EmotionCreateInput(name="Calm", color="#00f"))
    result = await listing.execute(alice.id, alice.id)
    assert [e.name for e in result] == ["Joy", "Calm"]
    assert result[0].id == joy.id


@pytest.mark.asyncio
async def test_add_emotion_for_other_user_denied(runner, permission_checker, seed_user, owners) -> None:
    alice = seed_user("alice")
    bob = seed_user("bob")
    add = AddEmotionUseCase(runner, permission_checker)
    with pytest.raises(PermissionDenied):
        await add.execute(alice.id, bob.id, EmotionCreateInput(name="Joy", color="#fff"))
    assert owners.persist_calls == 0


@pytest.mark.asyncio
async def test_admin_writes_for_other_user(runner, permission_checker, seed_user, owners) -> None:
    bob = seed_user("bob")
    admin = seed_user("root", role="admin")
    add = AddEmotionUseCase(runner, permission_checker)
    await add.execute(admin.id, bob.id, EmotionCreateInput(name="Joy", color="#fff"))
    assert [e.name for e in owners.stored(bob.id).emotions] == ["Joy"]


@pytest.mark.asyncio
async def test_unknown_actor_denied(runner, permission_checker, seed_user) -> None:
    alice = seed_user("alice")
    add = AddEmotionUseCase(runner, permission_checker)
    with pytest.raises(PermissionDenied):
        await add.execute(uuid4(), alice.id, EmotionCreateInput(name="Joy", color="#fff"))


@pytest.mark.asyncio
async def test_missing_owner_not_found(runner, permission_checker, seed_user) -> None:
    admin = seed_user("root", role="admin")
    add = AddEmotionUseCase(runner, permission_checker)
    with pytest.raises(NotFound):
        await add.execute(admin.id, uuid4(), EmotionCreateInput(name="Joy", color="#fff"))


@pytest.mark.asyncio
async def test_update_and_delete_emotion(
    runner, uow_factory, policy, permission_checker, seed_user, owners
) -> None:
    alice = seed_user("alice")
    add = AddEmotionUseCase(runner, permission_checker)
    update = UpdateEmotionUseCase(runner, permission_checker)
    delete = DeleteEmotionUseCase(runner, permission_checker)
    joy = await add.execute(alice.id, alice.id, EmotionCreateInput(name="Joy", color="#fff"))

    updated = await update.execute(alice.id, alice.id, joy.id, EmotionUpdateInput(name="Glee"))
    assert updated.name == "Glee"
    assert await delete.execute(alice.id, alice.id, joy.id) is True
    calls = owners.persist_calls
    assert await delete.execute(alice.id, alice.id, joy.id) is False
    assert owners.persist_calls == calls
    listing = ListEmotionsUseCase(uow_factory, policy, permission_checker)
    assert await listing.execute(alice.id, alice.id) == []


@pytest.mark.asyncio
async def test_day_lifecycle(runner, uow_factory, policy, permission_checker, seed_user) -> None:
    alice = seed_user("alice")
    joy = await AddEmotionUseCase(runner, permission_checker).execute(
        alice.id, alice.id, EmotionCreateInput(name="Joy", color="#fff")
    )
    add = AddDayUseCase(runner, permission_checker)
    update = UpdateDayUseCase(runner, permission_checker)
    delete = DeleteDayUseCase(runner, permission_checker)
    listing = ListDaysUseCase(uow_factory, policy, permission_checker)

    await add.execute(alice.id, alice.id, DayCreateInput(date="2024-06-02", emotions=[joy.id]))
    await add.execute(alice.id, alice.id, DayCreateInput(date="2024-06-01", emotions=[joy.id]))
    assert [d.date for d in await listing.execute(alice.id, alice.id)] == ["2024-06-01", "2024-06-02"]

    updated = await update.execute(
        alice.id, alice.id, "2024-06-01", DayUpdateInput(description="rainy")
    )
    assert updated.description == "rainy"
    single = await listing.execute(alice.id, alice.id, "2024-06-01")
    assert [d.description for d in single] == ["rainy"]

    assert await delete.execute(alice.id, alice.id, "2024-06-01") is True
    assert await delete.execute(alice.id, alice.id, "2024-06-01") is False
    assert [d.date for d in await listing.execute(alice.id, alice.id)] == ["2024-06-02"]


@pytest.mark.asyncio
async def test_add_day_future_date(runner, permission_checker, seed_user, owners) -> None:
    alice = seed_user("alice")
    joy = await AddEmotionUseCase(runner, permission_checker).execute(
        alice.id, alice.id, EmotionCreateInput(name="Joy", color="#fff")
    )
    with pytest.raises(InvalidDate):
        await AddDayUseCase(runner, permission_checker).execute(
            alice.id, alice.id, DayCreateInput(date="2024-06-16", emotions=[joy.id])
        )
    assert owners.stored(alice.id).days == []


@pytest.mark.asyncio
async def test_delete_user(runner, uow_factory, permission_checker, seed_user) -> None:
    alice = seed_user("alice")
    await DeleteUserUseCase(runner, permission_checker).execute(alice.id, alice.id)
    with pytest.raises(NotFound):
        await GetUserUseCase(uow_factory, permission_checker).execute(alice.id, alice.id)


@pytest.mark.asyncio
async def test_delete_other_user_requires_admin(runner, permission_checker, seed_user) -> None:
    alice = seed_user("alice")
    bob = seed_user("bob")
    admin = seed_user("root", role="admin")
    delete = DeleteUserUseCase(runner, permission_checker)
    with pytest.raises(PermissionDenied):
        await delete.execute(alice.id, bob.id)
    await delete.execute(admin.id, bob.id)


# --- Runner ---


@pytest.mark.asyncio
async def test_runner_retries_on_conflict(runner, seed_user, owners) -> None:
    alice = seed_user("alice")
    owners.failures = [Conflict("stale")]
    emotion = await runner.run(alice.id, lambda record: record.add_emotion("Joy", "#fff"))
    assert owners.persist_calls == 2
    assert [e.id for e in owners.stored(alice.id).emotions] == [emotion.id]


@pytest.mark.asyncio
async def test_runner_reloads_after_concurrent_write(runner, seed_user, owners) -> None:
    """A version bump between load and persist restarts from fresh state."""
    alice = seed_user("alice")
    loads = []

    def mutate(record):
        loads.append(record.user.version)
        if len(loads) == 1:
            owners.stored(alice.id).version += 1
        return record.add_emotion("Joy", "#fff")

    await runner.run(alice.id, mutate)
    assert loads == [1, 2]
    assert owners.stored(alice.id).version == 3


@pytest.mark.asyncio
async def test_runner_gives_up(runner, seed_user, owners) -> None:
    alice = seed_user("alice")
    owners.failures = [StorageError("down") for _ in range(3)]
    with pytest.raises(StorageError):
        await runner.run(alice.id, lambda record: record.add_emotion("Joy", "#fff"))
    assert owners.persist_calls == 3
    assert owners.stored(alice.id).emotions == []


@pytest.mark.asyncio
async def test_runner_does_not_retry_validation(runner, seed_user, owners) -> None:
    alice = seed_user("alice")
    with pytest.raises(ValidationError):
        await runner.run(alice.id, lambda record: record.add_emotion("", "#fff"))
    assert owners.persist_calls == 0


def test_runner_rejects_zero_attempts(uow_factory, policy) -> None:
    with pytest.raises(ValueError):
        OwnerMutationRunner(uow_factory, policy, max_attempts=0)


@pytest.mark.asyncio
async def test_concurrent_adds_are_serialized(runner, permission_checker, seed_user, owners) -> None:
    """Same-name adds racing on one owner: exactly one wins."""
    alice = seed_user("alice")
    add = AddEmotionUseCase(runner, permission_checker)
    results = await asyncio.gather(
        *(
            add.execute(alice.id, alice.id, EmotionCreateInput(name="Joy", color="#fff"))
            for _ in range(5)
        ),
        return_exceptions=True,
    )
    assert sum(not isinstance(r, Exception) for r in results) == 1
    assert all(isinstance(r, DuplicateKey) for r in results if isinstance(r, Exception))
    assert len(owners.stored(alice.id).emotions) == 1


@pytest.mark.asyncio
async def test_concurrent_distinct_adds_all_land(runner, seed_user, owners) -> None:
    alice = seed_user("alice")
    await asyncio.gather(
        *(runner.run(alice.id, lambda record, i=i: record.add_emotion(f"e{i}", "#fff")) for i in range(10))
    )
    stored = owners.stored(alice.id)
    assert len(stored.emotions) == 10
    assert stored.version == 11


@pytest.mark.asyncio
async def test_owner_locks_are_released() -> None:
    locks = OwnerLocks()
    owner_id = uuid4()
    async with locks.hold(owner_id):
        assert len(locks) == 1
    assert len(locks) == 0


# --- Cross-owner reads ---


@pytest.mark.asyncio
async def test_list_users(uow_factory, permission_checker, seed_user, owners) -> None:
    alice = seed_user("alice")
    bob = seed_user("bob")
    admin = seed_user("root", role="admin")
    owners.stored(bob.id).deleted = True
    use_case = ListUsersUseCase(uow_factory, permission_checker)
    assert [u.name for u in await use_case.execute(admin.id)] == ["alice", "root"]
    with pytest.raises(PermissionDenied):
        await use_case.execute(alice.id)


@pytest.mark.asyncio
async def test_list_days_by_date(runner, uow_factory, policy, permission_checker, seed_user, owners) -> None:
    """Days of every active user grouped by date; tombstones left out."""
    alice = seed_user("alice")
    bob = seed_user("bob")
    carol = seed_user("carol")
    admin = seed_user("root", role="admin")
    add_emotion = AddEmotionUseCase(runner, permission_checker)
    add_day = AddDayUseCase(runner, permission_checker)
    for user in (alice, bob, carol):
        joy = await add_emotion.execute(user.id, user.id, EmotionCreateInput(name="Joy", color="#fff"))
        await add_day.execute(user.id, user.id, DayCreateInput(date="2024-06-02", emotions=[joy.id]))
    joy = (await ListEmotionsUseCase(uow_factory, policy, permission_checker).execute(alice.id, alice.id))[0]
    await add_day.execute(alice.id, alice.id, DayCreateInput(date="2024-06-01", emotions=[joy.id]))
    await DeleteDayUseCase(runner, permission_checker).execute(bob.id, bob.id, "2024-06-02")
    owners.stored(carol.id).deleted = True

    use_case = ListDaysByDateUseCase(uow_factory, policy, permission_checker)
    grouped = await use_case.execute(admin.id)
    assert list(grouped) == ["2024-06-01", "2024-06-02"]
    assert [d.owner_id for d in grouped["2024-06-02"]] == [alice.id]
    assert [d.owner_id for d in grouped["2024-06-01"]] == [alice.id]

    single = await use_case.execute(admin.id, "2024-06-01")
    assert list(single) == ["2024-06-01"]
    assert await use_case.execute(admin.id, "2024-05-01") == {}


@pytest.mark.asyncio
async def test_list_days_by_date_requires_any_read(uow_factory, policy, permission_checker, seed_user) -> None:
    alice = seed_user("alice")
    with pytest.raises(PermissionDenied):
        await ListDaysByDateUseCase(uow_factory, policy, permission_checker).execute(alice.id)


@pytest.mark.asyncio
async def test_get_emotion(runner, uow_factory, policy, permission_checker, seed_user) -> None:
    alice = seed_user("alice")
    joy = await AddEmotionUseCase(runner, permission_checker).execute(
        alice.id, alice.id, EmotionCreateInput(name="Joy", color="#fff")
    )
    use_case = GetEmotionUseCase(uow_factory, policy, permission_checker)
    assert (await use_case.execute(alice.id, alice.id, joy.id)).name == "Joy"
    await DeleteEmotionUseCase(runner, permission_checker).execute(alice.id, alice.id, joy.id)
    with pytest.raises(NotFound):
        await use_case.execute(alice.id, alice.id, joy.id)
