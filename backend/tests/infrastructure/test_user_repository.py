"""In-Memory User Repository — tests for keyed storage, copies and atomic mutation.

Tests cover:
    - insert assigns a fresh id and stores under it
    - get/list return copies (mutating them never touches the store)
    - replace keys by the path id, ignoring the payload's id
    - replace/remove on an absent id raise UserNotFoundError
    - id collisions regenerate; exhaustion raises the fatal error
    - concurrent replaces on one id leave exactly one submitted payload
"""

import asyncio
from uuid import UUID, uuid4

import pytest

from app.core.errors import IdentifierSpaceExhaustedError, UserNotFoundError
from app.infrastructure.user_repository import InMemoryUserRepository


async def test_insert_assigns_id_and_stores(repository, valid_user):
    user_id = await repository.insert(valid_user)

    assert isinstance(user_id, UUID)
    stored = await repository.get(user_id)
    assert stored is not None
    assert stored.id == user_id
    assert stored.model_dump(exclude={"id"}) == valid_user.model_dump(exclude={"id"})


async def test_insert_ignores_caller_supplied_id(repository, user_factory):
    forged = uuid4()
    user_id = await repository.insert(user_factory(id=forged))
    assert user_id != forged
    assert await repository.get(forged) is None


async def test_insert_does_not_mutate_argument(repository, valid_user):
    await repository.insert(valid_user)
    assert valid_user.id is None


async def test_get_absent_returns_none(repository):
    assert await repository.get(uuid4()) is None


async def test_get_returns_a_copy(repository, valid_user):
    user_id = await repository.insert(valid_user)
    copy = await repository.get(user_id)
    copy.name = "Mutated"
    assert (await repository.get(user_id)).name == "Ana"


async def test_list_returns_snapshot(repository, user_factory):
    assert await repository.list() == []
    ids = {
        await repository.insert(user_factory(name=name))
        for name in ("Ana", "Bo", "Cy")
    }
    snapshot = await repository.list()
    assert {u.id for u in snapshot} == ids

    snapshot[0].name = "Mutated"
    snapshot.clear()
    assert len(await repository.list()) == 3
    assert all(u.name != "Mutated" for u in await repository.list())


async def test_repeated_reads_are_identical(repository, valid_user):
    user_id = await repository.insert(valid_user)
    assert await repository.get(user_id) == await repository.get(user_id)
    assert await repository.list() == await repository.list()


async def test_replace_uses_path_id_as_key(repository, user_factory):
    user_id = await repository.insert(user_factory())
    await repository.replace(user_id, user_factory(id=uuid4(), name="Bo"))

    stored = await repository.get(user_id)
    assert stored.id == user_id
    assert stored.name == "Bo"
    assert await repository.count() == 1


async def test_replace_is_wholesale(repository, user_factory):
    user_id = await repository.insert(user_factory(email="ana@example.com"))
    await repository.replace(user_id, user_factory(email=None))
    assert (await repository.get(user_id)).email is None


async def test_replace_absent_raises_not_found(repository, valid_user):
    missing = uuid4()
    with pytest.raises(UserNotFoundError) as excinfo:
        await repository.replace(missing, valid_user)
    assert excinfo.value.context.user_id == missing
    assert await repository.count() == 0


async def test_remove_returns_prior_value(repository, valid_user):
    user_id = await repository.insert(valid_user)
    removed = await repository.remove(user_id)
    assert removed.id == user_id
    assert await repository.get(user_id) is None


async def test_remove_absent_raises_not_found(repository):
    with pytest.raises(UserNotFoundError):
        await repository.remove(uuid4())


async def test_remove_twice_second_is_not_found(repository, valid_user):
    user_id = await repository.insert(valid_user)
    await repository.remove(user_id)
    with pytest.raises(UserNotFoundError):
        await repository.remove(user_id)


async def test_id_collision_regenerates(valid_user):
    taken = uuid4()
    fresh = uuid4()
    ids = iter([taken, taken, fresh])
    repository = InMemoryUserRepository(id_factory=lambda: next(ids))

    # first insert takes `taken`, second collides once then gets `fresh`
    assert await repository.insert(valid_user) == taken
    assert await repository.insert(valid_user) == fresh


async def test_identifier_exhaustion_is_fatal(valid_user):
    constant = uuid4()
    repository = InMemoryUserRepository(
        id_factory=lambda: constant, max_id_attempts=3,
    )
    await repository.insert(valid_user)

    with pytest.raises(IdentifierSpaceExhaustedError) as excinfo:
        await repository.insert(valid_user)
    assert excinfo.value.attempts == 3
    assert await repository.count() == 1


async def test_concurrent_replaces_leave_one_submitted_payload(repository, user_factory):
    user_id = await repository.insert(user_factory())
    payloads = [user_factory(name=f"Writer{i}", age=i + 1) for i in range(25)]

    await asyncio.gather(*(repository.replace(user_id, p) for p in payloads))

    stored = await repository.get(user_id)
    submitted = [p.model_dump(exclude={"id"}) for p in payloads]
    assert stored.model_dump(exclude={"id"}) in submitted
    # no field-level merge: name and age come from the same writer
    assert stored.name == f"Writer{stored.age - 1}"
    assert await repository.count() == 1


async def test_concurrent_inserts_get_distinct_ids(repository, user_factory):
    ids = await asyncio.gather(
        *(repository.insert(user_factory()) for _ in range(50)),
    )
    assert len(set(ids)) == 50
    assert await repository.count() == 50


async def test_reads_never_see_partial_remove(repository, user_factory):
    ids = [await repository.insert(user_factory()) for _ in range(20)]

    async def remover():
        for user_id in ids:
            await repository.remove(user_id)

    async def reader():
        seen = []
        for _ in range(20):
            users = await repository.list()
            seen.append((len(users), await repository.count()))
        return seen

    _, observations = await asyncio.gather(remover(), reader())
    assert all(0 <= n <= 20 for n, _ in observations)
    assert await repository.count() == 0
