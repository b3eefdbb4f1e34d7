"""InMemoryUserRepository — locking and id-sequence behaviour.

Invariants:
    - 100 concurrent creates yield ids 1..100 with no duplicates or gaps
    - Concurrent reads and writes never observe a half-applied update
    - Ids are not reused after delete
    - Email uniqueness is not enforced in memory
"""

import asyncio

from user_service.core.user_entity import UserChanges


async def test_concurrent_creates_yield_distinct_sequential_ids(memory_repo):
    users = await asyncio.gather(*[
        memory_repo.create(f"User {i}", f"user{i}@x.com") for i in range(100)
    ])
    ids = sorted(u.id for u in users)
    assert ids == list(range(1, 101))
    assert len(await memory_repo.get_all()) == 100


async def test_concurrent_reads_and_updates_see_whole_records(memory_repo):
    user = await memory_repo.create("Ann", "ann@x.com")

    async def rename(i):
        return await memory_repo.update(user.id, UserChanges(name=f"Ann {i}"))

    results = await asyncio.gather(
        *[rename(i) for i in range(20)],
        *[memory_repo.get_by_id(user.id) for _ in range(20)],
    )
    assert all(r.email == "ann@x.com" for r in results)
    final = await memory_repo.get_by_id(user.id)
    assert final.name.startswith("Ann ")


async def test_ids_not_reused_after_delete(memory_repo):
    first = await memory_repo.create("A", "a@x.com")
    await memory_repo.delete(first.id)
    second = await memory_repo.create("B", "b@x.com")
    assert second.id == first.id + 1


async def test_duplicate_email_allowed(memory_repo):
    a = await memory_repo.create("A", "same@x.com")
    b = await memory_repo.create("B", "same@x.com")
    assert a.id != b.id


async def test_update_does_not_mutate_previously_returned_user(memory_repo):
    original = await memory_repo.create("Ann", "ann@x.com")
    await memory_repo.update(original.id, UserChanges(name="Annie"))
    assert original.name == "Ann"


async def test_health_check_always_true(memory_repo):
    assert await memory_repo.health_check() is True
