"""Unit tests for KeyedLock."""

from __future__ import annotations

import asyncio

from campus_ballot.infrastructure.concurrency.keyed_lock import KeyedLock


class TestKeyedLock:
    """Per-key mutual exclusion."""

    async def test_same_key_serializes(self) -> None:
        locks = KeyedLock()
        order: list[str] = []

        async def worker(name: str) -> None:
            async with locks.hold("key"):
                order.append(f"{name}-in")
                await asyncio.sleep(0)
                order.append(f"{name}-out")

        await asyncio.gather(worker("a"), worker("b"))

        assert order == ["a-in", "a-out", "b-in", "b-out"]

    async def test_different_keys_do_not_block(self) -> None:
        locks = KeyedLock()

        async with locks.hold("a"):
            assert locks.is_locked("a")

            async def other() -> bool:
                async with locks.hold("b"):
                    return True

            assert await asyncio.wait_for(other(), timeout=1.0)

    async def test_entries_are_released(self) -> None:
        locks = KeyedLock()

        async with locks.hold(("v1", "s1", "President")):
            assert len(locks) == 1

        assert len(locks) == 0
        assert not locks.is_locked(("v1", "s1", "President"))

    async def test_entry_released_after_exception(self) -> None:
        locks = KeyedLock()

        try:
            async with locks.hold("key"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        assert len(locks) == 0
