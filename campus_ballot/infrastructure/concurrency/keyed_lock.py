"""Per-key asyncio lock manager.

Hands out one asyncio.Lock per key. Locks are reference-counted and
discarded once no task holds or waits on them, so the table stays
bounded by the number of keys currently in contention.

Only tasks contending for the same key serialize; there is no global
critical section around the protected work.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Hashable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field


@dataclass
class _LockEntry:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    users: int = 0


class KeyedLock:
    """Mutual exclusion per key.

    Example:
        >>> locks = KeyedLock()
        >>> async with locks.hold(("voter-1", "session-1", "President")):
        ...     ...  # exclusive for this key only
    """

    def __init__(self) -> None:
        self._entries: dict[Hashable, _LockEntry] = {}

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        """Acquire the lock for ``key`` for the duration of the block."""
        entry = self._entries.get(key)
        if entry is None:
            entry = _LockEntry()
            self._entries[key] = entry
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if entry.users == 0:
                del self._entries[key]

    def is_locked(self, key: Hashable) -> bool:
        entry = self._entries.get(key)
        return entry is not None and entry.lock.locked()

    def __len__(self) -> int:
        """Number of keys currently held or awaited."""
        return len(self._entries)
