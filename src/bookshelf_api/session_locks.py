import asyncio
import weakref
from collections.abc import Hashable


class SessionLocks:
    """
    Register of asyncio locks, one per session, created on first use.

    Entries are weakly held: a lock disappears once no request holds or
    waits on it, so the register does not grow with the number of sessions.
    """

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[Hashable, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def get(self, key: Hashable) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def __len__(self) -> int:
        return len(self._locks)
