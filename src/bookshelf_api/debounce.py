import asyncio
import logging
from collections.abc import Awaitable, Callable, Hashable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Debouncer:
    """
    Single-slot pending-task register, one slot per key.

    Scheduling into a slot cancels whatever is still waiting there. Once a
    task's delay has elapsed it leaves the slot, so work that has already
    started (e.g. a network call) is never cancelled by a later schedule.
    """

    def __init__(self, delay_seconds: float) -> None:
        self.delay_seconds = delay_seconds
        self._pending: dict[Hashable, asyncio.Task[Any]] = {}

    def schedule(self, key: Hashable, factory: Callable[[], Awaitable[T]]) -> asyncio.Task[T]:
        previous = self._pending.pop(key, None)
        if previous is not None and not previous.done():
            previous.cancel()
            logger.debug("Debounced task superseded key=%s", key)

        task: asyncio.Task[T] = asyncio.create_task(self._run(key, factory))
        self._pending[key] = task
        task.add_done_callback(lambda t: self._release(key, t))
        return task

    def is_pending(self, key: Hashable) -> bool:
        return key in self._pending

    def cancel_all(self) -> None:
        for task in self._pending.values():
            task.cancel()
        self._pending.clear()

    async def _run(self, key: Hashable, factory: Callable[[], Awaitable[T]]) -> T:
        await asyncio.sleep(self.delay_seconds)
        current = asyncio.current_task()
        if current is not None:
            self._release(key, current)
        return await factory()

    def _release(self, key: Hashable, task: asyncio.Task[Any]) -> None:
        if self._pending.get(key) is task:
            del self._pending[key]


async def run_debounced(
    debouncer: Debouncer, key: Hashable, factory: Callable[[], Awaitable[T]]
) -> tuple[bool, T | None]:
    """
    Schedules ``factory`` and waits for it.

    Returns ``(True, None)`` when a newer schedule for the same key replaced
    this one before its delay elapsed, otherwise ``(False, result)``.
    """
    task = debouncer.schedule(key, factory)
    # asyncio.wait does not propagate our own cancellation into the task
    await asyncio.wait({task})
    if task.cancelled():
        return True, None
    return False, task.result()
