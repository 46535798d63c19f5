import asyncio

import pytest

from bookshelf_api.debounce import Debouncer, run_debounced


@pytest.mark.asyncio
async def test_only_last_scheduled_task_runs():
    debouncer = Debouncer(delay_seconds=0.01)
    calls: list[int] = []

    async def work(n: int) -> int:
        calls.append(n)
        return n

    first = debouncer.schedule("title", lambda: work(1))
    second = debouncer.schedule("title", lambda: work(2))

    assert await second == 2
    assert first.cancelled()
    assert calls == [2]
    assert not debouncer.is_pending("title")


@pytest.mark.asyncio
async def test_slots_are_independent_per_key():
    debouncer = Debouncer(delay_seconds=0.01)

    async def work(value: str) -> str:
        return value

    title_task = debouncer.schedule(("ses-1", "title"), lambda: work("t"))
    author_task = debouncer.schedule(("ses-1", "author"), lambda: work("a"))

    assert await title_task == "t"
    assert await author_task == "a"


@pytest.mark.asyncio
async def test_started_work_is_not_cancelled_by_later_schedule():
    debouncer = Debouncer(delay_seconds=0.0)
    started = asyncio.Event()
    release = asyncio.Event()

    async def slow() -> str:
        started.set()
        await release.wait()
        return "first"

    async def fast() -> str:
        return "second"

    first = debouncer.schedule("k", slow)
    await started.wait()
    second = debouncer.schedule("k", fast)
    release.set()

    assert await first == "first"
    assert await second == "second"


@pytest.mark.asyncio
async def test_run_debounced_reports_superseded_caller():
    debouncer = Debouncer(delay_seconds=0.01)

    async def work(n: int) -> int:
        return n

    earlier = asyncio.create_task(run_debounced(debouncer, "k", lambda: work(1)))
    await asyncio.sleep(0)
    later = await run_debounced(debouncer, "k", lambda: work(2))

    assert await earlier == (True, None)
    assert later == (False, 2)


@pytest.mark.asyncio
async def test_cancel_all_clears_pending_tasks():
    debouncer = Debouncer(delay_seconds=10.0)

    async def never() -> None:
        raise AssertionError("should not run")

    task = debouncer.schedule("k", never)
    debouncer.cancel_all()
    await asyncio.wait({task})

    assert task.cancelled()
    assert not debouncer.is_pending("k")
