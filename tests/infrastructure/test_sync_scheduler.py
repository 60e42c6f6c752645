# tests/infrastructure/test_sync_scheduler.py
import asyncio

import pytest

from vas_catalog.infrastructure.sync.scheduler import SyncScheduler


class _GatedSleep:
    """Кожен виклик чекає, поки тест не «прокрутить» годинник."""

    def __init__(self):
        self.calls = []
        self._gate = asyncio.Queue()

    async def __call__(self, delay):
        self.calls.append(delay)
        await self._gate.get()

    def tick(self, times=1):
        for _ in range(times):
            self._gate.put_nowait(None)


async def _settle(rounds=5):
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_first_run_happens_after_interval():
    sleep = _GatedSleep()
    scheduler = SyncScheduler(sleep=sleep)
    runs = []

    async def job():
        runs.append("run")

    scheduler.schedule("flash", 30, job)
    await _settle()
    assert sleep.calls == [30]
    assert runs == []

    sleep.tick()
    await _settle()
    assert runs == ["run"]

    sleep.tick()
    await _settle()
    assert runs == ["run", "run"]
    await scheduler.stop()
    assert not scheduler.is_running


@pytest.mark.asyncio
async def test_timers_are_independent():
    fast, slow = [], []
    scheduler = SyncScheduler(sleep=_GatedSleep())

    async def fast_job():
        fast.append(1)

    async def slow_job():
        slow.append(1)

    scheduler.schedule("fast", 1, fast_job)
    scheduler.schedule("slow", 10, slow_job)
    await _settle()
    assert sorted(scheduler.jobs()) == ["fast", "slow"]
    assert scheduler.cancel("fast") is True
    assert scheduler.cancel("fast") is False
    assert scheduler.jobs() == ["slow"]
    assert scheduler.is_running
    await scheduler.stop()
    assert scheduler.jobs() == []


@pytest.mark.asyncio
async def test_reschedule_replaces_existing_timer():
    scheduler = SyncScheduler(sleep=_GatedSleep())

    async def job():
        return None

    first = scheduler.schedule("flash", 5, job)
    second = scheduler.schedule("flash", 5, job)
    await _settle()
    assert first.cancelled()
    assert not second.done()
    await scheduler.stop()


@pytest.mark.asyncio
async def test_spawned_job_failure_is_logged_not_raised(caplog):
    scheduler = SyncScheduler()

    async def broken():
        raise RuntimeError("boom")

    task = scheduler.spawn(broken, name="broken")
    await asyncio.gather(task, return_exceptions=True)
    await _settle()
    assert scheduler.inflight == 0
    assert any("scheduler.job_failed" in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_stop_cancels_inflight_runs():
    scheduler = SyncScheduler()
    started = asyncio.Event()

    async def slow():
        started.set()
        await asyncio.sleep(3600)

    task = scheduler.spawn(slow)
    await started.wait()
    await scheduler.stop()
    assert task.cancelled()
    assert scheduler.inflight == 0


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        SyncScheduler().schedule("x", 0, None)
