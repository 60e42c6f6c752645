# tests/infrastructure/test_sync_orchestrator.py
import asyncio

import httpx
import pytest

from vas_catalog.errors.custom_errors import ProviderNotFoundError, ProviderTransportError
from vas_catalog.infrastructure.cache.product_cache import ProductCache
from vas_catalog.infrastructure.normalizers.registry import default_registry
from vas_catalog.infrastructure.providers.fetcher import ProviderFetcher
from vas_catalog.infrastructure.providers.registry import ProviderRegistry
from vas_catalog.infrastructure.providers.signer import RequestSigner
from vas_catalog.infrastructure.sync.orchestrator import SyncOrchestrator
from vas_catalog.infrastructure.sync.scheduler import SyncScheduler


class FakeFetcher:
    """Віддає заготовлені відповіді по черзі; виняток у черзі кидається."""

    def __init__(self, script):
        self.script = {pid: list(steps) for pid, steps in script.items()}
        self.calls = []

    async def fetch_products(self, connection):
        self.calls.append(connection.provider_id)
        steps = self.script[connection.provider_id]
        step = steps.pop(0) if len(steps) > 1 else steps[0]
        if isinstance(step, Exception):
            raise step
        return step


@pytest.fixture
def build(connection_factory, recording_sleep, fixed_now):
    def _build(script, **conn_overrides):
        registry = ProviderRegistry(
            connection_factory(pid, **conn_overrides) for pid in script
        )
        cache = ProductCache(clock=lambda: fixed_now)
        fetcher = FakeFetcher(script)
        orchestrator = SyncOrchestrator(
            registry,
            fetcher,
            default_registry(clock=lambda: fixed_now),
            cache,
            SyncScheduler(),
            clock=lambda: fixed_now,
            sleep=recording_sleep,
        )
        return orchestrator, cache, fetcher

    return _build


def _down():
    return ProviderTransportError("vendor down")


@pytest.mark.asyncio
async def test_successful_sync_fills_partition(build, flash_payload):
    orchestrator, cache, _ = build({"flash": [flash_payload]})
    result = await orchestrator.run_sync("flash")
    assert result.success
    assert result.attempts == 1
    assert result.product_count == 3
    assert len(cache.get_by_provider("flash")) == 3
    stats = orchestrator.stats_for("flash")
    assert (stats.runs, stats.successes, stats.failures) == (1, 1, 0)


@pytest.mark.asyncio
async def test_retries_then_success_sleeps_between_attempts(build, flash_payload, recording_sleep):
    orchestrator, cache, fetcher = build({"flash": [_down(), _down(), flash_payload]}, retry_delay_sec=5)
    result = await orchestrator.run_sync("flash")
    assert result.success
    assert result.attempts == 3
    assert recording_sleep.calls == [5, 5]
    assert fetcher.calls == ["flash"] * 3


@pytest.mark.asyncio
async def test_exhausted_retries_keep_last_known_good(build, flash_payload, recording_sleep):
    orchestrator, cache, fetcher = build({"flash": [flash_payload, _down()]}, max_retries=2, retry_delay_sec=1)
    await orchestrator.run_sync("flash")
    before = cache.get_by_provider("flash")

    result = await orchestrator.run_sync("flash")

    assert not result.success
    assert result.attempts == 3
    assert result.error == "vendor down"
    assert result.product_count == 3
    assert cache.get_by_provider("flash") == before
    assert recording_sleep.calls == [1, 1]
    stats = orchestrator.stats_for("flash").to_dict()
    assert stats["failures"] == 1
    assert stats["lastError"] == "vendor down"


@pytest.mark.asyncio
async def test_first_sync_failure_leaves_provider_empty(build):
    orchestrator, cache, _ = build({"flash": [_down()]}, max_retries=0)
    result = await orchestrator.run_sync("flash")
    assert not result.success
    assert "flash" not in cache


@pytest.mark.asyncio
async def test_uninterpretable_payload_replaces_partition_with_empty(build, flash_payload):
    orchestrator, cache, _ = build({"flash": [flash_payload, {"surprise": True}]})
    await orchestrator.run_sync("flash")
    result = await orchestrator.run_sync("flash")
    assert result.success
    assert cache.get_by_provider("flash") == []


@pytest.mark.asyncio
async def test_unknown_provider_is_loud(build, flash_payload):
    orchestrator, _, _ = build({"flash": [flash_payload]})
    with pytest.raises(ProviderNotFoundError):
        await orchestrator.run_sync("nope")
    with pytest.raises(ProviderNotFoundError):
        orchestrator.stats_for("nope")


@pytest.mark.asyncio
async def test_sync_all_isolates_failures(build, flash_payload, easypay_payload):
    orchestrator, cache, _ = build(
        {"easypay": [easypay_payload], "flash": [_down()]}, max_retries=0
    )
    results = {r.provider_id: r for r in await orchestrator.sync_all()}
    assert results["easypay"].success
    assert not results["flash"].success
    assert len(cache.get_all()) == 2


@pytest.mark.asyncio
async def test_listeners_run_after_success_only(build, flash_payload):
    orchestrator, _, _ = build({"flash": [flash_payload, _down()]}, max_retries=0)
    seen = []

    async def async_listener(provider_id, products):
        seen.append(("async", provider_id, len(products)))

    def broken_listener(provider_id, products):
        raise RuntimeError("listener bug")

    orchestrator.add_listener(broken_listener)
    orchestrator.add_listener(async_listener)

    assert (await orchestrator.run_sync("flash")).success
    assert not (await orchestrator.run_sync("flash")).success
    assert seen == [("async", "flash", 3)]


@pytest.mark.asyncio
async def test_start_all_waits_for_initial_and_arms_timers(build, flash_payload, easypay_payload):
    orchestrator, cache, _ = build({"easypay": [easypay_payload], "flash": [flash_payload]})
    results = await orchestrator.start_all(wait_initial=True)
    try:
        assert sorted(r.provider_id for r in results) == ["easypay", "flash"]
        assert orchestrator.is_running
        assert len(cache.get_all()) == 5
    finally:
        await orchestrator.stop()
    assert not orchestrator.is_running


@pytest.mark.asyncio
async def test_undecodable_body_is_retried_and_keeps_last_known_good(
    connection_factory, recording_sleep, fixed_now, flash_payload
):
    bodies = [httpx.Response(200, json=flash_payload)]

    def handler(request):
        if bodies:
            return bodies.pop(0)
        return httpx.Response(200, content=b'{"vouchers": ["\xff\xfe"]}')

    registry = ProviderRegistry([connection_factory("flash", max_retries=2, retry_delay_sec=1)])
    cache = ProductCache(clock=lambda: fixed_now)
    fetcher = ProviderFetcher(RequestSigner(clock=lambda: 1), transport=httpx.MockTransport(handler))
    orchestrator = SyncOrchestrator(
        registry,
        fetcher,
        default_registry(clock=lambda: fixed_now),
        cache,
        SyncScheduler(),
        clock=lambda: fixed_now,
        sleep=recording_sleep,
    )
    try:
        assert (await orchestrator.run_sync("flash")).success
        result = await orchestrator.force_sync("flash")
    finally:
        await fetcher.close()

    assert not result.success
    assert result.attempts == 3
    assert recording_sleep.calls == [1, 1]
    assert len(cache.get_by_provider("flash")) == 3
    stats = orchestrator.stats_for("flash")
    assert (stats.runs, stats.successes, stats.failures) == (2, 1, 1)


class GatedFetcher:
    """Кожен виклик чекає свого сигналу; так тест керує порядком завершення."""

    def __init__(self, payloads):
        self.payloads = list(payloads)
        self.gates = [asyncio.Event() for _ in payloads]
        self.started = 0

    async def fetch_products(self, connection):
        index = self.started
        self.started += 1
        await self.gates[index].wait()
        return self.payloads[index]


@pytest.mark.asyncio
async def test_overlapping_runs_last_finished_wins(connection_factory, recording_sleep, fixed_now):
    first = {"vouchers": [{"code": "OLD-1", "name": "Old", "faceValue": 1, "status": "available"}]}
    second = {"vouchers": [{"code": "NEW-1", "name": "New", "faceValue": 2, "status": "available"}]}
    fetcher = GatedFetcher([first, second])
    cache = ProductCache(clock=lambda: fixed_now)
    orchestrator = SyncOrchestrator(
        ProviderRegistry([connection_factory("flash")]),
        fetcher,
        default_registry(clock=lambda: fixed_now),
        cache,
        SyncScheduler(),
        clock=lambda: fixed_now,
        sleep=recording_sleep,
    )

    early = asyncio.create_task(orchestrator.run_sync("flash"))
    late = asyncio.create_task(orchestrator.run_sync("flash"))
    while fetcher.started < 2:
        await asyncio.sleep(0)

    fetcher.gates[1].set()
    assert (await late).success
    assert [p.native_id for p in cache.get_by_provider("flash")] == ["NEW-1"]

    fetcher.gates[0].set()
    assert (await early).success
    assert [p.native_id for p in cache.get_by_provider("flash")] == ["OLD-1"]
    assert orchestrator.stats_for("flash").successes == 2
