# 🔄 vas_catalog/infrastructure/sync/orchestrator.py
"""
🔄 SyncOrchestrator — тримає партицію кешу кожного провайдера свіжою.

🔹 `run_sync(id)`: fetch → normalize під політикою ретраїв → `cache.replace` (одна атомарна заміна).
🔹 Вичерпані ретраї логуються й рахуються; попередня партиція лишається («last known good»).
🔹 `start_all()` — одна негайна синхронізація на провайдера + незалежний таймер з його інтервалом.
🔹 Прогони одного провайдера можуть перекриватися; в кеші лишається той, що завершився останнім.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio                                                                   # 🔁 Паралельні синки
import inspect                                                                   # 🔍 Async-слухачі
import logging                                                                   # 🧾 Логи синхронізації
import time                                                                      # ⏱️ Тривалість прогону
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

# 🧩 Внутрішні модулі
from vas_catalog.domain.products.entities import Product
from vas_catalog.errors.custom_errors import ProviderNotFoundError, RetryExhaustedError
from vas_catalog.infrastructure.cache.product_cache import ProductCache
from vas_catalog.infrastructure.normalizers.registry import NormalizerRegistry
from vas_catalog.infrastructure.providers.connection import ProviderConnection
from vas_catalog.infrastructure.providers.fetcher import ProviderFetcher
from vas_catalog.infrastructure.providers.registry import ProviderRegistry
from vas_catalog.infrastructure.sync.retry_policy import RetryPolicy, Sleep, retry_async
from vas_catalog.infrastructure.sync.scheduler import SyncScheduler
from vas_catalog.shared.metrics.sync import SYNC_ATTEMPTS, SYNC_DURATION, SYNC_FAILURE, SYNC_SUCCESS
from vas_catalog.shared.utils.logger import LOG_NAME

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.sync")

Clock = Callable[[], datetime]
SyncListener = Callable[[str, List[Product]], Union[None, Awaitable[None]]]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ================================
# 📦 РЕЗУЛЬТАТИ ТА СТАТИСТИКА
# ================================
@dataclass(frozen=True, slots=True)
class SyncResult:
    provider_id: str
    success: bool
    attempts: int
    product_count: int = 0
    duration_sec: float = 0.0
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "spId": self.provider_id,
            "success": self.success,
            "attempts": self.attempts,
            "productCount": self.product_count,
            "durationSec": round(self.duration_sec, 3),
            "error": self.error,
        }


@dataclass(slots=True)
class SyncStats:
    """Лічильники одного провайдера за час життя процесу."""

    runs: int = 0
    attempts: int = 0
    successes: int = 0
    failures: int = 0
    last_error: Optional[str] = None
    last_duration_sec: Optional[float] = None
    last_success_at: Optional[datetime] = None
    last_failure_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "runs": self.runs,
            "attempts": self.attempts,
            "successes": self.successes,
            "failures": self.failures,
            "lastError": self.last_error,
            "lastDurationSec": self.last_duration_sec,
            "lastSuccessAt": self.last_success_at.isoformat() if self.last_success_at else None,
            "lastFailureAt": self.last_failure_at.isoformat() if self.last_failure_at else None,
        }


# ================================
# 🔄 ОРКЕСТРАТОР
# ================================
class SyncOrchestrator:
    """🔄 Незалежні воркери синхронізації для кожного провайдера."""

    def __init__(
        self,
        registry: ProviderRegistry,
        fetcher: ProviderFetcher,
        normalizers: NormalizerRegistry,
        cache: ProductCache,
        scheduler: SyncScheduler,
        *,
        clock: Clock = _utc_now,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._registry = registry
        self._fetcher = fetcher
        self._normalizers = normalizers
        self._cache = cache
        self._scheduler = scheduler
        self._clock = clock
        self._sleep = sleep                                                      # 💤 Пауза між ретраями
        self._stats: Dict[str, SyncStats] = {pid: SyncStats() for pid in registry.ids()}
        self._listeners: List[SyncListener] = []
        logger.info("🔄 sync.orchestrator_init", extra={"providers": registry.ids()})

    # ================================
    # 👂 СЛУХАЧІ
    # ================================
    def add_listener(self, listener: SyncListener) -> None:
        """Викликається після кожної успішної заміни партиції."""
        self._listeners.append(listener)

    async def _notify(self, provider_id: str, products: List[Product]) -> None:
        for listener in list(self._listeners):
            try:
                outcome = listener(provider_id, products)
                if inspect.isawaitable(outcome):
                    await outcome
            except asyncio.CancelledError:
                raise
            except Exception as exc:                                             # 🧯 Слухач не ламає синк
                logger.error(
                    "❌ sync.listener_failed",
                    extra={"provider": provider_id, "error": repr(exc)},
                    exc_info=True,
                )

    # ================================
    # 🔁 ОДИН ПРОГІН
    # ================================
    async def run_sync(self, provider_id: str) -> SyncResult:
        """
        Синхронізує одного провайдера. Невідомий id → `ProviderNotFoundError`;
        транспортні збої після всіх ретраїв не виходять назовні.
        """
        connection = self._registry.get(provider_id)
        stats = self._stats.setdefault(provider_id, SyncStats())
        policy = RetryPolicy.for_connection(connection)
        normalizer = self._normalizers.for_provider(connection)
        attempts = 0
        stats.runs += 1

        async def attempt() -> List[Product]:
            nonlocal attempts
            attempts += 1
            stats.attempts += 1
            SYNC_ATTEMPTS.labels(provider=provider_id).inc()
            raw = await self._fetcher.fetch_products(connection)
            return normalizer.normalize(raw)

        def on_error(attempt_no: int, exc: BaseException) -> None:
            logger.warning(
                "⚠️ sync.attempt_failed",
                extra={
                    "provider": provider_id,
                    "attempt": attempt_no,
                    "max_attempts": policy.max_attempts,
                    "error": str(exc),
                },
            )

        started = time.perf_counter()
        logger.info("🔄 sync.started", extra={"provider": provider_id})
        try:
            products = await retry_async(attempt, policy, sleep=self._sleep, on_error=on_error)
        except RetryExhaustedError as exc:
            duration = time.perf_counter() - started
            return self._record_failure(connection, stats, exc, attempts, duration)
        finally:
            SYNC_DURATION.labels(provider=provider_id).observe(time.perf_counter() - started)

        self._cache.replace(provider_id, products)                               # ⚛️ Атомарна заміна партиції
        duration = time.perf_counter() - started
        stats.successes += 1
        stats.last_duration_sec = duration
        stats.last_success_at = self._clock()
        SYNC_SUCCESS.labels(provider=provider_id).inc()
        logger.info(
            "✅ sync.completed",
            extra={
                "provider": provider_id,
                "products": len(products),
                "attempts": attempts,
                "duration": round(duration, 3),
            },
        )
        await self._notify(provider_id, products)
        return SyncResult(
            provider_id=provider_id,
            success=True,
            attempts=attempts,
            product_count=len(products),
            duration_sec=duration,
        )

    def _record_failure(
        self,
        connection: ProviderConnection,
        stats: SyncStats,
        exc: RetryExhaustedError,
        attempts: int,
        duration: float,
    ) -> SyncResult:
        provider_id = connection.provider_id
        error = str(exc.last_error) if exc.last_error else exc.message
        stats.failures += 1
        stats.last_error = error
        stats.last_duration_sec = duration
        stats.last_failure_at = self._clock()
        SYNC_FAILURE.labels(provider=provider_id).inc()
        logger.error(
            "❌ sync.exhausted",
            extra={
                "provider": provider_id,
                "kept_products": len(self._cache.get_by_provider(provider_id)),
                **exc.to_log_extra(),
            },
        )
        return SyncResult(
            provider_id=provider_id,
            success=False,
            attempts=attempts,
            product_count=len(self._cache.get_by_provider(provider_id)),
            duration_sec=duration,
            error=error,
        )

    async def sync_all(self) -> List[SyncResult]:
        """Паралельний `run_sync` для кожного увімкненого провайдера."""
        ids = [conn.provider_id for conn in self._registry.enabled()]
        results = await asyncio.gather(*(self.run_sync(pid) for pid in ids))
        logger.info(
            "📊 sync.all_completed",
            extra={"providers": len(results), "succeeded": sum(1 for r in results if r.success)},
        )
        return list(results)

    # ================================
    # ⏰ ПЛАНУВАННЯ
    # ================================
    async def start_all(self, *, wait_initial: bool = False) -> List[SyncResult]:
        """
        Негайна синхронізація кожного провайдера + таймер на його інтервалі.
        `wait_initial=True` → дочікується першого прогону і повертає результати.
        """
        initial: List[asyncio.Task] = []
        for conn in self._registry.enabled():
            provider_id = conn.provider_id
            job = self._job_for(provider_id)
            initial.append(self._scheduler.spawn(job, name=provider_id))
            self._scheduler.schedule(provider_id, conn.sync_interval_sec, job)
        logger.info("🚀 sync.started_all", extra={"providers": len(initial)})

        if not wait_initial:
            return []
        done = await asyncio.gather(*initial, return_exceptions=True)
        return [item for item in done if isinstance(item, SyncResult)]

    def _job_for(self, provider_id: str) -> Callable[[], Awaitable[SyncResult]]:
        async def job() -> SyncResult:
            return await self.run_sync(provider_id)

        return job

    async def force_sync(self, provider_id: str) -> SyncResult:
        logger.info("🛠️ sync.forced", extra={"provider": provider_id})
        return await self.run_sync(provider_id)

    async def force_sync_all(self) -> List[SyncResult]:
        logger.info("🛠️ sync.forced_all")
        return await self.sync_all()

    async def stop(self) -> None:
        await self._scheduler.stop()
        logger.info("🛑 sync.stopped")

    # ================================
    # 📊 СТАН
    # ================================
    @property
    def is_running(self) -> bool:
        return self._scheduler.is_running

    def get_sync_stats(self) -> Dict[str, SyncStats]:
        return dict(self._stats)

    def stats_for(self, provider_id: str) -> SyncStats:
        if provider_id not in self._registry:
            raise ProviderNotFoundError(provider_id)
        return self._stats.setdefault(provider_id, SyncStats())


__all__ = ["SyncOrchestrator", "SyncResult", "SyncStats", "SyncListener"]
