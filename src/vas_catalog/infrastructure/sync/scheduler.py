# ⏰ vas_catalog/infrastructure/sync/scheduler.py
"""
⏰ Планувальник повторюваних задач на asyncio.

🔹 `schedule(name, interval, job)` — незалежний таймер на кожну задачу, таймери не синхронізуються між собою.
🔹 Кожен тік запускає job окремою задачею: таймер не чекає завершення, тож прогони можуть перекриватися.
🔹 `spawn(job)` — разовий запуск із відстеженням; `stop()` скасовує все й дочікується завершення.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio                                                                   # ⏱️ Таймери та задачі
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

# 🧩 Внутрішні модулі
from vas_catalog.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.sync.scheduler")

Job = Callable[[], Awaitable[Any]]
Sleep = Callable[[float], Awaitable[None]]


class SyncScheduler:
    """⏰ Власник скасовуваних повторюваних задач."""

    def __init__(self, sleep: Sleep = asyncio.sleep) -> None:
        self._sleep = sleep
        self._timers: Dict[str, asyncio.Task] = {}                               # ⏰ name → нескінченний цикл
        self._inflight: Set[asyncio.Task] = set()                                # 🏃 Запущені прогони

    # ================================
    # ⏰ ТАЙМЕРИ
    # ================================
    def schedule(self, name: str, interval_sec: float, job: Job) -> asyncio.Task:
        """Перший тік — через `interval_sec`; наявний таймер з тим самим імʼям замінюється."""
        if interval_sec <= 0:
            raise ValueError("interval_sec must be positive")
        self.cancel(name)
        task = asyncio.create_task(self._tick_loop(name, interval_sec, job), name=f"timer:{name}")
        self._timers[name] = task
        logger.info("⏰ scheduler.armed", extra={"job": name, "interval": interval_sec})
        return task

    async def _tick_loop(self, name: str, interval_sec: float, job: Job) -> None:
        while True:
            await self._sleep(interval_sec)
            logger.debug("🔔 scheduler.tick", extra={"job": name})
            self.spawn(job, name=name)

    def cancel(self, name: str) -> bool:
        task = self._timers.pop(name, None)
        if task is None:
            return False
        task.cancel()
        logger.info("🛑 scheduler.cancelled", extra={"job": name})
        return True

    # ================================
    # 🏃 РАЗОВІ ЗАПУСКИ
    # ================================
    def spawn(self, job: Job, *, name: Optional[str] = None) -> asyncio.Task:
        task = asyncio.create_task(job(), name=f"run:{name}" if name else None)
        self._inflight.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._inflight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "❌ scheduler.job_failed",
                extra={"task": task.get_name(), "error": repr(exc)},
                exc_info=exc,
            )

    # ================================
    # 🧹 ЖИТТЄВИЙ ЦИКЛ
    # ================================
    async def stop(self) -> None:
        tasks = list(self._timers.values()) + list(self._inflight)
        self._timers.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._inflight.clear()
        logger.info("🧹 scheduler.stopped", extra={"tasks": len(tasks)})

    @property
    def is_running(self) -> bool:
        return any(not task.done() for task in self._timers.values())

    @property
    def inflight(self) -> int:
        return len(self._inflight)

    def jobs(self) -> List[str]:
        return list(self._timers)


__all__ = ["SyncScheduler", "Job", "Sleep"]
