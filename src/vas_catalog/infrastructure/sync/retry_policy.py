# 🔁 vas_catalog/infrastructure/sync/retry_policy.py
"""
🔁 Політика ретраїв синхронізації.

🔹 Перша спроба + до `max_retries` повторів з фіксованою паузою (рівно один sleep на повтор).
🔹 Повторюються лише транспортні збої (`ProviderTransportError`); решта винятків летить далі.
🔹 `sleep` інʼєктується — тести рахують паузи без реального очікування.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio                                                                   # 💤 Дефолтний sleep
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar

# 🧩 Внутрішні модулі
from vas_catalog.config.setup.constants import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_DELAY_SEC
from vas_catalog.errors.custom_errors import ProviderTransportError, RetryExhaustedError
from vas_catalog.infrastructure.providers.connection import ProviderConnection
from vas_catalog.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.sync.retry")

T = TypeVar("T")
Sleep = Callable[[float], Awaitable[None]]
ErrorHook = Callable[[int, BaseException], None]


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    max_retries: int = DEFAULT_MAX_RETRIES
    delay_sec: float = DEFAULT_RETRY_DELAY_SEC
    retry_on: Tuple[Type[BaseException], ...] = (ProviderTransportError,)

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.delay_sec < 0:
            raise ValueError("delay_sec must be >= 0")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    @classmethod
    def for_connection(cls, connection: ProviderConnection) -> "RetryPolicy":
        return cls(max_retries=connection.max_retries, delay_sec=connection.retry_delay_sec)


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    sleep: Sleep = asyncio.sleep,
    on_error: Optional[ErrorHook] = None,
) -> T:
    """
    Виконує `operation` за політикою. Вичерпано → `RetryExhaustedError` з останньою причиною.
    """
    last_error: Optional[BaseException] = None
    for attempt in range(1, policy.max_attempts + 1):                            # 🔁 N+1 спроб
        try:
            return await operation()
        except asyncio.CancelledError:
            raise
        except policy.retry_on as exc:
            last_error = exc
            if on_error is not None:
                on_error(attempt, exc)
            if attempt >= policy.max_attempts:                                   # 🚫 Вичерпали спроби
                break
            logger.debug(
                "💤 sync.retry_wait",
                extra={"attempt": attempt, "max_attempts": policy.max_attempts, "delay": policy.delay_sec},
            )
            await sleep(policy.delay_sec)

    raise RetryExhaustedError(
        f"All {policy.max_attempts} attempts failed",
        attempts=policy.max_attempts,
        last_error=last_error,
    )


__all__ = ["RetryPolicy", "retry_async", "Sleep", "ErrorHook"]
