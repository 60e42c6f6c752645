# 📜 vas_catalog/errors/strategies.py
"""
📜 Стратегії конвертації сторонніх винятків у доменні `AppError`.

🔹 `HttpxErrorStrategy` — таймаути, збої зʼєднання, не-2xx статуси та битий JSON чи не-UTF-8 тіло → `ProviderTransportError`.
🔹 Нові стратегії додаються без змін у fetcher-і.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx															# 🌐 HTTP-клієнт (винятки)

# 🔠 Системні імпорти
import logging															# 🧾 Логування стратегій
from typing import Optional, Protocol, Sequence						# 📐 Типи

# 🧩 Внутрішні модулі проєкту
from vas_catalog.shared.utils.logger import LOG_NAME
from .custom_errors import AppError, ProviderTransportError			# ⚠️ Доменні помилки


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.errors.strategies")


# ================================
# 🧠 КОНТРАКТ СТРАТЕГІЙ
# ================================
class IErrorHandlingStrategy(Protocol):
    """🧠 Контракт, що визначає єдиний метод `handle`."""

    def handle(self, error: Exception, *, provider_id: Optional[str] = None) -> Optional[AppError]:
        """Вертає `AppError`, якщо виняток розпізнано, або None."""


def _request_url(error: Exception) -> str:
    try:
        return str(error.request.url)  # type: ignore[attr-defined]
    except (AttributeError, RuntimeError):								# ⚠️ httpx кидає RuntimeError, якщо request не привʼязаний
        return "N/A"


# ================================
# 🌐 HTTPX-СТРАТЕГІЯ
# ================================
class HttpxErrorStrategy(IErrorHandlingStrategy):
    """🌐 Перетворює httpx-помилки на `ProviderTransportError`."""

    def handle(self, error: Exception, *, provider_id: Optional[str] = None) -> Optional[AppError]:
        if isinstance(error, httpx.TimeoutException):					# ⏱️ Таймаут будь-якої фази
            url = _request_url(error)
            logger.debug("⏱️ httpx timeout", extra={"url": url, "provider": provider_id})
            return ProviderTransportError(
                "Provider request timed out",
                provider_id=provider_id,
                url=url,
                details=str(error) or type(error).__name__,
            )

        if isinstance(error, httpx.HTTPStatusError):					# 🔢 Неочікуваний статус
            url = _request_url(error)
            status = error.response.status_code
            logger.debug("🔢 httpx status error", extra={"url": url, "status": status, "provider": provider_id})
            return ProviderTransportError(
                f"Provider responded with HTTP {status}",
                provider_id=provider_id,
                url=url,
                status_code=status,
                details=str(error),
            )

        if isinstance(error, httpx.RequestError):						# 🌐 Зʼєднання, DNS, протокол
            url = _request_url(error)
            logger.debug("🌐 httpx request error", extra={"url": url, "provider": provider_id})
            return ProviderTransportError(
                "Provider request failed",
                provider_id=provider_id,
                url=url,
                details=str(error) or type(error).__name__,
            )

        if isinstance(error, ValueError):							# 📄 Тіло не JSON або не UTF-8 (JSONDecodeError, UnicodeDecodeError)
            logger.debug("📄 undecodable provider body", extra={"provider": provider_id})
            return ProviderTransportError(
                "Provider returned a non-JSON body",
                provider_id=provider_id,
                details=str(error),
            )

        return None


def convert_error(
    error: Exception,
    strategies: Sequence[IErrorHandlingStrategy],
    *,
    provider_id: Optional[str] = None,
) -> Optional[AppError]:
    """🔄 Пропускає виняток через стратегії й повертає перший розпізнаний `AppError`."""
    if isinstance(error, AppError):
        return error
    for strategy in strategies:
        converted = strategy.handle(error, provider_id=provider_id)
        if converted is not None:
            return converted
    return None


__all__ = [
    "IErrorHandlingStrategy",
    "HttpxErrorStrategy",
    "convert_error",
]
