# 🌐 vas_catalog/infrastructure/providers/fetcher.py
"""
🌐 ProviderFetcher — вихідний запит каталогу провайдера.

🔹 Один лінивий `httpx.AsyncClient` на процес (`initialize()` / `close()`).
🔹 `GET <base_url><products>` з підписаними заголовками і таймаутом провайдера.
🔹 Будь-який збій (таймаут, зʼєднання, не-2xx, не-JSON чи не-UTF-8 тіло) → `ProviderTransportError`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx                                                                     # 🌐 Асинхронний HTTP-клієнт

# 🔠 Системні імпорти
import asyncio                                                                   # 🔐 Лок ініціалізації
import logging
from typing import Any, Optional, Sequence

# 🧩 Внутрішні модулі
from vas_catalog.errors.custom_errors import ProviderTransportError
from vas_catalog.errors.strategies import HttpxErrorStrategy, IErrorHandlingStrategy, convert_error
from vas_catalog.infrastructure.providers.connection import ProviderConnection
from vas_catalog.infrastructure.providers.signer import RequestSigner
from vas_catalog.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.providers.fetcher")


class ProviderFetcher:
    """🌐 Тягне сирий payload каталогу одного провайдера."""

    def __init__(
        self,
        signer: RequestSigner,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        strategies: Optional[Sequence[IErrorHandlingStrategy]] = None,
    ) -> None:
        self._signer = signer
        self._transport = transport                                             # 🧪 MockTransport у тестах
        self._strategies: Sequence[IErrorHandlingStrategy] = strategies or (HttpxErrorStrategy(),)
        self._client: Optional[httpx.AsyncClient] = None
        self._init_lock = asyncio.Lock()

    async def initialize(self) -> httpx.AsyncClient:
        async with self._init_lock:
            if self._client is None or self._client.is_closed:
                self._client = httpx.AsyncClient(transport=self._transport)
                logger.info("🔧 fetcher.client_ready")
            return self._client

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            logger.info("🔌 fetcher.client_closed")
        self._client = None

    async def fetch_products(self, connection: ProviderConnection) -> Any:
        """Повертає декодований JSON або кидає `ProviderTransportError`."""
        client = await self.initialize()
        url = connection.products_url
        headers = self._signer.build_headers(connection)
        logger.debug("🌐 fetcher.request", extra={"provider": connection.provider_id, "url": url})

        try:
            response = await client.get(url, headers=headers, timeout=connection.timeout_sec)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:                          # 📄 ValueError: битий JSON або не-UTF-8 тіло
            converted = convert_error(exc, self._strategies, provider_id=connection.provider_id)
            if not isinstance(converted, ProviderTransportError):
                raise
            if converted.url is None:
                converted.url = url
            logger.warning(
                "⚠️ fetcher.failed",
                extra={"provider": connection.provider_id, **converted.to_log_extra()},
            )
            raise converted from exc

        logger.debug(
            "✅ fetcher.response",
            extra={"provider": connection.provider_id, "status": response.status_code},
        )
        return payload


__all__ = ["ProviderFetcher"]
