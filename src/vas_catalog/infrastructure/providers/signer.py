# 🔏 vas_catalog/infrastructure/providers/signer.py
"""
🔏 Підпис вихідних запитів до провайдера.

🔹 Підпис = hex(HMAC-SHA256(secret, api_key + timestamp)), timestamp у мілісекундах.
🔹 Годинник інʼєктується, тож заголовки детерміновані в тестах.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import hashlib                                                                   # 🔐 SHA-256
import hmac                                                                      # 🔐 HMAC
import logging
import time                                                                      # ⏱️ Дефолтний годинник
from typing import Callable, Dict

# 🧩 Внутрішні модулі
from vas_catalog.infrastructure.providers.connection import ProviderConnection
from vas_catalog.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.providers.signer")

MillisClock = Callable[[], int]


def _epoch_millis() -> int:
    return int(time.time() * 1000)


class RequestSigner:
    """🔏 Будує автентифікаційні заголовки на кожен виклик."""

    def __init__(self, clock: MillisClock = _epoch_millis) -> None:
        self._clock = clock

    @staticmethod
    def signature(connection: ProviderConnection, timestamp: str) -> str:
        message = f"{connection.api_key}{timestamp}".encode("utf-8")
        return hmac.new(connection.secret.encode("utf-8"), message, hashlib.sha256).hexdigest()

    def build_headers(self, connection: ProviderConnection) -> Dict[str, str]:
        if not connection.has_credentials:
            logger.warning("🔐 signer.missing_credentials", extra={"provider": connection.provider_id})
        timestamp = str(self._clock())
        return {
            "Authorization": f"Bearer {connection.api_key}",
            "X-Timestamp": timestamp,
            "X-Signature": self.signature(connection, timestamp),
            "Content-Type": "application/json",
            "Accept": "application/json",
        }


__all__ = ["RequestSigner", "MillisClock"]
