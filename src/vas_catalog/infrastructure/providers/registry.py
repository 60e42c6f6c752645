# 📚 vas_catalog/infrastructure/providers/registry.py
"""
📚 Реєстр провайдерів — будується один раз зі старту і далі не змінюється.

🔹 `get(id)` падає `ProviderNotFoundError` (помилка конфігурації має бути гучною).
🔹 `find(id)` — мʼякий варіант, повертає None.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                                   # 🧾 Логи побудови реєстру
from types import MappingProxyType                                               # 🧊 Read-only словник
from typing import TYPE_CHECKING, Iterable, Iterator, List, Mapping, Optional

# 🧩 Внутрішні модулі
from vas_catalog.errors.custom_errors import ProviderNotFoundError
from vas_catalog.infrastructure.providers.connection import ProviderConnection
from vas_catalog.shared.utils.logger import LOG_NAME

if TYPE_CHECKING:
    from vas_catalog.config.config_service import ConfigService

logger = logging.getLogger(f"{LOG_NAME}.providers")


class ProviderRegistry:
    """📚 Незмінна мапа provider_id → `ProviderConnection`."""

    def __init__(self, connections: Iterable[ProviderConnection]) -> None:
        items = {}
        for conn in connections:
            if conn.provider_id in items:
                raise ValueError(f"Duplicate provider id: {conn.provider_id!r}")
            items[conn.provider_id] = conn
        self._connections: Mapping[str, ProviderConnection] = MappingProxyType(items)
        logger.info("📚 providers.registry_built", extra={"providers": list(items)})

    @classmethod
    def from_config(cls, config: "ConfigService") -> "ProviderRegistry":
        """Читає `providers.*`; глобальні `sync.*` підставляються як дефолти."""
        providers = config.section("providers")
        defaults = config.section("sync")
        connections: List[ProviderConnection] = []
        for provider_id, node in providers.items():
            if not isinstance(node, dict):
                logger.warning("⚠️ providers.invalid_node", extra={"provider": provider_id})
                continue
            conn = ProviderConnection.from_mapping(provider_id, node, defaults)
            if not conn.has_credentials:
                logger.warning("🔐 providers.missing_credentials", extra={"provider": provider_id})
            connections.append(conn)
        return cls(connections)

    def get(self, provider_id: str) -> ProviderConnection:
        conn = self._connections.get(provider_id)
        if conn is None:
            logger.error("❌ providers.unknown", extra={"provider": provider_id})
            raise ProviderNotFoundError(provider_id)
        return conn

    def find(self, provider_id: str) -> Optional[ProviderConnection]:
        return self._connections.get(provider_id)

    def ids(self) -> List[str]:
        return list(self._connections)

    def enabled(self) -> List[ProviderConnection]:
        return [conn for conn in self._connections.values() if conn.enabled]

    def __iter__(self) -> Iterator[ProviderConnection]:
        return iter(self._connections.values())

    def __len__(self) -> int:
        return len(self._connections)

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._connections


__all__ = ["ProviderRegistry"]
