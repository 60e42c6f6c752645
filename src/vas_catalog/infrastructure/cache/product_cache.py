# 💾 vas_catalog/infrastructure/cache/product_cache.py
"""
💾 In-memory кеш продуктів, розбитий на партиції за провайдером.

🔹 Партиція — immutable `CachePartition(products, synced_at)`; `replace()` — одне присвоєння ключа словника.
🔹 Читачі бачать або стару, або нову партицію цілком; локів немає (один event loop).
🔹 Кеш ефемерний: після рестарту наповнюється заново з провайдерів.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                                   # 🧾 Логи роботи кешу
from dataclasses import dataclass                                                # 📦 Партиція
from datetime import datetime, timezone                                          # 🕒 Мітка синку
from typing import Callable, Dict, Iterable, List, Optional, Tuple

# 🧩 Внутрішні модулі
from vas_catalog.domain.products.entities import Product, ProviderId
from vas_catalog.domain.products.interfaces import IProductSource
from vas_catalog.infrastructure.providers.connection import ProviderConnection
from vas_catalog.shared.metrics.sync import CACHED_PRODUCTS
from vas_catalog.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.cache")

STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ================================
# 📦 СТРУКТУРИ
# ================================
@dataclass(frozen=True, slots=True)
class CachePartition:
    products: Tuple[Product, ...]
    synced_at: datetime


@dataclass(frozen=True, slots=True)
class ProviderStatus:
    """Стан одного провайдера для операторів."""

    provider_id: str
    name: str
    last_sync: Optional[datetime]
    product_count: int
    status: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "lastSync": self.last_sync.isoformat() if self.last_sync else None,
            "productCount": self.product_count,
            "status": self.status,
        }


# ================================
# 💾 КЕШ
# ================================
class ProductCache(IProductSource):
    """💾 Авторитетне сховище останніх успішно нормалізованих продуктів."""

    def __init__(self, *, clock: Callable[[], datetime] = _utc_now) -> None:
        self._partitions: Dict[ProviderId, CachePartition] = {}                  # 📦 provider_id → партиція
        self._clock = clock

    def replace(self, provider_id: ProviderId, products: Iterable[Product]) -> CachePartition:
        """🔁 Повна заміна партиції провайдера; часткових злиттів немає."""
        partition = CachePartition(products=tuple(products), synced_at=self._clock())
        self._partitions[provider_id] = partition                                # ⚛️ Єдине присвоєння
        CACHED_PRODUCTS.labels(provider=provider_id).set(len(partition.products))
        logger.info(
            "💾 cache.replaced",
            extra={"provider": provider_id, "products": len(partition.products)},
        )
        return partition

    def get_all(self) -> List[Product]:
        snapshot = list(self._partitions.values())                               # 🧾 Фіксуємо набір партицій
        return [product for partition in snapshot for product in partition.products]

    def get_by_provider(self, provider_id: ProviderId) -> List[Product]:
        partition = self._partitions.get(provider_id)
        return list(partition.products) if partition else []

    def partition(self, provider_id: ProviderId) -> Optional[CachePartition]:
        return self._partitions.get(provider_id)

    def last_sync(self, provider_id: ProviderId) -> Optional[datetime]:
        partition = self._partitions.get(provider_id)
        return partition.synced_at if partition else None

    def get_status(self, connections: Iterable[ProviderConnection]) -> Dict[str, ProviderStatus]:
        """Провайдер активний, якщо хоча б раз успішно синхронізувався."""
        statuses: Dict[str, ProviderStatus] = {}
        for conn in connections:
            partition = self._partitions.get(conn.provider_id)
            statuses[conn.provider_id] = ProviderStatus(
                provider_id=conn.provider_id,
                name=conn.name,
                last_sync=partition.synced_at if partition else None,
                product_count=len(partition.products) if partition else 0,
                status=STATUS_ACTIVE if partition else STATUS_INACTIVE,
            )
        return statuses

    def stats(self) -> Dict[str, int]:
        return {
            "partitions": len(self._partitions),
            "products": sum(len(p.products) for p in self._partitions.values()),
        }

    def clear(self) -> None:
        self._partitions = {}
        logger.info("🧼 cache.cleared")

    def __len__(self) -> int:
        return len(self._partitions)

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._partitions


__all__ = ["ProductCache", "CachePartition", "ProviderStatus", "STATUS_ACTIVE", "STATUS_INACTIVE"]
