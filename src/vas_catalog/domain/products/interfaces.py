# 🧩 vas_catalog/domain/products/interfaces.py
"""
🧩 Доменні контракти навколо продуктів.

🔹 `IProductNormalizer` — адаптер вендора: сирий payload → список канонічних `Product`.
🔹 `IProductSource` — все, що вміє віддати поточний знімок продуктів (кеш).
🔹 Чистий домен: без мережі, кешів та I/O.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from typing import Any, List, Protocol, runtime_checkable

# 🧩 Внутрішні модулі
from .entities import Product, ProviderId


@runtime_checkable
class IProductNormalizer(Protocol):
    """
    💧 Контракт адаптера відповіді провайдера.
    Ніколи не кидає через один битий запис — повертає менше продуктів.
    """

    def normalize(self, raw: Any) -> List[Product]:
        ...


@runtime_checkable
class IProductSource(Protocol):
    """📦 Джерело повного знімка продуктів (для генератора меню)."""

    def get_all(self) -> List[Product]:
        ...

    def get_by_provider(self, provider_id: ProviderId) -> List[Product]:
        ...


__all__ = ["IProductNormalizer", "IProductSource"]
