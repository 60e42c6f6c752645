# 🔍 vas_catalog/domain/menu/search.py
"""
🔍 Пошук і фільтрація по поточному знімку меню.

🔹 Плоский набір: спочатку Featured, далі категорії; дублікати (Featured ∩ категорія) прибираються за ключем продукту.
🔹 Текст — підрядок без урахування регістру у назві, описі та тегах фіч.
🔹 Порядок результатів = порядок обходу; повторного ранжування немає.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                                   # 🧾 Логування запитів
from dataclasses import dataclass                                                # 🧱 DTO фільтрів
from decimal import Decimal, InvalidOperation                                    # 💵 Стеля ціни
from typing import Any, Iterator, List, Mapping, Optional, Set

# 🧩 Внутрішні модулі
from vas_catalog.domain.menu.entities import MenuProduct, MenuStructure
from vas_catalog.domain.products.entities import ProductKey
from vas_catalog.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.menu.search")


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"maxPrice is not numeric: {value!r}") from exc


@dataclass(frozen=True, slots=True)
class SearchFilters:
    """Фільтри пошуку. `None` → фільтр вимкнено; `max_price=0` — справжня стеля."""

    category: Optional[str] = None
    provider_id: Optional[str] = None
    available_only: bool = False
    max_price: Optional[Decimal] = None

    def __post_init__(self) -> None:
        if self.max_price is not None and not isinstance(self.max_price, Decimal):
            object.__setattr__(self, "max_price", _to_decimal(self.max_price))

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "SearchFilters":
        """📥 Приймає ключі API-шару (`spId`, `availableOnly`, `maxPrice`) і snake_case."""
        if not data:
            return cls()
        provider = data.get("spId", data.get("provider_id"))
        available = data.get("availableOnly", data.get("available_only", False))
        max_price = data.get("maxPrice", data.get("max_price"))
        return cls(
            category=data.get("category") or None,
            provider_id=provider or None,
            available_only=bool(available),
            max_price=_to_decimal(max_price),
        )

    def accepts(self, item: MenuProduct) -> bool:
        if self.category is not None and item.category != self.category:
            return False
        if self.provider_id is not None and item.provider_id != self.provider_id:
            return False
        if self.available_only and not item.available:
            return False
        if self.max_price is not None and item.product.price > self.max_price:
            return False
        return True


class MenuSearchService:
    """🔍 Stateless пошук по `MenuStructure`."""

    @staticmethod
    def flatten(menu: MenuStructure) -> Iterator[MenuProduct]:
        """Featured → категорії, кожен продукт лише раз."""
        seen: Set[ProductKey] = set()
        buckets = (menu.featured, *menu.categories)
        for bucket in buckets:
            for item in bucket.products:
                if item.key in seen:
                    continue
                seen.add(item.key)
                yield item

    @staticmethod
    def _matches(item: MenuProduct, needle: str) -> bool:
        if needle in item.name.lower():
            return True
        if needle in item.product.description.lower():
            return True
        return any(needle in tag.lower() for tag in item.product.features)

    def search(
        self,
        menu: Optional[MenuStructure],
        query: str = "",
        filters: Optional[SearchFilters] = None,
    ) -> List[MenuProduct]:
        if menu is None:
            return []
        filters = filters or SearchFilters()
        needle = (query or "").strip().lower()

        results = [
            item
            for item in self.flatten(menu)
            if (not needle or self._matches(item, needle)) and filters.accepts(item)
        ]
        logger.debug(
            "🔍 menu.search",
            extra={"query": needle, "results": len(results), "menu_version": menu.version},
        )
        return results


__all__ = ["SearchFilters", "MenuSearchService"]
