# 🧭 vas_catalog/domain/menu/entities.py
"""
🧭 DTO структури меню.

🔹 `MenuProduct` — продукт + обчислені пріоритет, доступність, назва та ціна для показу, теги.
🔹 `CategoryBucket` — впорядкований (priority desc) і обрізаний список однієї категорії.
🔹 `MenuStructure` — версійований знімок: категорії, Featured, агрегована статистика.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass, field                                         # 🧱 Створення DTO
from datetime import datetime                                                    # 🕒 Час генерації
from typing import Any, Dict, Optional, Tuple

# 🧩 Внутрішні модулі
from vas_catalog.domain.products.entities import Product, ProductKey


@dataclass(frozen=True, slots=True)
class MenuProduct:
    """Продукт у меню з обчисленими полями показу."""

    product: Product
    priority: int
    available: bool                                                              # ✅ Перераховано: сирий прапорець + expiry
    display_name: str
    display_price: str
    tags: Tuple[str, ...] = ()

    # 🔁 Прокидаємо основні поля продукту, щоб фасад пошуку не лазив у вкладений DTO
    @property
    def key(self) -> ProductKey:
        return self.product.key

    @property
    def name(self) -> str:
        return self.product.name

    @property
    def category(self) -> str:
        return self.product.category

    @property
    def provider_id(self) -> str:
        return self.product.provider_id

    def to_dict(self) -> Dict[str, Any]:
        data = self.product.to_dict()
        data.update(
            {
                "availability": self.available,
                "priority": self.priority,
                "displayName": self.display_name,
                "displayPrice": self.display_price,
                "tags": list(self.tags),
            }
        )
        return data


@dataclass(frozen=True, slots=True)
class CategoryBucket:
    """Одна категорія меню (або Featured)."""

    name: str
    products: Tuple[MenuProduct, ...] = ()

    @property
    def count(self) -> int:
        return len(self.products)

    @property
    def available_count(self) -> int:
        return sum(1 for item in self.products if item.available)

    def summary(self) -> Dict[str, Any]:
        return {"name": self.name, "count": self.count, "availableCount": self.available_count}

    def to_dict(self) -> Dict[str, Any]:
        data = self.summary()
        data["products"] = [item.to_dict() for item in self.products]
        return data


@dataclass(frozen=True, slots=True)
class MenuStats:
    """Агрегати по всіх категоріях (Featured окремо, без подвійного рахунку)."""

    total_products: int = 0
    total_categories: int = 0
    available_products: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalProducts": self.total_products,
            "totalCategories": self.total_categories,
            "availableProducts": self.available_products,
        }


@dataclass(frozen=True, slots=True)
class MenuStructure:
    """Версійований знімок меню."""

    version: int
    generated_at: datetime
    categories: Tuple[CategoryBucket, ...] = ()
    featured: CategoryBucket = field(default_factory=lambda: CategoryBucket(name="Featured"))
    stats: MenuStats = field(default_factory=MenuStats)

    def category(self, name: str) -> Optional[CategoryBucket]:
        for bucket in self.categories:
            if bucket.name == name:
                return bucket
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "generatedAt": self.generated_at.isoformat(),
            "categories": [bucket.to_dict() for bucket in self.categories],
            "featured": self.featured.to_dict(),
            "stats": self.stats.to_dict(),
        }


__all__ = ["MenuProduct", "CategoryBucket", "MenuStats", "MenuStructure"]
