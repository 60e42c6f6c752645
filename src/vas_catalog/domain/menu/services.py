# 🧭 vas_catalog/domain/menu/services.py
"""
🧭 Генератор меню: плоский знімок кешу → ранжована, розбита на категорії, обрізана структура.

🔹 Кроки: пріоритет → доступність → категорії (stable sort, обрізання) → порядок категорій → Featured → статистика.
🔹 Featured рахується з повного набору доступних продуктів і не залежить від обрізання категорій.
🔹 Версія зростає лише при успішній генерації; будь-який збій → `MenuGenerationError`, поточний знімок не змінюється.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                                   # 🧾 Логи генерації
from dataclasses import dataclass                                                # 🧱 Конфіг меню
from datetime import datetime, timezone                                          # 🕒 Мітка генерації
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

# 🧩 Внутрішні модулі
from vas_catalog.config.setup.constants import (
    CATEGORIES,
    DEFAULT_CATEGORY_ORDER,
    DEFAULT_MAX_FEATURED,
    DEFAULT_MAX_PER_CATEGORY,
    FEATURED_BUCKET_NAME,
)
from vas_catalog.domain.menu.entities import CategoryBucket, MenuProduct, MenuStats, MenuStructure
from vas_catalog.domain.menu.ranking import build_tags, calculate_priority, check_availability, display_name
from vas_catalog.domain.pricing.formatting import format_price
from vas_catalog.domain.products.entities import Product
from vas_catalog.errors.custom_errors import MenuGenerationError
from vas_catalog.shared.utils.logger import LOG_NAME


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.menu")

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ================================
# ⚙️ КОНФІГУРАЦІЯ МЕНЮ
# ================================
@dataclass(frozen=True, slots=True)
class MenuConfig:
    """Ліміти та бажаний порядок категорій."""

    max_featured: int = DEFAULT_MAX_FEATURED
    max_per_category: int = DEFAULT_MAX_PER_CATEGORY
    category_order: Tuple[str, ...] = DEFAULT_CATEGORY_ORDER

    def __post_init__(self) -> None:
        if self.max_featured < 0 or self.max_per_category < 0:
            raise ValueError("Menu limits must be non-negative")
        object.__setattr__(self, "category_order", tuple(self.category_order))

    @classmethod
    def from_mapping(cls, node: Optional[Mapping[str, Any]]) -> "MenuConfig":
        """📥 Будує конфіг із секції `menu.*` (відсутні ключі → дефолти)."""
        node = node or {}
        order = node.get("category_order") or DEFAULT_CATEGORY_ORDER
        return cls(
            max_featured=int(node.get("max_featured", DEFAULT_MAX_FEATURED)),
            max_per_category=int(node.get("max_per_category", DEFAULT_MAX_PER_CATEGORY)),
            category_order=tuple(str(name) for name in order),
        )


# ================================
# 🧭 ГЕНЕРАТОР
# ================================
class MenuGenerator:
    """🧭 Будує та тримає поточний знімок меню."""

    def __init__(self, config: Optional[MenuConfig] = None, *, clock: Clock = _utc_now) -> None:
        self._config = config or MenuConfig()
        self._clock = clock
        self._version = 0                                                        # 🔢 Перша успішна генерація → 1
        self._current: Optional[MenuStructure] = None
        self._last_generated: Optional[datetime] = None
        logger.debug(
            "🧭 menu.generator_init",
            extra={
                "max_featured": self._config.max_featured,
                "max_per_category": self._config.max_per_category,
            },
        )

    # ================================
    # 🔍 СТАН
    # ================================
    @property
    def config(self) -> MenuConfig:
        return self._config

    @property
    def current(self) -> Optional[MenuStructure]:
        return self._current

    @property
    def version(self) -> int:
        return self._version

    @property
    def last_generated(self) -> Optional[datetime]:
        return self._last_generated

    # ================================
    # 🏗️ ГЕНЕРАЦІЯ
    # ================================
    def generate(self, products: Iterable[Product]) -> MenuStructure:
        """
        Синхронно будує нове меню. Помилка → `MenuGenerationError`, знімок і версія лишаються старими.
        """
        now = self._clock()
        try:
            items = [self._to_menu_product(product, now) for product in products]
            categories = self._build_categories(items)
            featured = self._build_featured(items)
            stats = MenuStats(
                total_products=sum(bucket.count for bucket in categories),
                total_categories=len(categories),
                available_products=sum(bucket.available_count for bucket in categories),
            )
        except MenuGenerationError:
            raise
        except Exception as exc:
            logger.error("❌ menu.generation_failed", extra={"error": str(exc)}, exc_info=True)
            raise MenuGenerationError("Menu generation failed", details=str(exc)) from exc

        menu = MenuStructure(
            version=self._version + 1,
            generated_at=now,
            categories=categories,
            featured=featured,
            stats=stats,
        )
        self._version = menu.version
        self._current = menu
        self._last_generated = now
        logger.info(
            "✅ menu.generated",
            extra={
                "version": menu.version,
                "categories": stats.total_categories,
                "products": stats.total_products,
                "featured": featured.count,
            },
        )
        return menu

    def _to_menu_product(self, product: Product, now: datetime) -> MenuProduct:
        available = check_availability(product, now)
        return MenuProduct(
            product=product,
            priority=calculate_priority(product, now),
            available=available,
            display_name=display_name(product),
            display_price=format_price(product.price, product.currency),
            tags=build_tags(product, available),
        )

    def _build_categories(self, items: List[MenuProduct]) -> Tuple[CategoryBucket, ...]:
        grouped: Dict[str, List[MenuProduct]] = {}                               # 🗂️ dict зберігає порядок появи
        for item in items:
            grouped.setdefault(item.category or CATEGORIES.OTHER, []).append(item)

        limit = self._config.max_per_category
        buckets: Dict[str, CategoryBucket] = {}
        for name, members in grouped.items():
            ranked = sorted(members, key=lambda m: m.priority, reverse=True)     # 🔁 sorted стабільний навіть з reverse
            buckets[name] = CategoryBucket(name=name, products=tuple(ranked[:limit]))

        ordered = [buckets[name] for name in self._config.category_order if name in buckets]
        ordered.extend(bucket for name, bucket in buckets.items() if name not in self._config.category_order)
        return tuple(ordered)

    def _build_featured(self, items: List[MenuProduct]) -> CategoryBucket:
        available = [item for item in items if item.available]
        ranked = sorted(available, key=lambda m: m.priority, reverse=True)
        return CategoryBucket(name=FEATURED_BUCKET_NAME, products=tuple(ranked[: self._config.max_featured]))

    # ================================
    # 📖 ЧИТАННЯ ПОТОЧНОГО ЗНІМКА
    # ================================
    def get_menu_by_category(self, name: str) -> Optional[CategoryBucket]:
        if self._current is None:
            return None
        return self._current.category(name)

    def get_featured_products(self) -> List[MenuProduct]:
        if self._current is None:
            return []
        return list(self._current.featured.products)

    def get_categories(self) -> List[Dict[str, Any]]:
        if self._current is None:
            return []
        return [bucket.summary() for bucket in self._current.categories]

    def get_menu_stats(self) -> Optional[Dict[str, Any]]:
        """📊 Агрегати поточного меню + версія та список категорій; None, якщо меню ще не було."""
        menu = self._current
        if menu is None:
            return None
        data: Dict[str, Any] = menu.stats.to_dict()
        data.update(
            {
                "version": menu.version,
                "generatedAt": menu.generated_at.isoformat(),
                "featuredCount": menu.featured.count,
                "categories": self.get_categories(),
            }
        )
        return data

    def get_stats(self) -> Dict[str, Any]:
        """📊 Стан самого генератора."""
        return {
            "version": self._version,
            "lastGenerated": self._last_generated.isoformat() if self._last_generated else None,
            "hasMenu": self._current is not None,
            "featuredProductsCount": self._current.featured.count if self._current else 0,
        }


__all__ = ["MenuConfig", "MenuGenerator", "Clock"]
