# 📖 vas_catalog/config/setup/constants.py
"""
📖 Типобезпечні константи движка каталогу.

🔹 Ваги категорій і бонуси для ранжування меню.
🔹 Фіксований порядок категорій і дефолти синхронізації.
🔹 Імутабельність через `dataclass(slots=True, frozen=True)` та `MappingProxyType`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass, field                               # 🧱 Опис імутабельних структур
from datetime import timedelta                                         # 🕒 Вікно «новинки»
from types import MappingProxyType                                     # 🧊 Імутабельні словники
from typing import Final, Mapping, Tuple                               # 🧮 Типізація


# ================================
# 🏷️ КАТЕГОРІЇ
# ================================
@dataclass(frozen=True, slots=True)
class _Categories:
    """Канонічні назви категорій меню."""

    BILL_PAYMENTS: Final[str] = "Bill Payments"
    BANKING_SERVICES: Final[str] = "Banking Services"
    VOUCHERS: Final[str] = "Vouchers"
    MOBILE_SERVICES: Final[str] = "Mobile Services"
    VAS_SERVICES: Final[str] = "VAS Services"
    OTHER: Final[str] = "Other"                                         # 🧺 Кошик для всього невідомого


CATEGORIES = _Categories()


# ================================
# 🧮 РАНЖУВАННЯ
# ================================
@dataclass(frozen=True, slots=True)
class _Ranking:
    """Бонуси пріоритету продукту в меню."""

    FEATURED_TAG: Final[str] = "featured"                               # ⭐ Тег, що робить продукт «рекомендованим»
    FEATURED_BONUS: Final[int] = 100
    RECENT_BONUS: Final[int] = 20
    RECENT_WINDOW: Final[timedelta] = timedelta(days=7)                 # 🆕 Вікно «нового» продукту
    DEFAULT_CATEGORY_WEIGHT: Final[int] = 10
    CATEGORY_WEIGHTS: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType(
            {
                CATEGORIES.BILL_PAYMENTS: 80,
                CATEGORIES.VOUCHERS: 70,
                CATEGORIES.MOBILE_SERVICES: 60,
                CATEGORIES.BANKING_SERVICES: 50,
            }
        )
    )


RANKING = _Ranking()


# ================================
# 🧭 МЕНЮ ТА СИНХРОНІЗАЦІЯ
# ================================
DEFAULT_CATEGORY_ORDER: Tuple[str, ...] = (
    CATEGORIES.BILL_PAYMENTS,
    CATEGORIES.BANKING_SERVICES,
    CATEGORIES.VOUCHERS,
    CATEGORIES.MOBILE_SERVICES,
    CATEGORIES.VAS_SERVICES,
    CATEGORIES.OTHER,
)
DEFAULT_MAX_FEATURED: Final[int] = 10
DEFAULT_MAX_PER_CATEGORY: Final[int] = 50
FEATURED_BUCKET_NAME: Final[str] = "Featured"

DEFAULT_CURRENCY: Final[str] = "ZAR"
DEFAULT_TIMEOUT_SEC: Final[float] = 10.0
DEFAULT_MAX_RETRIES: Final[int] = 3
DEFAULT_RETRY_DELAY_SEC: Final[float] = 5.0
DEFAULT_SYNC_INTERVAL_SEC: Final[float] = 60.0


__all__ = [
    "CATEGORIES",
    "RANKING",
    "DEFAULT_CATEGORY_ORDER",
    "DEFAULT_MAX_FEATURED",
    "DEFAULT_MAX_PER_CATEGORY",
    "FEATURED_BUCKET_NAME",
    "DEFAULT_CURRENCY",
    "DEFAULT_TIMEOUT_SEC",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RETRY_DELAY_SEC",
    "DEFAULT_SYNC_INTERVAL_SEC",
]
