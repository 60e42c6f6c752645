# 🧮 vas_catalog/domain/menu/ranking.py
"""
🧮 Чисті функції ранжування продуктів меню.

🔹 `calculate_priority` — featured + вага категорії + бонус «новинки».
🔹 `check_availability` — сирий прапорець вендора з урахуванням `expiryDate` у metadata.
🔹 `display_name` / `build_tags` — поля показу для презентаційного шару.
🔹 Час завжди передається явно (`now`), тож результат детермінований.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                                   # 🧾 Логування підозрілих дат
from datetime import datetime, timezone                                          # 🕒 Робота з часом
from typing import Any, Dict, Optional, Tuple                                    # 🧰 Типи

# 🧩 Внутрішні модулі
from vas_catalog.config.setup.constants import CATEGORIES, RANKING
from vas_catalog.domain.products.entities import Product
from vas_catalog.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.menu.ranking")

_EXPIRY_KEYS: Tuple[str, ...] = ("expiryDate", "expiry_date")                    # 🗝️ Де вендори кладуть термін дії
_DISPLAY_SUFFIXES: Dict[str, str] = {
    CATEGORIES.BILL_PAYMENTS: "Bill Payment",
    CATEGORIES.VOUCHERS: "Voucher",
    CATEGORIES.MOBILE_SERVICES: "Service",
    CATEGORIES.BANKING_SERVICES: "Banking",
}
AVAILABLE_TAG = "Available"
UNAVAILABLE_TAG = "Unavailable"


# ================================
# 🕒 ДОПОМІЖНЕ
# ================================
def _as_utc(value: datetime) -> datetime:
    """Наївні дати вважаємо UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Приводить ISO-рядок, epoch (секунди або мілісекунди) чи `datetime` до aware UTC.
    Нерозпізнане значення → None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, (int, float)):
        seconds = value / 1000 if value > 10**11 else value                     # 🔢 JS віддає мілісекунди
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"                                          # 🧩 fromisoformat до 3.11 не знає «Z»
        try:
            return _as_utc(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


# ================================
# 🧮 ПРІОРИТЕТ
# ================================
def calculate_priority(product: Product, now: datetime) -> int:
    """
    ⭐ +100 за тег featured, вага категорії (80/70/60/50, решта 10), +20 якщо оновлено < 7 днів тому.
    """
    priority = 0
    if product.has_feature(RANKING.FEATURED_TAG):
        priority += RANKING.FEATURED_BONUS
    priority += RANKING.CATEGORY_WEIGHTS.get(product.category, RANKING.DEFAULT_CATEGORY_WEIGHT)

    if product.last_updated is not None:
        age = _as_utc(now) - _as_utc(product.last_updated)
        if age < RANKING.RECENT_WINDOW:
            priority += RANKING.RECENT_BONUS                                     # 🆕 Свіжий продукт
    return priority


# ================================
# ✅ ДОСТУПНІСТЬ
# ================================
def expiry_of(product: Product) -> Optional[datetime]:
    for key in _EXPIRY_KEYS:
        raw = product.metadata.get(key)
        if raw is None:
            continue
        parsed = parse_timestamp(raw)
        if parsed is None:
            logger.debug(
                "🕳️ ranking.expiry_unparsed",
                extra={"provider": product.provider_id, "product": product.native_id, "value": str(raw)},
            )
        return parsed
    return None


def check_availability(product: Product, now: datetime) -> bool:
    """Недоступний, якщо вендор сказав «ні» або термін дії вже минув."""
    if not product.available:
        return False
    expiry = expiry_of(product)
    if expiry is not None and expiry < _as_utc(now):
        return False
    return True


# ================================
# 🏷️ ПОЛЯ ПОКАЗУ
# ================================
def display_name(product: Product) -> str:
    suffix = _DISPLAY_SUFFIXES.get(product.category)
    return f"{product.name} {suffix}" if suffix else product.name


def build_tags(product: Product, available: bool) -> Tuple[str, ...]:
    """Категорія → теги фіч (відсортовано) → назва провайдера → Available/Unavailable."""
    tags = [product.category]
    tags.extend(sorted(product.features))
    if product.provider_name:
        tags.append(product.provider_name)
    tags.append(AVAILABLE_TAG if available else UNAVAILABLE_TAG)
    return tuple(tags)


__all__ = [
    "calculate_priority",
    "check_availability",
    "display_name",
    "build_tags",
    "expiry_of",
    "parse_timestamp",
    "AVAILABLE_TAG",
    "UNAVAILABLE_TAG",
]
