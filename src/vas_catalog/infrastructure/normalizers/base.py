# 💧 vas_catalog/infrastructure/normalizers/base.py
"""
💧 Базовий адаптер відповіді провайдера.

🔹 Знаходить колекцію записів (`collection_field`), мапить кожен запис через `map_entry`.
🔹 Битий запис відкидається (лог + `PRODUCTS_SKIPPED`), решта продуктів повертається.
🔹 Payload, який неможливо інтерпретувати, дає порожній список, а не виняток.
🔹 Спільна пост-обробка: provider id/name, `last_updated`, категорія поза словником → "Other", ціна → Decimal ≥ 0.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                                   # 🧾 Логи мапінгу
from datetime import datetime, timezone                                          # 🕒 Мітка оновлення
from decimal import Decimal, InvalidOperation                                    # 💵 Ціни
from typing import Any, Callable, ClassVar, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence

# 🧩 Внутрішні модулі
from vas_catalog.config.setup.constants import CATEGORIES, DEFAULT_CURRENCY, RANKING
from vas_catalog.domain.products.entities import Product
from vas_catalog.domain.products.interfaces import IProductNormalizer
from vas_catalog.errors.custom_errors import ProviderMappingError
from vas_catalog.infrastructure.providers.connection import ProviderConnection
from vas_catalog.shared.metrics.sync import PRODUCTS_SKIPPED
from vas_catalog.shared.utils.logger import LOG_NAME

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.normalizers")

Clock = Callable[[], datetime]
_PROMO_FLAGS = ("featured", "isPromotional")                                     # ⭐ Прапорці промо від вендорів


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ================================
# 🔧 ПРИВЕДЕННЯ ПОЛІВ
# ================================
def coerce_price(value: Any, *, provider_id: str) -> Decimal:
    """Число або числовий рядок → Decimal ≥ 0, інакше `ProviderMappingError`."""
    if value is None or isinstance(value, bool):
        raise ProviderMappingError("Price is missing", provider_id=provider_id, field="price")
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ProviderMappingError(f"Price is not numeric: {value!r}", provider_id=provider_id, field="price") from exc
    if not price.is_finite() or price < 0:
        raise ProviderMappingError(f"Price must be a non-negative number: {value!r}", provider_id=provider_id, field="price")
    return price


def coerce_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def coerce_features(value: Any) -> FrozenSet[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        return frozenset({value.strip()}) if value.strip() else frozenset()
    if isinstance(value, Iterable):
        return frozenset(str(tag).strip() for tag in value if tag is not None and str(tag).strip())
    return frozenset()


# ================================
# 💧 БАЗОВИЙ АДАПТЕР
# ================================
class BaseNormalizer(IProductNormalizer):
    """
    Нащадки задають `collection_field` і реалізують `map_entry`.
    `collection_field = None` → payload сам має бути списком.
    """

    collection_field: ClassVar[Optional[str]] = None
    category: ClassVar[str] = CATEGORIES.OTHER
    default_features: ClassVar[FrozenSet[str]] = frozenset()

    def __init__(self, connection: ProviderConnection, *, clock: Clock = _utc_now) -> None:
        self._connection = connection
        self._clock = clock

    @property
    def provider_id(self) -> str:
        return self._connection.provider_id

    # ================================
    # 🔍 ПОШУК КОЛЕКЦІЇ
    # ================================
    def _locate(self, raw: Any) -> Optional[Sequence[Any]]:
        container = raw
        if self.collection_field is not None:
            if not isinstance(raw, Mapping):
                return None
            container = raw.get(self.collection_field)
        if isinstance(container, (list, tuple)):
            return container
        return None

    # ================================
    # 🗺️ МАПІНГ
    # ================================
    def map_entry(self, entry: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Повертає поля канонічного продукту:
        native_id, name, price (+ опційно category, currency, available, description, features, metadata).
        """
        raise NotImplementedError

    def normalize(self, raw: Any) -> List[Product]:
        entries = self._locate(raw)
        if entries is None:
            logger.warning(
                "🕳️ normalizer.payload_uninterpretable",
                extra={
                    "provider": self.provider_id,
                    "expected": self.collection_field or "list",
                    "got": type(raw).__name__,
                },
            )
            return []

        now = self._clock()
        products: List[Product] = []
        skipped = 0
        for index, entry in enumerate(entries):
            try:
                products.append(self._build(entry, now))
            except ProviderMappingError as exc:
                skipped += 1
                logger.info(
                    "🧾 normalizer.entry_skipped",
                    extra={"provider": self.provider_id, "index": index, **exc.to_log_extra()},
                )
            except Exception as exc:                                             # 🧯 Один битий запис не валить синк
                skipped += 1
                logger.warning(
                    "⚠️ normalizer.entry_failed",
                    extra={"provider": self.provider_id, "index": index, "error": repr(exc)},
                )

        if skipped:
            PRODUCTS_SKIPPED.labels(provider=self.provider_id).inc(skipped)
        logger.debug(
            "✅ normalizer.done",
            extra={"provider": self.provider_id, "products": len(products), "skipped": skipped},
        )
        return products

    def _build(self, entry: Any, now: datetime) -> Product:
        if not isinstance(entry, Mapping):
            raise ProviderMappingError(
                f"Entry is not an object: {type(entry).__name__}", provider_id=self.provider_id
            )
        fields = self.map_entry(entry)

        native_id = coerce_text(fields.get("native_id"))
        if not native_id:
            raise ProviderMappingError("Entry has no identifier", provider_id=self.provider_id, field="id")
        name = coerce_text(fields.get("name"))
        if not name:
            raise ProviderMappingError("Entry has no name", provider_id=self.provider_id, field="name")

        features = set(coerce_features(fields.get("features", self.default_features)))
        if any(entry.get(flag) is True for flag in _PROMO_FLAGS):
            features.add(RANKING.FEATURED_TAG)

        metadata = {k: v for k, v in (fields.get("metadata") or {}).items() if v is not None}

        return Product(
            provider_id=self.provider_id,
            native_id=native_id,
            name=name,
            category=self._resolve_category(coerce_text(fields.get("category")) or self.category),
            price=coerce_price(fields.get("price"), provider_id=self.provider_id),
            currency=(coerce_text(fields.get("currency")) or DEFAULT_CURRENCY).upper(),
            available=bool(fields.get("available", True)),
            description=coerce_text(fields.get("description")),
            features=frozenset(features),
            provider_name=self._connection.name,
            last_updated=now,
            metadata=metadata,
        )

    def _resolve_category(self, category: str) -> str:
        vocabulary = self._connection.categories
        if vocabulary and category not in vocabulary:
            return CATEGORIES.OTHER
        return category or CATEGORIES.OTHER


def status_is(entry: Mapping[str, Any], expected: str) -> bool:
    return coerce_text(entry.get("status")).lower() == expected


__all__ = [
    "BaseNormalizer",
    "Clock",
    "coerce_price",
    "coerce_text",
    "coerce_features",
    "status_is",
]
