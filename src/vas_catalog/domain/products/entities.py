# 🛍 vas_catalog/domain/products/entities.py
"""
🛍 Канонічна модель продукту після нормалізації відповіді провайдера.

🔹 `Product` — immutable DTO: ідентичність (provider_id + native_id), ціна Decimal ≥ 0, теги, metadata.
🔹 Створюється нормалізатором на кожну синхронізацію і замінюється цілком при наступній успішній.
🔹 `to_dict()` віддає camelCase-представлення для зовнішнього API-шару.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass, field                                         # 🧱 Створення DTO
from datetime import datetime                                                    # 🕒 Мітка оновлення
from decimal import Decimal                                                      # 💵 Точні гроші
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple                # 🧰 Типи

# 🧩 Внутрішні модулі
from vas_catalog.shared.utils.immutables import freeze, thaw


# ================================
# 🧾 ПУБЛІЧНІ ТИПИ (АЛІАСИ)
# ================================
ProviderId = str                                                                 # 🏷️ Ключ провайдера (easypay, flash…)
ProductKey = Tuple[str, str]                                                     # 🔑 (provider_id, native_id)


# ================================
# 🏛️ КАНОНІЧНИЙ ПРОДУКТ
# ================================
@dataclass(frozen=True, slots=True)
class Product:
    """
    Один продукт, який можна купити, у канонічній формі.
    """

    provider_id: ProviderId                                                      # 🏷️ Власник продукту
    native_id: str                                                               # 🆔 Ідентифікатор у системі вендора
    name: str
    category: str
    price: Decimal                                                               # 💵 Невідʼємна сума
    currency: str = "ZAR"
    available: bool = True                                                       # ✅ Сирий прапорець вендора
    description: str = ""
    features: FrozenSet[str] = field(default_factory=frozenset)                  # 🏷️ Теги (featured, airtime…)
    provider_name: str = ""
    last_updated: Optional[datetime] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.price, Decimal):                                  # 🔢 Приймаємо int/str, зберігаємо Decimal
            object.__setattr__(self, "price", Decimal(str(self.price)))
        if self.price < 0:
            raise ValueError(f"Product price must be non-negative, got {self.price}")
        if not isinstance(self.features, frozenset):
            object.__setattr__(self, "features", frozenset(self.features))
        object.__setattr__(self, "metadata", freeze(dict(self.metadata)))        # 🧊 Metadata не мутується після створення

    @property
    def key(self) -> ProductKey:
        """🔑 Складена ідентичність продукту."""
        return (self.provider_id, self.native_id)

    @property
    def product_id(self) -> str:
        """🆔 Рядковий ідентифікатор у стилі `<provider>_<native>`."""
        return f"{self.provider_id}_{self.native_id}"

    def has_feature(self, tag: str) -> bool:
        return tag in self.features

    def to_dict(self) -> Dict[str, Any]:
        """📤 Серіалізація для API-шару."""
        return {
            "id": self.product_id,
            "nativeId": self.native_id,
            "name": self.name,
            "category": self.category,
            "price": str(self.price),
            "currency": self.currency,
            "availability": self.available,
            "description": self.description,
            "features": sorted(self.features),
            "spId": self.provider_id,
            "spName": self.provider_name,
            "lastUpdated": self.last_updated.isoformat() if self.last_updated else None,
            "metadata": thaw(self.metadata),
        }


__all__ = ["Product", "ProductKey", "ProviderId"]
