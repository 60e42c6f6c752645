# 🧺 vas_catalog/infrastructure/normalizers/generic.py
"""
🧺 Best-effort адаптер для провайдерів без власного мапінгу.

🔹 Очікує payload-список; поля беруться як є, відсутні → дефолти.
🔹 Немає id → випадковий uuid (такий продукт не стабільний між синками).
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, Mapping

from vas_catalog.config.setup.constants import CATEGORIES, DEFAULT_CURRENCY
from .base import BaseNormalizer


class GenericNormalizer(BaseNormalizer):
    collection_field = None

    def map_entry(self, entry: Mapping[str, Any]) -> Dict[str, Any]:
        native_id = entry.get("id")
        if native_id is None or native_id == "":
            native_id = uuid.uuid4().hex
        metadata = entry.get("metadata")
        return {
            "native_id": native_id,
            "name": entry.get("name"),
            "category": entry.get("category") or CATEGORIES.OTHER,
            "price": entry.get("price") if entry.get("price") is not None else 0,
            "currency": entry.get("currency") or DEFAULT_CURRENCY,
            "available": entry.get("availability") is not False,
            "description": entry.get("description"),
            "features": entry.get("features"),
            "metadata": dict(metadata) if isinstance(metadata, Mapping) else {},
        }


__all__ = ["GenericNormalizer"]
