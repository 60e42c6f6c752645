# 🏦 vas_catalog/infrastructure/normalizers/dtmercury.py
"""
🏦 dtMercury: `services[]` → банківські послуги (real-time payments).
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from vas_catalog.config.setup.constants import CATEGORIES
from .base import BaseNormalizer, status_is


class DtMercuryNormalizer(BaseNormalizer):
    collection_field = "services"
    category = CATEGORIES.BANKING_SERVICES
    default_features = frozenset({"real_time_payment", "bank_transfer"})

    def map_entry(self, entry: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "native_id": entry.get("serviceId"),
            "name": entry.get("serviceName"),
            "price": entry.get("fee"),                                          # 💵 Комісія і є ціною послуги
            "available": status_is(entry, "active"),
            "description": entry.get("description"),
            "metadata": {
                "serviceId": entry.get("serviceId"),
                "bankCode": entry.get("bankCode"),
                "serviceType": entry.get("serviceType"),
            },
        }


__all__ = ["DtMercuryNormalizer"]
