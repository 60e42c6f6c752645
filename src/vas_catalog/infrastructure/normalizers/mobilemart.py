# 📱 vas_catalog/infrastructure/normalizers/mobilemart.py
"""
📱 MobileMart: `services[]` → мобільні послуги (airtime, data, electricity).
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from vas_catalog.config.setup.constants import CATEGORIES
from .base import BaseNormalizer, status_is


class MobileMartNormalizer(BaseNormalizer):
    collection_field = "services"
    category = CATEGORIES.MOBILE_SERVICES
    default_features = frozenset({"airtime", "data", "electricity"})

    def map_entry(self, entry: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "native_id": entry.get("serviceId"),
            "name": entry.get("serviceName"),
            "price": entry.get("price"),
            "available": status_is(entry, "available"),
            "description": entry.get("description"),
            "metadata": {
                "serviceId": entry.get("serviceId"),
                "provider": entry.get("provider"),                               # 📡 Оператор мережі
                "serviceType": entry.get("serviceType"),
            },
        }


__all__ = ["MobileMartNormalizer"]
