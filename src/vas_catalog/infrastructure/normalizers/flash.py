# 🎟️ vas_catalog/infrastructure/normalizers/flash.py
"""
🎟️ Flash: `vouchers[]` → ваучери.

🔹 `expiryDate` зберігається в metadata; генератор меню за ним визначає доступність.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from vas_catalog.config.setup.constants import CATEGORIES
from .base import BaseNormalizer, status_is


class FlashNormalizer(BaseNormalizer):
    collection_field = "vouchers"
    category = CATEGORIES.VOUCHERS
    default_features = frozenset({"cash_out", "voucher_redemption"})

    def map_entry(self, entry: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "native_id": entry.get("code"),
            "name": entry.get("name"),
            "price": entry.get("faceValue"),
            "available": status_is(entry, "available"),
            "description": entry.get("description"),
            "metadata": {
                "voucherCode": entry.get("code"),
                "expiryDate": entry.get("expiryDate"),
                "redemptionType": entry.get("redemptionType"),
            },
        }


__all__ = ["FlashNormalizer"]
