# 🧾 vas_catalog/infrastructure/normalizers/easypay.py
"""
🧾 EasyPay: `bills[]` → продукти категорії Bill Payments.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from vas_catalog.config.setup.constants import CATEGORIES
from .base import BaseNormalizer, coerce_text, status_is


class EasyPayNormalizer(BaseNormalizer):
    collection_field = "bills"
    category = CATEGORIES.BILL_PAYMENTS
    default_features = frozenset({"bill_payment", "instant_settlement"})

    def map_entry(self, entry: Mapping[str, Any]) -> Dict[str, Any]:
        merchant = coerce_text(entry.get("merchantName"))
        account = coerce_text(entry.get("accountNumber"))
        return {
            "native_id": entry.get("billNumber"),
            "name": merchant,
            "price": entry.get("amount"),
            "available": status_is(entry, "active"),
            "description": f"{merchant} - {account}" if account else merchant,
            "metadata": {
                "billNumber": entry.get("billNumber"),
                "accountNumber": entry.get("accountNumber"),
                "merchantCode": entry.get("merchantCode"),
            },
        }


__all__ = ["EasyPayNormalizer"]
