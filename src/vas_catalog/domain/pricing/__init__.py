# 💵 vas_catalog/domain/pricing/__init__.py
from .formatting import CURRENCY_SYMBOLS, FREE_LABEL, format_price

__all__ = ["CURRENCY_SYMBOLS", "FREE_LABEL", "format_price"]
