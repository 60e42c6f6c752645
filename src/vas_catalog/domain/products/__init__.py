# 🛍 vas_catalog/domain/products/__init__.py
from .entities import Product, ProductKey, ProviderId
from .interfaces import IProductNormalizer, IProductSource

__all__ = ["Product", "ProductKey", "ProviderId", "IProductNormalizer", "IProductSource"]
