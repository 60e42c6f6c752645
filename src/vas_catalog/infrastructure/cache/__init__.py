# 💾 vas_catalog/infrastructure/cache/__init__.py
from .product_cache import STATUS_ACTIVE, STATUS_INACTIVE, CachePartition, ProductCache, ProviderStatus

__all__ = ["CachePartition", "ProductCache", "ProviderStatus", "STATUS_ACTIVE", "STATUS_INACTIVE"]
