# 🏪 vas_catalog/infrastructure/services/__init__.py
from .catalog_service import DEGRADED, HEALTHY, CatalogService

__all__ = ["CatalogService", "HEALTHY", "DEGRADED"]
