# 🧭 vas_catalog/domain/menu/__init__.py
"""
🧭 Доменний шар меню: DTO, ранжування, генератор та пошук.
"""

from __future__ import annotations

# 🧱 DTO
from .entities import CategoryBucket, MenuProduct, MenuStats, MenuStructure

# 🧮 Ранжування
from .ranking import build_tags, calculate_priority, check_availability, display_name

# 🏗️ Генерація та пошук
from .search import MenuSearchService, SearchFilters
from .services import MenuConfig, MenuGenerator

__all__ = [
    "CategoryBucket",
    "MenuProduct",
    "MenuStats",
    "MenuStructure",
    "build_tags",
    "calculate_priority",
    "check_availability",
    "display_name",
    "MenuSearchService",
    "SearchFilters",
    "MenuConfig",
    "MenuGenerator",
]
