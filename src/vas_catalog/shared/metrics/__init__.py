# 📊 vas_catalog/shared/metrics/__init__.py
"""
📊 Пакет метрик Prometheus для движка каталогу.

🔹 Синхронізація провайдерів (спроби, успіхи, збої, тривалість, розмір кешу).
🔹 Генерація меню (кількість, латентність, поточна версія).
🔹 Легкий bootstrap експортер `/metrics`.
"""

from __future__ import annotations

# 🔁 Синхронізація
from .sync import (
    CACHED_PRODUCTS,
    PRODUCTS_SKIPPED,
    SYNC_ATTEMPTS,
    SYNC_DURATION,
    SYNC_FAILURE,
    SYNC_SUCCESS,
)

# 🧭 Меню
from .menu import MENU_GENERATION_LATENCY, MENU_GENERATIONS, MENU_VERSION

# 🚀 Експортер Prometheus
from .exporters import maybe_start_prometheus

# ================================
# 📦 ЕКСПОРТ ПАКЕТУ
# ================================
__all__ = [
    "SYNC_ATTEMPTS",
    "SYNC_SUCCESS",
    "SYNC_FAILURE",
    "SYNC_DURATION",
    "CACHED_PRODUCTS",
    "PRODUCTS_SKIPPED",
    "MENU_GENERATIONS",
    "MENU_GENERATION_LATENCY",
    "MENU_VERSION",
    "maybe_start_prometheus",
]
