# 🔁 vas_catalog/shared/metrics/sync.py
"""
🔁 Prometheus-метрики синхронізації каталогів провайдерів.

🔹 `SYNC_ATTEMPTS` / `SYNC_SUCCESS` / `SYNC_FAILURE` — лічильники з міткою `provider`.
🔹 `SYNC_DURATION` — гістограма тривалості повного прогону (з ретраями).
🔹 `CACHED_PRODUCTS` — поточний розмір партиції кешу, `PRODUCTS_SKIPPED` — відкинуті записи нормалізатора.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from prometheus_client import Counter, Gauge, Histogram                 # 📊 Prometheus-метрики

# ================================
# 📊 ЛІЧИЛЬНИКИ СИНХРОНІЗАЦІЇ
# ================================
SYNC_ATTEMPTS = Counter(
    "catalog_sync_attempts_total",                                      # 🏷️ Імʼя метрики
    "Outbound catalog fetch attempts (retries included)",               # 📝 Опис у Prometheus
    ["provider"],
)

SYNC_SUCCESS = Counter(
    "catalog_sync_success_total",
    "Successful provider catalog syncs",
    ["provider"],
)

SYNC_FAILURE = Counter(
    "catalog_sync_failure_total",
    "Provider catalog syncs that exhausted all retries",
    ["provider"],
)

# ================================
# ⏱️ ЛАТЕНТНІСТЬ ТА РОЗМІРИ
# ================================
SYNC_DURATION = Histogram(
    "catalog_sync_seconds",
    "Wall time of one provider sync run",
    ["provider"],
)

CACHED_PRODUCTS = Gauge(
    "catalog_cached_products",
    "Products currently held in the provider cache partition",
    ["provider"],
)

PRODUCTS_SKIPPED = Counter(
    "catalog_products_skipped_total",
    "Vendor entries dropped by the response normalizer",
    ["provider"],
)


__all__ = [
    "SYNC_ATTEMPTS",
    "SYNC_SUCCESS",
    "SYNC_FAILURE",
    "SYNC_DURATION",
    "CACHED_PRODUCTS",
    "PRODUCTS_SKIPPED",
]
