# 🧭 vas_catalog/shared/metrics/menu.py
"""
🧭 Prometheus-метрики генератора меню.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from prometheus_client import Counter, Gauge, Histogram                 # 📊 Prometheus-метрики

MENU_GENERATIONS = Counter(
    "menu_generations_total",
    "Menu generation calls by outcome",
    ["outcome"],
)

MENU_GENERATION_LATENCY = Histogram(
    "menu_generation_seconds",
    "Time to build the menu structure",
)

MENU_VERSION = Gauge(
    "menu_version",
    "Version number of the current menu snapshot",
)


__all__ = ["MENU_GENERATIONS", "MENU_GENERATION_LATENCY", "MENU_VERSION"]
