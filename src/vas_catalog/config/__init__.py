# ⚙️ vas_catalog/config/__init__.py
"""
⚙️ Пакет Config — централізована конфігурація та збирання сервісів.

Цей пакет відповідає за:
- Завантаження налаштувань (.env, config.yaml, файл-оверрайд, змінні провайдерів).
- Константи ранжування та дефолти синхронізації.
- Створення та зв'язування всіх сервісів через DI‑контейнер.
"""

# ================================
# 🧩 ПУБЛІЧНИЙ API ПАКЕТУ
# ================================
from typing import TYPE_CHECKING

from .config_service import ConfigService
from .setup.constants import CATEGORIES, RANKING

if TYPE_CHECKING:  # лише для підказок типів, без виконання імпорту під час рантайму
    from .setup.container import Container

# ================================
# 📤 EXPORT
# ================================

__all__ = [
    "CATEGORIES",
    "ConfigService",
    "Container",
    "RANKING",
]


def __getattr__(name: str):
    if name == "Container":
        from .setup.container import Container  # локальний імпорт → немає циклу

        return Container
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
