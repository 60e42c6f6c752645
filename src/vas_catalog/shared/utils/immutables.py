# 🧊 vas_catalog/shared/utils/immutables.py
"""
🧊 Заморожування сирих вендорних структур перед тим, як вони потраплять у кеш.

🔹 `freeze` робить metadata продукту незмінною (dict → MappingProxyType, list → tuple, set → frozenset).
🔹 `thaw` повертає звичайні dict/list для серіалізації у відповіді API.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from collections.abc import Mapping                      # 🧰 Перевірки типів колекцій
from datetime import date, datetime                      # 🕒 Дати з metadata (expiryDate)
from decimal import Decimal                              # 💵 Грошові значення
from enum import Enum                                    # 🏷️ Перерахування
from types import MappingProxyType                       # 🔒 Незмінна обгортка над dict
from typing import Any                                   # 🧰 Загальний тип для даних

FrozenMapping = MappingProxyType                         # 🔄 Псевдонім для читаємості

_SCALARS = (str, bytes, int, float, bool, Decimal, Enum, datetime, date)


def freeze(obj: Any) -> Any:
    """Рекурсивно перетворює колекції на незмінні аналоги."""
    if obj is None or isinstance(obj, _SCALARS):          # 🧱 Скаляри повертаємо як є
        return obj
    if isinstance(obj, Mapping):                          # 🧭 Словники → MappingProxyType
        return MappingProxyType({str(key): freeze(value) for key, value in obj.items()})
    if isinstance(obj, (set, frozenset)):                 # 🧮 Множини → frozenset
        return frozenset(freeze(value) for value in obj)
    if isinstance(obj, (list, tuple)):                    # 🔁 Послідовності → tuple
        return tuple(freeze(value) for value in obj)
    return obj


def thaw(obj: Any) -> Any:
    """Зворотна операція до `freeze` — для JSON-відповідей."""
    if isinstance(obj, Mapping):
        return {key: thaw(value) for key, value in obj.items()}
    if isinstance(obj, (tuple, list)):
        return [thaw(value) for value in obj]
    if isinstance(obj, frozenset):
        return sorted((thaw(value) for value in obj), key=str)
    return obj


def is_frozen_mapping(obj: Any) -> bool:
    """Перевіряє, чи є обʼєкт замороженою мапою (`freeze(dict)`)."""
    return isinstance(obj, MappingProxyType)


__all__ = ["FrozenMapping", "freeze", "thaw", "is_frozen_mapping"]
