# 🧰 vas_catalog/shared/utils/__init__.py
"""
🧰 Спільні утиліти: логування та незмінні структури.
"""

from __future__ import annotations

# 🔠 Логування
from .logger import (
    LOG_NAME,
    get_logger,
    init_logging,
    init_logging_from_config,
)

# 🧊 Незмінні структури
from .immutables import FrozenMapping, freeze, is_frozen_mapping, thaw

# ================================
# 📦 ЕКСПОРТ ПАКЕТУ
# ================================
__all__ = [
    # logging
    "LOG_NAME",
    "get_logger",
    "init_logging",
    "init_logging_from_config",
    # immutables
    "FrozenMapping",
    "freeze",
    "thaw",
    "is_frozen_mapping",
]
