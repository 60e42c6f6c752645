# 🗂️ vas_catalog/infrastructure/normalizers/registry.py
"""
🗂️ Реєстр адаптерів: ключ адаптера → клас нормалізатора.

🔹 Заповнюється на старті (`default_registry()`), ключ береться з `ProviderConnection.adapter`.
🔹 Невідомий ключ → `GenericNormalizer`.
🔹 Інстанси кешуються на провайдера: адаптери без стану, крім підключення та годинника.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional, Type

# 🧩 Внутрішні модулі
from vas_catalog.infrastructure.providers.connection import ProviderConnection
from vas_catalog.shared.utils.logger import LOG_NAME
from .base import BaseNormalizer, Clock
from .dtmercury import DtMercuryNormalizer
from .easypay import EasyPayNormalizer
from .flash import FlashNormalizer
from .generic import GenericNormalizer
from .mobilemart import MobileMartNormalizer

logger = logging.getLogger(f"{LOG_NAME}.normalizers.registry")

BUILTIN_ADAPTERS: Mapping[str, Type[BaseNormalizer]] = {
    "easypay": EasyPayNormalizer,
    "dtmercury": DtMercuryNormalizer,
    "flash": FlashNormalizer,
    "mobilemart": MobileMartNormalizer,
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class NormalizerRegistry:
    """🗂️ Вибір адаптера за ключем замість розгалуження по provider id."""

    def __init__(
        self,
        adapters: Optional[Mapping[str, Type[BaseNormalizer]]] = None,
        *,
        fallback: Type[BaseNormalizer] = GenericNormalizer,
        clock: Clock = _utc_now,
    ) -> None:
        self._adapters: Dict[str, Type[BaseNormalizer]] = dict(adapters or {})
        self._fallback = fallback
        self._clock = clock
        self._instances: Dict[str, BaseNormalizer] = {}

    def register(self, key: str, adapter: Type[BaseNormalizer]) -> None:
        self._adapters[key] = adapter
        self._instances.clear()
        logger.debug("🧩 normalizers.registered", extra={"adapter_key": key, "adapter": adapter.__name__})

    def adapter_for(self, key: str) -> Type[BaseNormalizer]:
        return self._adapters.get(key, self._fallback)

    def for_provider(self, connection: ProviderConnection) -> BaseNormalizer:
        instance = self._instances.get(connection.provider_id)
        if instance is None:
            adapter = self.adapter_for(connection.adapter)
            if adapter is self._fallback:
                logger.info(
                    "🧺 normalizers.fallback",
                    extra={"provider": connection.provider_id, "adapter_key": connection.adapter},
                )
            instance = adapter(connection, clock=self._clock)
            self._instances[connection.provider_id] = instance
        return instance

    def keys(self) -> List[str]:
        return list(self._adapters)


def default_registry(*, clock: Clock = _utc_now) -> NormalizerRegistry:
    return NormalizerRegistry(BUILTIN_ADAPTERS, clock=clock)


__all__ = ["NormalizerRegistry", "BUILTIN_ADAPTERS", "default_registry"]
