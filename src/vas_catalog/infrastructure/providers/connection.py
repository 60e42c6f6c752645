# 🔌 vas_catalog/infrastructure/providers/connection.py
"""
🔌 Статичний опис підключення до провайдера.

🔹 `ProviderEndpoints` — шляхи API (ядро використовує лише `products`).
🔹 `ProviderConnection` — immutable: URL, облікові дані, словник категорій, інтервал та політика ретраїв.
🔹 `from_mapping` будує підключення з вузла `providers.<id>` конфігу, підставляючи глобальні дефолти `sync.*`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass, field                                         # 🧱 Immutable DTO
from typing import Any, FrozenSet, Mapping, Optional

# 🧩 Внутрішні модулі
from vas_catalog.config.setup.constants import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_DELAY_SEC,
    DEFAULT_SYNC_INTERVAL_SEC,
    DEFAULT_TIMEOUT_SEC,
)


@dataclass(frozen=True, slots=True)
class ProviderEndpoints:
    products: str = "/products"
    pricing: str = "/pricing"
    availability: str = "/availability"

    @classmethod
    def from_mapping(cls, node: Optional[Mapping[str, Any]]) -> "ProviderEndpoints":
        node = node or {}
        defaults = cls()
        return cls(
            products=str(node.get("products") or defaults.products),
            pricing=str(node.get("pricing") or defaults.pricing),
            availability=str(node.get("availability") or defaults.availability),
        )


@dataclass(frozen=True, slots=True)
class ProviderConnection:
    """Все, що потрібно, щоб синхронізувати одного провайдера."""

    provider_id: str
    name: str
    base_url: str
    api_key: str = ""
    secret: str = ""
    endpoints: ProviderEndpoints = field(default_factory=ProviderEndpoints)
    categories: FrozenSet[str] = field(default_factory=frozenset)               # 🏷️ Словник категорій вендора
    sync_interval_sec: float = DEFAULT_SYNC_INTERVAL_SEC
    timeout_sec: float = DEFAULT_TIMEOUT_SEC
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay_sec: float = DEFAULT_RETRY_DELAY_SEC
    adapter: str = ""                                                            # 🧩 Ключ адаптера (порожньо → provider_id)
    enabled: bool = True

    def __post_init__(self) -> None:
        if not self.provider_id:
            raise ValueError("provider_id is required")
        if not isinstance(self.categories, frozenset):
            object.__setattr__(self, "categories", frozenset(self.categories))
        if not self.adapter:
            object.__setattr__(self, "adapter", self.provider_id)
        if self.sync_interval_sec <= 0:
            raise ValueError(f"sync_interval_sec must be positive for {self.provider_id!r}")
        if self.timeout_sec <= 0:
            raise ValueError(f"timeout_sec must be positive for {self.provider_id!r}")
        if self.max_retries < 0 or self.retry_delay_sec < 0:
            raise ValueError(f"retry settings must be non-negative for {self.provider_id!r}")

    @property
    def products_url(self) -> str:
        return self.base_url.rstrip("/") + self.endpoints.products

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.secret)

    @classmethod
    def from_mapping(
        cls,
        provider_id: str,
        node: Mapping[str, Any],
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> "ProviderConnection":
        """
        📥 Вузол `providers.<id>` + секція `sync.*` як запасні значення таймауту й ретраїв.
        """
        defaults = defaults or {}

        def pick(key: str, fallback: Any) -> Any:
            value = node.get(key)
            if value is None:
                value = defaults.get(key, fallback)
            return fallback if value is None else value

        return cls(
            provider_id=str(provider_id),
            name=str(node.get("name") or provider_id),
            base_url=str(node.get("base_url") or ""),
            api_key=str(node.get("api_key") or ""),
            secret=str(node.get("secret") or ""),
            endpoints=ProviderEndpoints.from_mapping(node.get("endpoints")),
            categories=frozenset(str(c) for c in (node.get("categories") or ())),
            sync_interval_sec=float(pick("sync_interval_sec", DEFAULT_SYNC_INTERVAL_SEC)),
            timeout_sec=float(pick("timeout_sec", DEFAULT_TIMEOUT_SEC)),
            max_retries=int(pick("max_retries", DEFAULT_MAX_RETRIES)),
            retry_delay_sec=float(pick("retry_delay_sec", DEFAULT_RETRY_DELAY_SEC)),
            adapter=str(node.get("adapter") or ""),
            enabled=bool(node.get("enabled", True)),
        )


__all__ = ["ProviderEndpoints", "ProviderConnection"]
