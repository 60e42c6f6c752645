# 🏪 vas_catalog/infrastructure/services/catalog_service.py
"""
🏪 CatalogService — явний сервіс-обʼєкт движка каталогу.

🔹 Володіє реєстром, кешем, оркестратором, генератором меню та пошуком (жодних глобальних синглтонів).
🔹 Після кожної успішної синхронізації меню перебудовується; збій генерації логується, лишається старе меню.
🔹 Віддає API для тонкого контролер-шару: продукти, статуси, меню, пошук, примусові синки, health-check.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                                   # 🧾 Логи фасаду
import time                                                                      # ⏱️ Латентність генерації
from typing import Any, Dict, List, Mapping, Optional, Union

# 🧩 Внутрішні модулі
from vas_catalog.domain.menu.entities import CategoryBucket, MenuProduct, MenuStructure
from vas_catalog.domain.menu.search import MenuSearchService, SearchFilters
from vas_catalog.domain.menu.services import MenuGenerator
from vas_catalog.domain.products.entities import Product
from vas_catalog.errors.custom_errors import MenuGenerationError
from vas_catalog.infrastructure.cache.product_cache import STATUS_ACTIVE, ProductCache, ProviderStatus
from vas_catalog.infrastructure.providers.fetcher import ProviderFetcher
from vas_catalog.infrastructure.providers.registry import ProviderRegistry
from vas_catalog.infrastructure.sync.orchestrator import SyncOrchestrator, SyncResult, SyncStats
from vas_catalog.shared.metrics.menu import MENU_GENERATION_LATENCY, MENU_GENERATIONS, MENU_VERSION
from vas_catalog.shared.utils.logger import LOG_NAME

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.service")

HEALTHY = "healthy"
DEGRADED = "degraded"


class CatalogService:
    """🏪 Єдина точка входу до стану каталогу та меню."""

    def __init__(
        self,
        registry: ProviderRegistry,
        cache: ProductCache,
        orchestrator: SyncOrchestrator,
        menu_generator: MenuGenerator,
        search_service: Optional[MenuSearchService] = None,
        *,
        fetcher: Optional[ProviderFetcher] = None,
    ) -> None:
        self._registry = registry
        self._cache = cache
        self._orchestrator = orchestrator
        self._menu = menu_generator
        self._search = search_service or MenuSearchService()
        self._fetcher = fetcher                                                  # 🔌 Закривається на shutdown
        self._started = False
        self._orchestrator.add_listener(self._on_synced)

    # ================================
    # 🚀 ЖИТТЄВИЙ ЦИКЛ
    # ================================
    async def start(self) -> List[SyncResult]:
        """Перша синхронізація всіх провайдерів, перше меню, далі таймери."""
        if self._started:
            logger.warning("⚠️ service.already_started")
            return []
        self._started = True
        if self._fetcher is not None:
            await self._fetcher.initialize()
        results = await self._orchestrator.start_all(wait_initial=True)
        self._regenerate_safely(reason="startup")
        logger.info(
            "🚀 service.started",
            extra={"providers": len(results), "succeeded": sum(1 for r in results if r.success)},
        )
        return results

    async def shutdown(self) -> None:
        await self._orchestrator.stop()
        if self._fetcher is not None:
            await self._fetcher.close()
        self._started = False
        logger.info("🛑 service.shutdown")

    @property
    def is_running(self) -> bool:
        return self._started and self._orchestrator.is_running

    # ================================
    # 🧭 МЕНЮ
    # ================================
    def _generate_menu(self) -> MenuStructure:
        started = time.perf_counter()
        try:
            menu = self._menu.generate(self._cache.get_all())
        except MenuGenerationError:
            MENU_GENERATIONS.labels(outcome="error").inc()
            raise
        finally:
            MENU_GENERATION_LATENCY.observe(time.perf_counter() - started)
        MENU_GENERATIONS.labels(outcome="success").inc()
        MENU_VERSION.set(menu.version)
        return menu

    def _regenerate_safely(self, *, reason: str) -> Optional[MenuStructure]:
        try:
            return self._generate_menu()
        except MenuGenerationError as exc:
            current = self._menu.current
            logger.error(
                "❌ service.menu_regeneration_failed",
                extra={
                    "reason": reason,
                    "stale_version": current.version if current else None,
                    **exc.to_log_extra(),
                },
            )
            return None

    def _on_synced(self, provider_id: str, products: List[Product]) -> None:
        logger.debug("🔁 service.menu_refresh", extra={"provider": provider_id, "products": len(products)})
        self._regenerate_safely(reason=f"sync:{provider_id}")

    def force_regenerate_menu(self) -> MenuStructure:
        """Помилка генерації летить до викликача (`MenuGenerationError`)."""
        logger.info("🛠️ service.menu_forced")
        return self._generate_menu()

    def get_current_menu(self) -> Optional[MenuStructure]:
        return self._menu.current

    def get_menu_by_category(self, name: str) -> Optional[CategoryBucket]:
        return self._menu.get_menu_by_category(name)

    def get_featured_products(self) -> List[MenuProduct]:
        return self._menu.get_featured_products()

    def get_categories(self) -> List[Dict[str, Any]]:
        return self._menu.get_categories()

    def get_menu_stats(self) -> Optional[Dict[str, Any]]:
        return self._menu.get_menu_stats()

    def search_products(
        self,
        query: str = "",
        filters: Union[SearchFilters, Mapping[str, Any], None] = None,
    ) -> List[MenuProduct]:
        if not isinstance(filters, SearchFilters):
            filters = SearchFilters.from_mapping(filters)
        return self._search.search(self._menu.current, query, filters)

    # ================================
    # 📦 ПРОДУКТИ ТА ПРОВАЙДЕРИ
    # ================================
    def get_all_products(self) -> List[Product]:
        return self._cache.get_all()

    def get_products_by_provider(self, provider_id: str) -> List[Product]:
        self._registry.get(provider_id)                                          # ⚙️ Невідомий id → ProviderNotFoundError
        return self._cache.get_by_provider(provider_id)

    def get_provider_status(self) -> Dict[str, ProviderStatus]:
        return self._cache.get_status(self._registry)

    def get_sync_stats(self) -> Dict[str, SyncStats]:
        return self._orchestrator.get_sync_stats()

    def get_stats(self) -> Dict[str, Any]:
        statuses = self.get_provider_status()
        syncs = [s.last_sync for s in statuses.values() if s.last_sync is not None]
        current = self._menu.current
        return {
            "totalProducts": len(self._cache.get_all()),
            "activeSPs": sum(1 for s in statuses.values() if s.status == STATUS_ACTIVE),
            "totalSPs": len(self._registry),
            "cacheSize": len(self._cache),
            "lastSync": max(syncs).isoformat() if syncs else None,
            "menuVersion": current.version if current else None,
        }

    # ================================
    # 🛠️ ОПЕРАТОРСЬКІ ДІЇ
    # ================================
    async def force_sync_provider(self, provider_id: str) -> SyncResult:
        return await self._orchestrator.force_sync(provider_id)

    async def force_sync_all(self) -> List[SyncResult]:
        return await self._orchestrator.force_sync_all()

    def health_check(self) -> Dict[str, Any]:
        """🩺 healthy — усі увімкнені провайдери мають дані й меню існує; інакше degraded."""
        statuses = self.get_provider_status()
        enabled = [conn.provider_id for conn in self._registry.enabled()]
        active = [pid for pid in enabled if statuses[pid].status == STATUS_ACTIVE]
        current = self._menu.current
        healthy = bool(enabled) and len(active) == len(enabled) and current is not None
        return {
            "status": HEALTHY if healthy else DEGRADED,
            "running": self.is_running,
            "activeProviders": len(active),
            "totalProviders": len(enabled),
            "inactiveProviders": [pid for pid in enabled if pid not in active],
            "menuVersion": current.version if current else None,
            "totalProducts": len(self._cache.get_all()),
        }


__all__ = ["CatalogService", "HEALTHY", "DEGRADED"]
