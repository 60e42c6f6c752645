# 📦 vas_catalog/config/setup/container.py
"""
📦 Контейнер залежностей движка каталогу.

🔹 Створює сервіси в правильному порядку DI
🔹 Інкапсулює конфігурацію HTTP-клієнта, кешу, планувальника та меню
🔹 Дає єдину точку доступу до `CatalogService`
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio                                                           # 💤 Дефолтний sleep для ретраїв
import logging                                                           # 🧾 Базові засоби логування
from typing import TYPE_CHECKING, Any, Optional                          # 🧮 Допоміжні типи

# 🧩 Внутрішні модулі проєкту
from vas_catalog.domain.menu.search import MenuSearchService             # 🔍 Пошук по меню
from vas_catalog.domain.menu.services import MenuConfig, MenuGenerator   # 🧭 Генератор меню
from vas_catalog.errors.strategies import HttpxErrorStrategy             # 🧱 Стратегія помилок httpx
from vas_catalog.infrastructure.cache.product_cache import ProductCache  # 💾 Кеш продуктів
from vas_catalog.infrastructure.normalizers.registry import default_registry  # 🗂️ Адаптери провайдерів
from vas_catalog.infrastructure.providers.fetcher import ProviderFetcher  # 🌐 HTTP-фетчер
from vas_catalog.infrastructure.providers.registry import ProviderRegistry  # 📚 Реєстр провайдерів
from vas_catalog.infrastructure.providers.signer import RequestSigner    # 🔏 Підпис запитів
from vas_catalog.infrastructure.services.catalog_service import CatalogService  # 🏪 Фасад
from vas_catalog.infrastructure.sync.orchestrator import SyncOrchestrator  # 🔄 Оркестратор
from vas_catalog.infrastructure.sync.retry_policy import Sleep           # 💤 Тип sleep
from vas_catalog.infrastructure.sync.scheduler import SyncScheduler      # ⏰ Таймери
from vas_catalog.shared.metrics.exporters import maybe_start_prometheus  # 📈 Bootstrap метрик
from vas_catalog.shared.utils.logger import LOG_NAME, init_logging_from_config  # 🧾 Конфіг логування

if TYPE_CHECKING:
    import httpx

    from vas_catalog.config.config_service import ConfigService          # 🗂️ Тип під час перевірки

logger = logging.getLogger(LOG_NAME)                                     # 🧾 Модульний логер контейнера


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _int_or_default(value: Any, default: int) -> int:
    """
    Повертає ціле число або запасне значення, якщо каст неможливий.
    """
    if value is None:                                                    # 🚫 Значення відсутнє
        return default
    try:
        return int(value)
    except (TypeError, ValueError):                                      # ⚠️ Неможливо привести до int
        return default


def bootstrap_logging(config: Optional["ConfigService"] = None) -> logging.Logger:
    """
    Зчитує конфіг логування і запускає кореневий логер.
    """
    if config is None:
        from vas_catalog.config.config_service import ConfigService      # 🧭 Локальний імпорт для уникнення циклів

        config = ConfigService()
    node = config.get("logging", {}) or {}                               # 📄 Вузол логування
    return init_logging_from_config(node)


# ================================
# 🏛️ КОНТЕЙНЕР ЗАЛЕЖНОСТЕЙ
# ================================
class Container:
    """
    Координує ініціалізацію інфраструктурних та доменних сервісів каталогу.
    """

    def __init__(
        self,
        config: "ConfigService",
        *,
        transport: Optional["httpx.AsyncBaseTransport"] = None,
        sleep: Sleep = asyncio.sleep,
        start_metrics: bool = True,
    ) -> None:
        self.config = config                                              # ⚙️ Джерело конфігурацій DI
        logger.info("🚀 container.build_started")
        if start_metrics:
            self._bootstrap_metrics_if_enabled()                          # 📈 Можливий запуск експорту метрик
        self._setup_providers(transport)                                  # 🔌 Реєстр, підпис, HTTP
        self._setup_cache_and_sync(sleep)                                 # 💾 Кеш, адаптери, таймери
        self._setup_menu()                                                # 🧭 Меню та пошук
        self.catalog_service = CatalogService(
            registry=self.provider_registry,
            cache=self.product_cache,
            orchestrator=self.sync_orchestrator,
            menu_generator=self.menu_generator,
            search_service=self.search_service,
            fetcher=self.fetcher,
        )                                                                 # 🏪 Фасад для API-шару
        logger.info("✅ container.ready", extra={"providers": self.provider_registry.ids()})

    # ================================
    # 📈 МЕТРИКИ
    # ================================
    def _bootstrap_metrics_if_enabled(self) -> None:
        """
        Стартує Prometheus-експортер, якщо це дозволено конфігурацією.
        """
        if not bool(self.config.get("metrics.enabled", True)):
            logger.debug("📉 metrics.disabled")
            return
        exporter_name = (self.config.get("metrics.exporter", "prometheus") or "prometheus").lower()
        if exporter_name != "prometheus":                                 # 🚫 Поки підтримуємо лише Prometheus
            logger.warning("📉 metrics.exporter_unsupported", extra={"exporter": exporter_name})
            return
        port = _int_or_default(self.config.get("metrics.prometheus.port", 9108, cast=int), 9108)
        try:
            maybe_start_prometheus(port)
        except OSError:                                                   # ⚠️ Порт зайнятий або недоступний
            logger.exception("⚠️ metrics.exporter_failed", extra={"port": port})

    # ================================
    # 🔌 ПРОВАЙДЕРИ
    # ================================
    def _setup_providers(self, transport: Optional["httpx.AsyncBaseTransport"]) -> None:
        self.provider_registry = ProviderRegistry.from_config(self.config)
        self.signer = RequestSigner()
        self.fetcher = ProviderFetcher(
            self.signer,
            transport=transport,
            strategies=(HttpxErrorStrategy(),),
        )

    # ================================
    # 💾 КЕШ ТА СИНХРОНІЗАЦІЯ
    # ================================
    def _setup_cache_and_sync(self, sleep: Sleep) -> None:
        self.product_cache = ProductCache()
        self.normalizers = default_registry()
        self.scheduler = SyncScheduler()
        self.sync_orchestrator = SyncOrchestrator(
            self.provider_registry,
            self.fetcher,
            self.normalizers,
            self.product_cache,
            self.scheduler,
            sleep=sleep,
        )

    # ================================
    # 🧭 МЕНЮ
    # ================================
    def _setup_menu(self) -> None:
        self.menu_config = MenuConfig.from_mapping(self.config.section("menu"))
        self.menu_generator = MenuGenerator(self.menu_config)
        self.search_service = MenuSearchService()
        logger.debug(
            "🧭 container.menu_ready",
            extra={"max_featured": self.menu_config.max_featured, "max_per_category": self.menu_config.max_per_category},
        )


__all__ = ["Container", "bootstrap_logging"]
