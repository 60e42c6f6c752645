# 🚀 vas_catalog/__main__.py
"""
🚀 Entry-point движка каталогу: `python -m vas_catalog [--config=path.yaml]`.

🔹 Завантажує конфіг, піднімає логування та метрики, будує DI-контейнер.
🔹 Стартує синхронізацію всіх провайдерів і працює до SIGINT/SIGTERM, потім акуратно зупиняється.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio                                                           # 🔁 Event loop
import logging                                                           # 🧾 Логування запуску
import signal                                                            # 🛑 Сигнали завершення
import sys                                                               # 🧵 CLI-аргументи
from typing import List, Optional

# 🧩 Внутрішні модулі проєкту
from vas_catalog.config.config_service import ConfigService              # ⚙️ Завантаження конфігів
from vas_catalog.config.setup.container import Container, bootstrap_logging  # 🧩 DI-контейнер
from vas_catalog.shared.utils.logger import LOG_NAME                     # 🏷️ Ім'я кореневого логера

logger = logging.getLogger(LOG_NAME)


def _config_path(args: List[str]) -> Optional[str]:
    for arg in args:
        if arg.startswith("--config="):
            return arg.split("=", 1)[1] or None
    return None


async def serve(config: ConfigService) -> None:
    """Працює, доки не прийде сигнал завершення."""
    container = Container(config)
    service = container.catalog_service
    stop_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:                                      # 🪟 Windows: лише KeyboardInterrupt
            logger.debug("ℹ️ main.signal_unsupported", extra={"signal": sig.name})

    await service.start()
    logger.info("🏪 main.serving", extra={"health": service.health_check()["status"]})
    try:
        await stop_event.wait()
    finally:
        logger.info("🛑 main.stopping")
        await service.shutdown()


def run(argv: Optional[List[str]] = None) -> None:
    args = list(sys.argv[1:] if argv is None else argv)
    config = ConfigService(_config_path(args))
    bootstrap_logging(config)
    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        logger.info("👋 main.interrupted")


if __name__ == "__main__":                                               # ▶️ Дозволяє запуск як модуль
    run()
