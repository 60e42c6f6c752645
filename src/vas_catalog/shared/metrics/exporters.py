# 🚀 vas_catalog/shared/metrics/exporters.py
"""
🚀 Легкий bootstrap HTTP-експортера `/metrics` для Prometheus.

🔹 Ідемпотентний: повторний виклик з тим самим портом нічого не робить.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from prometheus_client import start_http_server                         # 📈 Вбудований HTTP-сервер метрик

# 🔠 Системні імпорти
import logging                                                          # 🧾 Логування запуску
import threading                                                        # 🔒 Захист від подвійного старту
from typing import Optional, Set

# 🧩 Внутрішні модулі проєкту
from vas_catalog.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.metrics")

_started_ports: Set[int] = set()                                        # 🧷 Порти, на яких експортер уже живе
_lock = threading.Lock()


def maybe_start_prometheus(port: Optional[int], addr: str = "0.0.0.0") -> bool:
    """
    Запускає експортер, якщо порт задано і його ще не піднято.

    Returns:
        bool: True, якщо саме цей виклик стартував сервер.
    """
    if not port:                                                        # 🚫 Порт не задано → метрики лише in-process
        logger.debug("📉 metrics.exporter_skipped")
        return False
    with _lock:
        if port in _started_ports:
            logger.debug("📈 metrics.exporter_already_running", extra={"port": port})
            return False
        start_http_server(port, addr=addr)
        _started_ports.add(port)
    logger.info("📈 metrics.exporter_started", extra={"port": port, "addr": addr})
    return True


__all__ = ["maybe_start_prometheus"]
