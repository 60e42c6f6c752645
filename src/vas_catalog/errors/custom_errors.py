# 🚨 vas_catalog/errors/custom_errors.py
"""
🚨 Ієрархія доменних винятків движка каталогу.

🔹 `AppError` — база з `details` і `to_log_extra()` для structured-логів.
🔹 Транспортні збої (`ProviderTransportError`) ретраяться оркестратором і не виходять за його межі.
🔹 Помилки конфігурації (`ProviderNotFoundError`) і генерації меню (`MenuGenerationError`) падають гучно у викликача.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging														# 🧾 Логування створення помилок
from typing import Dict, Optional									# 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from vas_catalog.shared.utils.logger import LOG_NAME


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.errors")


# ================================
# ⚠️ КОДИ ПОМИЛОК
# ================================
class ErrorCode:
    """⚠️ Категорії помилок для логів та метрик."""

    TRANSPORT = "transport_error"									# 🌐 Мережа / таймаут / не-2xx
    MAPPING = "mapping_error"										# 🧾 Неочікувана форма payload
    CONFIGURATION = "configuration_error"							# ⚙️ Невідомий провайдер
    GENERATION = "generation_error"								# 🧭 Збій побудови меню
    UNKNOWN = "unknown_error"										# ❓ Резервний код


# ================================
# 🧠 БАЗОВИЙ ВИНЯТОК
# ================================
class AppError(Exception):
    """🧠 Базова помилка застосунку."""

    code: str = ErrorCode.UNKNOWN

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message										# 💬 Людинозрозумілий текст
        self.details = details										# 🔍 Технічні подробиці

    def to_log_extra(self) -> Dict[str, object]:
        """📦 Формує словник для `logger.extra`."""
        extra: Dict[str, object] = {"error_code": self.code}
        if self.details:
            extra["details"] = self.details
        return extra


# ================================
# 🌐 ТРАНСПОРТ
# ================================
class ProviderTransportError(AppError):
    """🌐 Мережевий збій, таймаут або не-2xx відповідь провайдера."""

    code = ErrorCode.TRANSPORT

    def __init__(
        self,
        message: str,
        *,
        provider_id: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.provider_id = provider_id								# 🏷️ Який провайдер підвів
        self.url = url												# 🔗 URL запиту
        self.status_code = status_code								# 🔢 HTTP-код, якщо відповідь була
        logger.debug(
            "🌐 ProviderTransportError created",
            extra={"provider": provider_id, "url": url, "status_code": status_code},
        )

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.provider_id:
            extra["provider"] = self.provider_id
        if self.url:
            extra["url"] = self.url
        if self.status_code is not None:
            extra["status_code"] = self.status_code
        return extra


class RetryExhaustedError(AppError):
    """🔁 Усі спроби політики ретраїв вичерпано."""

    code = ErrorCode.TRANSPORT

    def __init__(self, message: str, *, attempts: int, last_error: Optional[BaseException] = None) -> None:
        super().__init__(message, details=str(last_error) if last_error else None)
        self.attempts = attempts										# 🔢 Скільки разів пробували
        self.last_error = last_error									# 🧾 Остання причина

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        extra["attempts"] = self.attempts
        return extra


# ================================
# 🧾 МАПІНГ
# ================================
class ProviderMappingError(AppError):
    """🧾 Запис вендора неможливо привести до канонічного `Product`."""

    code = ErrorCode.MAPPING

    def __init__(self, message: str, *, provider_id: Optional[str] = None, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.provider_id = provider_id
        self.field = field												# 🏷️ Поле, яке зламало мапінг

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.provider_id:
            extra["provider"] = self.provider_id
        if self.field:
            extra["field"] = self.field
        return extra


# ================================
# ⚙️ КОНФІГУРАЦІЯ
# ================================
class ProviderNotFoundError(AppError, LookupError):
    """⚙️ Провайдера немає в реєстрі."""

    code = ErrorCode.CONFIGURATION

    def __init__(self, provider_id: str) -> None:
        super().__init__(f"Unknown provider: {provider_id!r}")
        self.provider_id = provider_id

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        extra["provider"] = self.provider_id
        return extra


# ================================
# 🧭 ГЕНЕРАЦІЯ МЕНЮ
# ================================
class MenuGenerationError(AppError):
    """🧭 Неочікуваний стан під час побудови меню."""

    code = ErrorCode.GENERATION


# ================================
# 📤 ПУБЛІЧНИЙ API
# ================================
__all__ = [
    "ErrorCode",
    "AppError",
    "ProviderTransportError",
    "RetryExhaustedError",
    "ProviderMappingError",
    "ProviderNotFoundError",
    "MenuGenerationError",
]
