# 🚨 vas_catalog/errors/__init__.py
"""
🚨 Доменні винятки та стратегії їх конвертації.
"""

from .custom_errors import (
    AppError,
    ErrorCode,
    MenuGenerationError,
    ProviderMappingError,
    ProviderNotFoundError,
    ProviderTransportError,
    RetryExhaustedError,
)
from .strategies import HttpxErrorStrategy, IErrorHandlingStrategy, convert_error

__all__ = [
    "AppError",
    "ErrorCode",
    "MenuGenerationError",
    "ProviderMappingError",
    "ProviderNotFoundError",
    "ProviderTransportError",
    "RetryExhaustedError",
    "HttpxErrorStrategy",
    "IErrorHandlingStrategy",
    "convert_error",
]
