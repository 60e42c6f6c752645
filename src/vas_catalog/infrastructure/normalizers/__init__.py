# 💧 vas_catalog/infrastructure/normalizers/__init__.py
"""
💧 Адаптери відповідей провайдерів → канонічні `Product`.
"""

from __future__ import annotations

from .base import BaseNormalizer
from .dtmercury import DtMercuryNormalizer
from .easypay import EasyPayNormalizer
from .flash import FlashNormalizer
from .generic import GenericNormalizer
from .mobilemart import MobileMartNormalizer
from .registry import BUILTIN_ADAPTERS, NormalizerRegistry, default_registry

__all__ = [
    "BaseNormalizer",
    "DtMercuryNormalizer",
    "EasyPayNormalizer",
    "FlashNormalizer",
    "GenericNormalizer",
    "MobileMartNormalizer",
    "BUILTIN_ADAPTERS",
    "NormalizerRegistry",
    "default_registry",
]
