# 🔌 vas_catalog/infrastructure/providers/__init__.py
"""
🔌 Підключення до провайдерів: реєстр, підпис запитів та HTTP-фетчер.
"""

from __future__ import annotations

from .connection import ProviderConnection, ProviderEndpoints
from .fetcher import ProviderFetcher
from .registry import ProviderRegistry
from .signer import RequestSigner

__all__ = [
    "ProviderConnection",
    "ProviderEndpoints",
    "ProviderFetcher",
    "ProviderRegistry",
    "RequestSigner",
]
