# 🔄 vas_catalog/infrastructure/sync/__init__.py
"""
🔄 Синхронізація каталогів: політика ретраїв, планувальник, оркестратор.
"""

from __future__ import annotations

from .orchestrator import SyncOrchestrator, SyncResult, SyncStats
from .retry_policy import RetryPolicy, retry_async
from .scheduler import SyncScheduler

__all__ = [
    "SyncOrchestrator",
    "SyncResult",
    "SyncStats",
    "RetryPolicy",
    "retry_async",
    "SyncScheduler",
]
