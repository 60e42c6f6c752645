# tests/conftest.py
import sys
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List

import pytest

# Додаємо src в sys.path, щоб працював імпорт "vas_catalog.…" без встановлення пакета
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from vas_catalog.domain.products.entities import Product  # noqa: E402
from vas_catalog.infrastructure.providers.connection import ProviderConnection, ProviderEndpoints  # noqa: E402

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


# ──────────────────────────────────────────────────────────────────────────────
#                          🔧 Тестові фейки
# ──────────────────────────────────────────────────────────────────────────────

class RecordingSleep:
    """Замість реального очікування запамʼятовує запитані паузи."""

    def __init__(self) -> None:
        self.calls: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.calls.append(delay)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def connection_factory():
    def _make(provider_id: str = "easypay", **overrides: Any) -> ProviderConnection:
        params: Dict[str, Any] = {
            "provider_id": provider_id,
            "name": provider_id.title(),
            "base_url": f"https://{provider_id}.test",
            "api_key": f"{provider_id}-key",
            "secret": f"{provider_id}-secret",
            "endpoints": ProviderEndpoints(products="/api/v1/products"),
            "categories": frozenset(),
            "sync_interval_sec": 30,
            "timeout_sec": 10,
            "max_retries": 3,
            "retry_delay_sec": 5,
        }
        params.update(overrides)
        return ProviderConnection(**params)

    return _make


@pytest.fixture
def product_factory():
    counter = {"n": 0}

    def _make(**overrides: Any) -> Product:
        counter["n"] += 1
        params: Dict[str, Any] = {
            "provider_id": "flash",
            "native_id": f"p{counter['n']}",
            "name": f"Product {counter['n']}",
            "category": "Vouchers",
            "price": Decimal("10"),
            "provider_name": "Flash",
        }
        params.update(overrides)
        return Product(**params)

    return _make


# ──────────────────────────────────────────────────────────────────────────────
#                          📦 Сирі відповіді провайдерів
# ──────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def easypay_payload() -> Dict[str, Any]:
    return {
        "bills": [
            {
                "billNumber": "B-100",
                "merchantName": "City Power",
                "amount": "250.00",
                "status": "active",
                "accountNumber": "ACC-1",
                "merchantCode": "CP",
            },
            {
                "billNumber": "B-101",
                "merchantName": "Telkom",
                "amount": 99,
                "status": "suspended",
                "accountNumber": "ACC-2",
                "merchantCode": "TK",
            },
        ]
    }


@pytest.fixture
def flash_payload() -> Dict[str, Any]:
    return {
        "vouchers": [
            {"code": "NF-1", "name": "Netflix", "faceValue": 150, "status": "available",
             "description": "Netflix gift card", "expiryDate": "2030-01-01T00:00:00Z", "redemptionType": "online"},
            {"code": "SP-1", "name": "Spotify", "faceValue": 60, "status": "available",
             "description": "Spotify premium", "redemptionType": "online", "featured": True},
            {"code": "UB-1", "name": "Uber", "faceValue": 100, "status": "available",
             "description": "Uber ride credit", "redemptionType": "online"},
        ]
    }
