# tests/integration/conftest.py
from typing import Any, Callable, Dict, List

import httpx
import pytest

from vas_catalog.config.config_service import ConfigService
from vas_catalog.config.setup.container import Container


class VendorStub:
    """Маршрутизує запити MockTransport за хостом провайдера."""

    def __init__(self, routes: Dict[str, Any]):
        self.routes = routes
        self.failures: Dict[str, List[int]] = {}
        self.hits: List[str] = []

    def fail(self, host: str, *statuses: int) -> None:
        self.failures.setdefault(host, []).extend(statuses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        host = request.url.host
        self.hits.append(host)
        pending = self.failures.get(host)
        if pending:
            return httpx.Response(pending.pop(0), text="vendor error")
        if host not in self.routes:
            return httpx.Response(404, text="unknown vendor")
        return httpx.Response(200, json=self.routes[host])


@pytest.fixture
def make_container(recording_sleep) -> Callable[..., Container]:
    def _make(routes: Dict[str, Any], **overrides: Any):
        settings = {
            "providers.dtmercury.enabled": False,
            "providers.mobilemart.enabled": False,
            "logging.file": False,
        }
        settings.update(overrides)
        config = ConfigService(load_env=False, environ={}, overrides=settings)
        stub = VendorStub(routes)
        container = Container(
            config,
            transport=httpx.MockTransport(stub),
            sleep=recording_sleep,
            start_metrics=False,
        )
        return container, stub

    return _make
