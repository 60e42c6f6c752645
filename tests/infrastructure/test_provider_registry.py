# tests/infrastructure/test_provider_registry.py
import pytest

from vas_catalog.config.config_service import ConfigService
from vas_catalog.errors.custom_errors import ProviderNotFoundError
from vas_catalog.infrastructure.providers.connection import ProviderConnection
from vas_catalog.infrastructure.providers.registry import ProviderRegistry


def _config(**overrides):
    return ConfigService(load_env=False, environ={}, overrides=overrides)


def test_builtin_config_registers_four_providers():
    registry = ProviderRegistry.from_config(_config())
    assert registry.ids() == ["easypay", "dtmercury", "flash", "mobilemart"]
    flash = registry.get("flash")
    assert flash.products_url == "https://api.flash.co.za/api/v1/vouchers"
    assert flash.sync_interval_sec == 60
    assert flash.timeout_sec == 10
    assert flash.max_retries == 3
    assert flash.adapter == "flash"
    assert "Vouchers" in flash.categories


def test_environment_supplies_credentials():
    config = ConfigService(
        load_env=False,
        environ={"EASYPAY_API_KEY": "ek", "EASYPAY_SECRET": "es", "EASYPAY_API_URL": "https://sandbox.test"},
    )
    easypay = ProviderRegistry.from_config(config).get("easypay")
    assert easypay.has_credentials
    assert easypay.products_url == "https://sandbox.test/api/v1/bills"


def test_provider_values_beat_sync_defaults():
    registry = ProviderRegistry.from_config(
        _config(**{"sync.max_retries": 1, "providers.flash.max_retries": 5})
    )
    assert registry.get("flash").max_retries == 5
    assert registry.get("easypay").max_retries == 1


def test_unknown_provider_raises_but_find_is_soft():
    registry = ProviderRegistry.from_config(_config())
    with pytest.raises(ProviderNotFoundError):
        registry.get("nope")
    assert registry.find("nope") is None
    assert "nope" not in registry
    assert len(registry) == 4


def test_disabled_providers_are_kept_but_not_enabled():
    registry = ProviderRegistry.from_config(_config(**{"providers.dtmercury.enabled": False}))
    assert "dtmercury" in registry
    assert "dtmercury" not in [conn.provider_id for conn in registry.enabled()]


def test_duplicate_ids_rejected(connection_factory):
    with pytest.raises(ValueError):
        ProviderRegistry([connection_factory("flash"), connection_factory("flash")])


@pytest.mark.parametrize(
    "overrides",
    [
        {"sync_interval_sec": 0},
        {"timeout_sec": -1},
        {"max_retries": -1},
        {"provider_id": ""},
    ],
)
def test_connection_validation(connection_factory, overrides):
    with pytest.raises(ValueError):
        connection_factory(**overrides)


def test_connection_from_mapping_defaults():
    conn = ProviderConnection.from_mapping("acme", {"base_url": "https://acme.test/"}, {"timeout_sec": 3})
    assert conn.name == "acme"
    assert conn.timeout_sec == 3
    assert conn.products_url == "https://acme.test/products"
    assert conn.adapter == "acme"
    assert not conn.has_credentials
