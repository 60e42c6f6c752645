# tests/integration/test_catalog_service_api.py
import pytest

from vas_catalog.errors.custom_errors import MenuGenerationError, ProviderNotFoundError

EASYPAY = "api.easypay.co.za"
FLASH = "api.flash.co.za"


@pytest.mark.asyncio
async def test_before_start_everything_is_empty(make_container):
    container, _ = make_container({})
    service = container.catalog_service
    assert service.get_current_menu() is None
    assert service.get_all_products() == []
    assert service.get_featured_products() == []
    assert service.search_products("anything") == []
    health = service.health_check()
    assert health["status"] == "degraded"
    assert health["running"] is False
    assert sorted(health["inactiveProviders"]) == ["easypay", "flash"]


@pytest.mark.asyncio
async def test_provider_down_at_startup_degrades_health(make_container, easypay_payload):
    container, _ = make_container({EASYPAY: easypay_payload}, **{"sync.max_retries": 0})
    service = container.catalog_service
    results = await service.start()
    try:
        outcome = {r.provider_id: r.success for r in results}
        assert outcome == {"easypay": True, "flash": False}
        health = service.health_check()
        assert health["status"] == "degraded"
        assert health["inactiveProviders"] == ["flash"]
        assert health["running"] is True
        assert service.get_current_menu() is not None
        stats = service.get_sync_stats()
        assert stats["flash"].failures == 1
    finally:
        await service.shutdown()
    assert service.is_running is False


@pytest.mark.asyncio
async def test_products_by_provider_and_unknown_id(make_container, easypay_payload, flash_payload):
    container, _ = make_container({EASYPAY: easypay_payload, FLASH: flash_payload})
    service = container.catalog_service
    await service.start()
    try:
        assert {p.native_id for p in service.get_products_by_provider("easypay")} == {"B-100", "B-101"}
        with pytest.raises(ProviderNotFoundError):
            service.get_products_by_provider("nope")
        with pytest.raises(ProviderNotFoundError):
            await service.force_sync_provider("nope")
    finally:
        await service.shutdown()


@pytest.mark.asyncio
async def test_stats_and_status_shapes(make_container, easypay_payload, flash_payload):
    container, _ = make_container({EASYPAY: easypay_payload, FLASH: flash_payload})
    service = container.catalog_service
    await service.start()
    try:
        stats = service.get_stats()
        assert stats["totalProducts"] == 5
        assert stats["activeSPs"] == 2
        assert stats["totalSPs"] == 4
        assert stats["cacheSize"] == 2
        assert stats["lastSync"] is not None
        assert stats["menuVersion"] == service.get_current_menu().version

        status = service.get_provider_status()
        assert status["dtmercury"].status == "inactive"
        assert status["flash"].to_dict()["productCount"] == 3

        categories = service.get_categories()
        assert [c["name"] for c in categories] == ["Bill Payments", "Vouchers"]
        menu_stats = service.get_menu_stats()
        assert menu_stats["totalProducts"] == 5
        assert menu_stats["featuredCount"] == 4
    finally:
        await service.shutdown()


@pytest.mark.asyncio
async def test_menu_failure_keeps_stale_menu(make_container, easypay_payload, flash_payload, monkeypatch):
    container, _ = make_container({EASYPAY: easypay_payload, FLASH: flash_payload})
    service = container.catalog_service
    await service.start()
    try:
        stale = service.get_current_menu()

        def broken(products):
            raise MenuGenerationError("boom")

        monkeypatch.setattr(container.menu_generator, "generate", broken)

        result = await service.force_sync_provider("flash")
        assert result.success
        assert service.get_current_menu() is stale

        with pytest.raises(MenuGenerationError):
            service.force_regenerate_menu()
    finally:
        await service.shutdown()


@pytest.mark.asyncio
async def test_force_sync_all_and_regenerate(make_container, easypay_payload, flash_payload):
    container, _ = make_container({EASYPAY: easypay_payload, FLASH: flash_payload})
    service = container.catalog_service
    await service.start()
    try:
        before = service.get_current_menu().version
        results = await service.force_sync_all()
        assert all(r.success for r in results)
        assert service.get_current_menu().version == before + 2
        assert service.force_regenerate_menu().version == before + 3
    finally:
        await service.shutdown()
