# tests/integration/test_catalog_scenarios.py
import pytest

EASYPAY = "api.easypay.co.za"
FLASH = "api.flash.co.za"


@pytest.mark.asyncio
async def test_two_providers_merge_into_one_menu(make_container, easypay_payload, flash_payload):
    container, stub = make_container({EASYPAY: easypay_payload, FLASH: flash_payload})
    service = container.catalog_service
    await service.start()
    try:
        assert len(service.get_all_products()) == 5
        menu = service.get_current_menu()
        assert menu.version == 3
        assert menu.stats.total_products == 5
        assert [bucket.name for bucket in menu.categories] == ["Bill Payments", "Vouchers"]
        assert menu.category("Bill Payments").available_count == 1
        assert service.health_check()["status"] == "healthy"
        assert sorted(set(stub.hits)) == [EASYPAY, FLASH]
    finally:
        await service.shutdown()


@pytest.mark.asyncio
async def test_featured_product_is_listed_twice_but_searched_once(make_container, flash_payload):
    container, _ = make_container({EASYPAY: {"bills": []}, FLASH: flash_payload})
    service = container.catalog_service
    await service.start()
    try:
        featured_keys = [item.key for item in service.get_featured_products()]
        assert featured_keys[0] == ("flash", "SP-1")
        vouchers = service.get_menu_by_category("Vouchers")
        assert ("flash", "SP-1") in [item.key for item in vouchers.products]

        results = service.search_products("")
        assert len(results) == 3
        assert len({item.key for item in results}) == 3
    finally:
        await service.shutdown()


@pytest.mark.asyncio
async def test_transient_failures_recover_with_one_sleep_per_retry(
    make_container, easypay_payload, flash_payload, recording_sleep
):
    container, stub = make_container({EASYPAY: easypay_payload, FLASH: flash_payload})
    service = container.catalog_service
    await service.start()
    try:
        stub.fail(FLASH, 500, 503)
        result = await service.force_sync_provider("flash")
        assert result.success
        assert result.attempts == 3
        assert recording_sleep.calls == [5, 5]
        assert service.get_provider_status()["flash"].product_count == 3
    finally:
        await service.shutdown()


@pytest.mark.asyncio
async def test_search_skips_expired_vouchers_when_available_only(make_container):
    payload = {"vouchers": [
        {"code": "NF-OLD", "name": "Netflix", "faceValue": 150, "status": "available",
         "expiryDate": "2021-01-01T00:00:00Z"},
        {"code": "NF-NEW", "name": "Netflix Premium", "faceValue": 250, "status": "available",
         "expiryDate": "2099-01-01T00:00:00Z"},
        {"code": "UB-1", "name": "Uber", "faceValue": 100, "status": "available"},
    ]}
    container, _ = make_container({EASYPAY: {"bills": []}, FLASH: payload})
    service = container.catalog_service
    await service.start()
    try:
        everything = service.search_products("netflix")
        assert sorted(item.product.native_id for item in everything) == ["NF-NEW", "NF-OLD"]
        available = service.search_products("netflix", {"availableOnly": True})
        assert [item.product.native_id for item in available] == ["NF-NEW"]
    finally:
        await service.shutdown()


@pytest.mark.asyncio
async def test_category_truncation_keeps_featured_voucher(make_container, flash_payload):
    container, _ = make_container(
        {EASYPAY: {"bills": []}, FLASH: flash_payload},
        **{"menu.max_per_category": 2},
    )
    service = container.catalog_service
    await service.start()
    try:
        vouchers = service.get_menu_by_category("Vouchers")
        assert [item.product.native_id for item in vouchers.products] == ["SP-1", "NF-1"]
        assert len(service.get_featured_products()) == 3
    finally:
        await service.shutdown()
