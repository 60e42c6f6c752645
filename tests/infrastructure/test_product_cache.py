# tests/infrastructure/test_product_cache.py
from datetime import timedelta

from vas_catalog.infrastructure.cache.product_cache import STATUS_ACTIVE, STATUS_INACTIVE, ProductCache


class _Clock:
    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now


def test_replace_swaps_whole_partition(product_factory, fixed_now):
    cache = ProductCache(clock=_Clock(fixed_now))
    cache.replace("flash", [product_factory(), product_factory()])
    first_snapshot = cache.get_by_provider("flash")

    cache.replace("flash", [product_factory(native_id="only")])

    assert [p.native_id for p in cache.get_by_provider("flash")] == ["only"]
    assert len(first_snapshot) == 2


def test_get_all_spans_partitions(product_factory, fixed_now):
    cache = ProductCache(clock=_Clock(fixed_now))
    cache.replace("flash", [product_factory()])
    cache.replace("easypay", [product_factory(provider_id="easypay"), product_factory(provider_id="easypay")])
    assert len(cache.get_all()) == 3
    assert cache.stats() == {"partitions": 2, "products": 3}
    assert len(cache) == 2
    assert "flash" in cache


def test_empty_replace_still_counts_as_sync(fixed_now):
    cache = ProductCache(clock=_Clock(fixed_now))
    cache.replace("flash", [])
    assert cache.get_by_provider("flash") == []
    assert cache.last_sync("flash") == fixed_now


def test_status_reports_active_and_inactive(product_factory, connection_factory, fixed_now):
    clock = _Clock(fixed_now)
    cache = ProductCache(clock=clock)
    cache.replace("flash", [product_factory()])
    clock.now = fixed_now + timedelta(minutes=5)
    cache.replace("flash", [product_factory(), product_factory()])

    statuses = cache.get_status([connection_factory("flash", name="Flash"), connection_factory("easypay")])

    assert statuses["flash"].status == STATUS_ACTIVE
    assert statuses["flash"].product_count == 2
    assert statuses["flash"].to_dict() == {
        "name": "Flash",
        "lastSync": (fixed_now + timedelta(minutes=5)).isoformat(),
        "productCount": 2,
        "status": "active",
    }
    assert statuses["easypay"].status == STATUS_INACTIVE
    assert statuses["easypay"].last_sync is None


def test_unknown_provider_reads_empty_and_clear(product_factory):
    cache = ProductCache()
    assert cache.get_by_provider("nope") == []
    assert cache.partition("nope") is None
    cache.replace("flash", [product_factory()])
    cache.clear()
    assert cache.get_all() == []
