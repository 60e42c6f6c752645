# tests/shared/test_metadata_freeze.py
from decimal import Decimal
from types import MappingProxyType

import pytest

from vas_catalog.shared.utils.immutables import freeze, is_frozen_mapping, thaw


def test_freeze_nested_vendor_metadata():
    raw = {"voucher": {"codes": ["A", "B"], "tags": {"x"}}, "amount": Decimal("1.5"), "note": None}
    frozen = freeze(raw)
    assert is_frozen_mapping(frozen)
    assert isinstance(frozen["voucher"], MappingProxyType)
    assert frozen["voucher"]["codes"] == ("A", "B")
    assert frozen["voucher"]["tags"] == frozenset({"x"})
    assert frozen["amount"] == Decimal("1.5")
    with pytest.raises(TypeError):
        frozen["voucher"]["codes"] = ()  # type: ignore[index]


def test_thaw_restores_json_friendly_shapes():
    frozen = freeze({"codes": ("B", "A"), "set": frozenset({"b", "a"}), "n": 1})
    assert thaw(frozen) == {"codes": ["B", "A"], "set": ["a", "b"], "n": 1}


def test_freeze_does_not_alias_source():
    raw = {"codes": ["A"]}
    frozen = freeze(raw)
    raw["codes"].append("B")
    assert frozen["codes"] == ("A",)
