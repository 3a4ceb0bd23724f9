#
# Copyright (C) 2026 bluen Developers — LGPL-3.0-or-later
#
"""Tests for the property codec."""

from types import SimpleNamespace

import pytest
from dbus_fast import Variant

from bluen.codec import BusField, decode_properties, unwrap, wrap
from bluen.errors import MissingPropertyError, ProtocolError

FIELDS = [
    BusField("percentage", "Percentage", "y"),
    BusField("source", "Source", "s", optional=True),
]


class TestUnwrap:
    def test_scalar_variant(self):
        assert unwrap(Variant("b", True)) is True

    def test_plain_value_passes_through(self):
        assert unwrap(42) == 42

    def test_nested_variants_in_dict(self):
        value = Variant("a{qv}", {76: Variant("ay", b"\x01\x02")})
        assert unwrap(value) == {76: b"\x01\x02"}

    def test_list_of_variants(self):
        assert unwrap([Variant("s", "a"), Variant("s", "b")]) == ["a", "b"]

    def test_variant_look_alike(self):
        assert unwrap(SimpleNamespace(value="x", signature="s")) == "x"


class TestDecode:
    def test_all_present(self):
        values = decode_properties(
            FIELDS, {"Percentage": Variant("y", 80), "Source": Variant("s", "HFP 1.7")}, "org.bluez.Battery1"
        )
        assert values == {"percentage": 80, "source": "HFP 1.7"}

    def test_optional_defaults_to_none(self):
        values = decode_properties(FIELDS, {"Percentage": Variant("y", 80)}, "org.bluez.Battery1")
        assert values == {"percentage": 80, "source": None}

    def test_unknown_keys_ignored(self):
        values = decode_properties(
            FIELDS, {"Percentage": Variant("y", 1), "Foo": Variant("s", "bar")}, "org.bluez.Battery1"
        )
        assert "Foo" not in values and "foo" not in values

    def test_missing_required(self):
        with pytest.raises(MissingPropertyError) as exc:
            decode_properties(FIELDS, {"Source": Variant("s", "x")}, "org.bluez.Battery1", "/org/bluez/hci0/dev_X")

        assert isinstance(exc.value, ProtocolError)
        assert exc.value.name == "Percentage"
        assert exc.value.interface == "org.bluez.Battery1"
        assert exc.value.path == "/org/bluez/hci0/dev_X"
        assert "Percentage" in str(exc.value)


class TestWrap:
    def test_uses_declared_signature(self):
        field = BusField("pairable_timeout", "PairableTimeout", "u", writable=True)
        assert wrap(field, 30) == Variant("u", 30)

    def test_variant_is_kept(self):
        field = BusField("alias", "Alias", "s", writable=True)
        value = Variant("s", "x")
        assert wrap(field, value) is value
