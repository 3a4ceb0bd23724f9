#
# Copyright (C) 2026 bluen Developers — LGPL-3.0-or-later
#
"""
In-memory stand-in for the BluezBus remote handle
"""
from __future__ import annotations

from dbus_fast import Variant


HCI0 = "/org/bluez/hci0"
HCI1 = "/org/bluez/hci1"
DEV_A = HCI0 + "/dev_AA_BB_CC_DD_EE_01"
DEV_B = HCI0 + "/dev_AA_BB_CC_DD_EE_02"
DEV_X = HCI1 + "/dev_AA_BB_CC_DD_EE_03"


# ─────────────────────────────────────────────────────────────────────────────
# In-memory remote handle
# ─────────────────────────────────────────────────────────────────────────────


class FakeSubscription:
    def __init__(self, bus, path, handler):
        self._bus = bus
        self.path = path
        self.handler = handler
        self.active = True

    async def close(self):
        if self.active:
            self.active = False
            self._bus.subscriptions.remove(self)


class FakeBus:
    """
    Stands in for BluezBus. The object graph is a plain dict of
    path -> interface -> property -> Variant.
    """

    def __init__(self, objects=None):
        self.objects = objects if objects is not None else {}
        self.subscriptions = []
        self.queries = 0
        self.calls = []
        self.set_calls = []
        self.fail_with = None

    def _maybe_fail(self):
        if self.fail_with is not None:
            raise self.fail_with

    async def get_managed_objects(self):
        self.queries += 1
        self._maybe_fail()
        return self.objects

    async def get_property(self, path, interface, name):
        self._maybe_fail()
        return self.objects[path][interface][name]

    async def get_all_properties(self, path, interface):
        self._maybe_fail()
        return dict(self.objects[path][interface])

    async def set_property(self, path, interface, name, value):
        self.set_calls.append((path, interface, name, value))
        self._maybe_fail()

    async def call_method(self, path, interface, member, signature="", body=None):
        self.calls.append((path, interface, member, signature, body or []))
        self._maybe_fail()
        return []

    async def subscribe_properties_changed(self, path, handler):
        subscription = FakeSubscription(self, path, handler)
        self.subscriptions.append(subscription)
        return subscription

    def emit(self, path, interface, changed, invalidated=()):
        """Deliver a PropertiesChanged notification to every listener on path."""
        for subscription in list(self.subscriptions):
            if subscription.path == path and subscription.active:
                subscription.handler(interface, changed, list(invalidated))

    def listeners(self, path):
        return [s for s in self.subscriptions if s.path == path]


# ─────────────────────────────────────────────────────────────────────────────
# Property bags
# ─────────────────────────────────────────────────────────────────────────────


def make_adapter_props(address="00:1A:7D:DA:71:13", name="hci0", **overrides):
    props = {
        "Address": Variant("s", address),
        "Name": Variant("s", name),
        "Alias": Variant("s", "workstation"),
        "Class": Variant("u", 0x7C010C),
        "Powered": Variant("b", False),
        "Discoverable": Variant("b", False),
        "Pairable": Variant("b", True),
        "PairableTimeout": Variant("u", 0),
        "DiscoverableTimeout": Variant("u", 180),
        "Discovering": Variant("b", False),
        "UUIDs": Variant("as", ["0000110e-0000-1000-8000-00805f9b34fb"]),
        "Modalias": Variant("s", "usb:v1D6Bp0246d0540"),
    }
    props.update(overrides)
    return props


def make_device_props(adapter=HCI0, **overrides):
    props = {
        "Address": Variant("s", "AA:BB:CC:DD:EE:01"),
        "Name": Variant("s", "Headphones"),
        "Alias": Variant("s", "Headphones"),
        "Paired": Variant("b", True),
        "Connected": Variant("b", False),
        "Trusted": Variant("b", False),
        "Blocked": Variant("b", False),
        "Adapter": Variant("o", adapter),
        "LegacyPairing": Variant("b", False),
        "RSSI": Variant("n", -60),
        "UUIDs": Variant("as", ["0000110b-0000-1000-8000-00805f9b34fb"]),
    }
    props.update(overrides)
    return props


