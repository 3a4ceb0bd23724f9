# bluen test configuration and shared fixtures
from __future__ import annotations

import pytest
from dbus_fast import Variant

from bluen.const import ADAPTER_INTERFACE, BATTERY_INTERFACE, DEVICE_INTERFACE
from fake_bus import DEV_A, DEV_B, DEV_X, HCI0, HCI1, FakeBus, make_adapter_props, make_device_props


@pytest.fixture
def adapter_props():
    return make_adapter_props()


@pytest.fixture
def device_props():
    return make_device_props()


@pytest.fixture
def battery_props():
    return {"Percentage": Variant("y", 80)}


@pytest.fixture
def managed_objects(adapter_props, device_props, battery_props):
    return {
        "/org/bluez": {"org.bluez.AgentManager1": {}},
        HCI0: {ADAPTER_INTERFACE: adapter_props},
        HCI1: {ADAPTER_INTERFACE: make_adapter_props(address="00:1A:7D:DA:71:14", name="hci1")},
        DEV_A: {DEVICE_INTERFACE: device_props, BATTERY_INTERFACE: battery_props},
        DEV_B: {DEVICE_INTERFACE: make_device_props(Address=Variant("s", "AA:BB:CC:DD:EE:02"))},
        DEV_X: {DEVICE_INTERFACE: make_device_props(adapter=HCI1)},
    }


@pytest.fixture
def fake_bus(managed_objects):
    return FakeBus(managed_objects)
