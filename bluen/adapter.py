#
# Copyright (C) 2026 bluen Developers — LGPL-3.0-or-later
#
"""
Bluetooth adapters (org.bluez.Adapter1)
"""

from traitlets import Bool, List, Unicode

from dbus_fast import Variant

from .bus import BluezBus
from .const import ADAPTER_INTERFACE
from .entity import BusEntity
from .errors import UnsupportedInterfaceError
from .traits import UInt32

DISCOVERY_TRANSPORTS = ("auto", "bredr", "le")


class Adapter(BusEntity):
    """
    A local Bluetooth controller.

    alias, powered, discoverable, pairable and both timeouts may be
    assigned; the new value is visible immediately and written to
    the adapter in the background.
    """

    INTERFACE = ADAPTER_INTERFACE

    address = Unicode(read_only=True).tag(bus_name="Address", signature="s")
    name = Unicode(read_only=True).tag(bus_name="Name", signature="s")
    alias = Unicode().tag(bus_name="Alias", signature="s", writable=True)
    device_class = UInt32(read_only=True).tag(bus_name="Class", signature="u")
    powered = Bool().tag(bus_name="Powered", signature="b", writable=True)
    discoverable = Bool().tag(bus_name="Discoverable", signature="b", writable=True)
    pairable = Bool().tag(bus_name="Pairable", signature="b", writable=True)
    # 0 disables the timeout
    pairable_timeout = UInt32().tag(bus_name="PairableTimeout", signature="u", writable=True)
    discoverable_timeout = UInt32().tag(bus_name="DiscoverableTimeout", signature="u", writable=True)
    discovering = Bool(read_only=True).tag(bus_name="Discovering", signature="b")
    uuids = List(Unicode(), read_only=True).tag(bus_name="UUIDs", signature="as")
    modalias = Unicode(None, allow_none=True, read_only=True).tag(
        bus_name="Modalias", signature="s", optional=True
    )

    @classmethod
    async def from_path(cls, bus: BluezBus, path: str) -> "Adapter":
        """
        Look up a single adapter by object path.

        :raises UnsupportedInterfaceError: if nothing at path is an adapter
        """
        objects = await bus.get_managed_objects()
        interfaces = objects.get(path, {})
        if ADAPTER_INTERFACE not in interfaces:
            raise UnsupportedInterfaceError(ADAPTER_INTERFACE, path)

        return await cls.create(bus, path, interfaces[ADAPTER_INTERFACE])

    async def _call(self, member: str, signature: str = "", body: list = None):
        return await self.bus.call_method(self.path, ADAPTER_INTERFACE, member, signature, body)

    async def start_discovery(self):
        """Start device discovery."""
        await self._call("StartDiscovery")

    async def stop_discovery(self):
        """Stop device discovery."""
        await self._call("StopDiscovery")

    async def remove_device(self, device):
        """
        Remove a device and its pairing information from the adapter

        :param device: A Device or its object path
        """
        path = getattr(device, "path", device)
        await self._call("RemoveDevice", "o", [path])

    async def set_discovery_filter(
        self, uuids: list = None, rssi: int = None, pathloss: int = None, transport: str = None
    ):
        """
        Restrict discovery results. Calling with no arguments clears
        the filter.

        :param uuids: Service UUIDs to look for
        :param rssi: Minimum RSSI; excludes pathloss
        :param pathloss: Maximum pathloss; excludes rssi
        :param transport: One of auto, bredr or le
        """
        if rssi is not None and pathloss is not None:
            raise ValueError("RSSI and pathloss filters are mutually exclusive")

        dfilter = {}
        if uuids is not None:
            dfilter["UUIDs"] = Variant("as", list(uuids))
        if rssi is not None:
            dfilter["RSSI"] = Variant("n", rssi)
        if pathloss is not None:
            dfilter["Pathloss"] = Variant("q", pathloss)
        if transport is not None:
            if transport not in DISCOVERY_TRANSPORTS:
                raise ValueError("Unknown transport '%s'" % transport)
            dfilter["Transport"] = Variant("s", transport)

        await self._call("SetDiscoveryFilter", "a{sv}", [dfilter])

    async def get_devices(self) -> list:
        """
        Enumerate the devices known to this adapter
        """
        from .device import Device

        return await Device.all_of_adapter(self)
