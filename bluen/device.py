#
# Copyright (C) 2026 bluen Developers — LGPL-3.0-or-later
#
"""
Remote Bluetooth devices (org.bluez.Device1)
"""

import asyncio

from traitlets import Bool, Dict, List, Unicode

from .adapter import Adapter
from .bus import BluezBus
from .codec import BusField
from .const import DEVICE_INTERFACE
from .entity import BusEntity
from .traits import Int16, ObjectPath, UInt16, UInt32


class Device(BusEntity):
    """
    A remote Bluetooth peer seen by one adapter.

    The owning adapter is referenced, not owned: the device keeps its
    object path in adapter_path and resolves a live Adapter in the
    background. Until that finishes, ``adapter`` is None; use
    ``await device.get_adapter()`` to wait for it.
    """

    INTERFACE = DEVICE_INTERFACE

    paired = Bool(read_only=True).tag(bus_name="Paired", signature="b")
    connected = Bool(read_only=True).tag(bus_name="Connected", signature="b")
    trusted = Bool().tag(bus_name="Trusted", signature="b", writable=True)
    blocked = Bool().tag(bus_name="Blocked", signature="b", writable=True)
    alias = Unicode().tag(bus_name="Alias", signature="s", writable=True)
    adapter_path = ObjectPath(read_only=True).tag(bus_name="Adapter", signature="o")
    legacy_pairing = Bool(read_only=True).tag(bus_name="LegacyPairing", signature="b")

    address = Unicode(None, allow_none=True, read_only=True).tag(
        bus_name="Address", signature="s", optional=True
    )
    name = Unicode(None, allow_none=True, read_only=True).tag(bus_name="Name", signature="s", optional=True)
    icon = Unicode(None, allow_none=True, read_only=True).tag(bus_name="Icon", signature="s", optional=True)
    device_class = UInt32(None, allow_none=True, read_only=True).tag(
        bus_name="Class", signature="u", optional=True
    )
    appearance = UInt16(None, allow_none=True, read_only=True).tag(
        bus_name="Appearance", signature="q", optional=True
    )
    uuids = List(Unicode(), default_value=None, allow_none=True, read_only=True).tag(
        bus_name="UUIDs", signature="as", optional=True
    )
    modalias = Unicode(None, allow_none=True, read_only=True).tag(
        bus_name="Modalias", signature="s", optional=True
    )
    rssi = Int16(None, allow_none=True, read_only=True).tag(bus_name="RSSI", signature="n", optional=True)
    tx_power = Int16(None, allow_none=True, read_only=True).tag(
        bus_name="TxPower", signature="n", optional=True
    )
    # company id -> payload
    manufacturer_data = Dict(default_value=None, allow_none=True, read_only=True).tag(
        bus_name="ManufacturerData", signature="a{qv}", optional=True
    )
    # service uuid -> payload
    service_data = Dict(default_value=None, allow_none=True, read_only=True).tag(
        bus_name="ServiceData", signature="a{sv}", optional=True
    )
    gatt_services = List(ObjectPath(), default_value=None, allow_none=True, read_only=True).tag(
        bus_name="GattServices", signature="ao", optional=True
    )

    def __init__(self, bus: BluezBus, path: str, values: dict):
        super().__init__(bus, path, values)
        self._adapter = None
        self._adapter_task = None

    @classmethod
    async def all_of_adapter(cls, adapter: Adapter, bus: BluezBus = None) -> list:
        """
        Enumerate the devices which belong to an adapter

        :param adapter: The owning adapter
        :param bus: Remote handle to use, defaults to the adapter's
        """
        from .bluez import Bluez

        return await Bluez(bus or adapter.bus).get_devices(adapter)

    @property
    def adapter(self) -> Adapter:
        """
        The owning adapter, or None while it is being resolved
        """
        return self._adapter

    async def get_adapter(self) -> Adapter:
        """
        Wait for the owning adapter to be resolved and return it
        """
        while self._adapter is None:
            if self._adapter_task is None or self._adapter_task.done():
                self._resolve_adapter()
            task = self._adapter_task
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                # superseded by a newer resolution
                if task is self._adapter_task:
                    raise

        return self._adapter

    def _resolve_adapter(self):
        if self._adapter_task is not None and not self._adapter_task.done():
            self._adapter_task.cancel()

        self._logger.debug("Resolving adapter %s for %s", self.adapter_path, self.path)
        self._adapter_task = self._spawn(self._load_adapter(self.adapter_path))

    async def _load_adapter(self, path: str):
        adapter = await Adapter.from_path(self.bus, path)
        if path != self.adapter_path:
            await adapter.close()
            return

        previous, self._adapter = self._adapter, adapter
        if previous is not None:
            await previous.close()

    def _field_updated(self, field: BusField, old):
        if field.attr == "adapter_path" and old != self.adapter_path:
            stale, self._adapter = self._adapter, None
            if stale is not None:
                self._spawn(stale.close())
            if self.subscription is not None:
                self._resolve_adapter()

    async def listen(self):
        await super().listen()
        if self._adapter is None and self._adapter_task is None:
            self._resolve_adapter()

    async def close(self):
        await super().close()
        self._adapter_task = None
        if self._adapter is not None:
            adapter, self._adapter = self._adapter, None
            await adapter.close()

    async def _call(self, member: str, signature: str = "", body: list = None):
        return await self.bus.call_method(self.path, DEVICE_INTERFACE, member, signature, body)

    async def connect(self):
        """Connect all auto-connectable profiles."""
        await self._call("Connect")

    async def disconnect(self):
        """Disconnect all connected profiles."""
        await self._call("Disconnect")

    async def connect_profile(self, uuid: str):
        """Connect a single profile by UUID."""
        await self._call("ConnectProfile", "s", [uuid])

    async def disconnect_profile(self, uuid: str):
        """Disconnect a single profile by UUID."""
        await self._call("DisconnectProfile", "s", [uuid])

    async def pair(self):
        """Start pairing with the device."""
        await self._call("Pair")

    async def cancel_pairing(self):
        """Cancel a pairing operation started with pair()."""
        await self._call("CancelPairing")

    async def get_battery(self):
        """
        Battery state of this device

        :raises UnsupportedInterfaceError: if the device reports no battery
        """
        from .battery import Battery

        return await Battery.of_device(self)

