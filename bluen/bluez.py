#
# Copyright (C) 2026 bluen Developers — LGPL-3.0-or-later
#
"""
Entry point for enumerating BlueZ objects
"""

from .adapter import Adapter
from .bus import BluezBus
from .config import BluenConfig
from .const import ADAPTER_INTERFACE, BLUEZ_ROOT_PATH, DEVICE_INTERFACE
from .device import Device
from .errors import AdapterNotFoundError
from .log import Log


def select_interface(objects: dict, interface: str, prefix: str = None) -> list:
    """
    Pick the property bags of one interface out of a managed object set

    :param objects: Result of GetManagedObjects
    :param interface: Interface to select
    :param prefix: If given, only paths below this object path are kept

    :return: list of (path, properties) in query order
    """
    if prefix is not None:
        prefix = prefix.rstrip("/") + "/"

    return [
        (path, interfaces[interface])
        for path, interfaces in objects.items()
        if (prefix is None or path.startswith(prefix)) and interface in interfaces
    ]


class Bluez:
    """
    Main interface to interact with BlueZ.

    Each query performs a single GetManagedObjects round-trip and
    builds fresh entities from the result. Entities are not cached,
    so asking twice yields two independent mirrors.
    """

    def __init__(self, bus: BluezBus):
        self._bus = bus
        self._logger = Log.get("bluen.bluez")

    @classmethod
    async def connect(cls, config: BluenConfig = None) -> "Bluez":
        """
        Connect to BlueZ on the configured bus

        :param config: Settings to use, loaded from disk if omitted
        """
        if config is None:
            config = BluenConfig.load()
        config.apply_logging()

        bus = await BluezBus.connect(config.bus_type, config.service)
        return cls(bus)

    @property
    def bus(self) -> BluezBus:
        return self._bus

    def close(self):
        """Disconnect from the bus."""
        self._bus.disconnect()

    async def get_adapters(self) -> list:
        """
        Retrieve all available adapters.
        """
        objects = await self._bus.get_managed_objects()
        adapters = []
        for path, properties in select_interface(objects, ADAPTER_INTERFACE):
            adapters.append(await Adapter.create(self._bus, path, properties))

        self._logger.debug("Found %d adapter(s)", len(adapters))
        return adapters

    async def get_adapter(self, name: str = None) -> Adapter:
        """
        Retrieve one adapter

        :param name: Adapter name ("hci0") or object path; the first
                     adapter found if omitted

        :raises AdapterNotFoundError: if there is no such adapter
        """
        objects = await self._bus.get_managed_objects()
        candidates = select_interface(objects, ADAPTER_INTERFACE)

        if name is not None:
            path = name if name.startswith("/") else "%s/%s" % (BLUEZ_ROOT_PATH, name)
            candidates = [c for c in candidates if c[0] == path]

        if not candidates:
            raise AdapterNotFoundError("No adapter found" if name is None else "No adapter named %s" % name)

        path, properties = candidates[0]
        return await Adapter.create(self._bus, path, properties)

    async def get_devices(self, adapter: Adapter) -> list:
        """
        Retrieve the devices which belong to an adapter

        :param adapter: The owning adapter
        """
        objects = await self._bus.get_managed_objects()
        devices = []
        for path, properties in select_interface(objects, DEVICE_INTERFACE, prefix=adapter.path):
            devices.append(await Device.create(self._bus, path, properties))

        self._logger.debug("Found %d device(s) on %s", len(devices), adapter.path)
        return devices
