#
# Copyright (C) 2026 bluen Developers — LGPL-3.0-or-later
#
"""
Battery state of a device (org.bluez.Battery1)
"""

from traitlets import Unicode

from .const import BATTERY_INTERFACE
from .entity import BusEntity
from .errors import UnsupportedInterfaceError
from .traits import Byte


class Battery(BusEntity):
    """
    Charge state reported by a device. Only devices which expose
    the battery interface have one.
    """

    INTERFACE = BATTERY_INTERFACE

    percentage = Byte(read_only=True, max=100).tag(bus_name="Percentage", signature="y")
    # where the reading comes from, e.g. "HFP 1.7"
    source = Unicode(None, allow_none=True, read_only=True).tag(bus_name="Source", signature="s", optional=True)

    @classmethod
    async def of_device(cls, device) -> "Battery":
        """
        Get the battery interface of a device

        :param device: The Device whose battery to mirror
        :raises UnsupportedInterfaceError: if the device has no battery
        """
        objects = await device.bus.get_managed_objects()
        if BATTERY_INTERFACE not in objects.get(device.path, {}):
            raise UnsupportedInterfaceError(BATTERY_INTERFACE, device.path)

        properties = await device.bus.get_all_properties(device.path, BATTERY_INTERFACE)
        return await cls.create(device.bus, device.path, properties)
