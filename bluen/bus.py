#
# Copyright (C) 2026 bluen Developers — LGPL-3.0-or-later
#

# pylint: disable=invalid-name

"""
Remote handle

A thin wrapper around a connected dbus-fast MessageBus which speaks
just enough of ObjectManager and Properties for the entity layer.
Calls are made with raw messages so no introspection round-trip is
needed. Error replies are raised as dbus_fast.DBusError.
"""

from collections.abc import Callable

from dbus_fast import BusType, DBusError, Message, MessageType, Variant
from dbus_fast.aio import MessageBus

from .const import (
    BLUEZ_SERVICE,
    DBUS_INTERFACE,
    DBUS_PATH,
    DBUS_SERVICE,
    OBJECT_MANAGER_INTERFACE,
    OBJECT_MANAGER_PATH,
    PROPERTIES_CHANGED,
    PROPERTIES_INTERFACE,
)
from .log import Log


PropertiesChangedHandler = Callable[[str, dict, list], None]


def properties_changed_rule(service: str, path: str) -> str:
    """
    Build the match rule which routes PropertiesChanged for one path
    """
    return (
        "type='signal',sender='%s',interface='%s',member='%s',path='%s'"
        % (service, PROPERTIES_INTERFACE, PROPERTIES_CHANGED, path)
    )


class Subscription:
    """
    A live PropertiesChanged listener for a single object path.

    Closing the subscription removes the message handler and the
    match rule. Closing twice is a no-op.
    """

    def __init__(self, bus: "BluezBus", path: str, handler: PropertiesChangedHandler):
        self._bus = bus
        self._path = path
        self._handler = handler
        self._rule = properties_changed_rule(bus.service, path)
        self._active = False

    @property
    def path(self) -> str:
        return self._path

    @property
    def active(self) -> bool:
        return self._active

    def _on_message(self, msg: Message):
        if msg.message_type != MessageType.SIGNAL:
            return
        if msg.interface != PROPERTIES_INTERFACE or msg.member != PROPERTIES_CHANGED:
            return
        if msg.path != self._path:
            return

        interface, changed, invalidated = msg.body
        self._handler(interface, changed, invalidated)

    async def open(self):
        await self._bus.add_match(self._rule)
        self._bus.message_bus.add_message_handler(self._on_message)
        self._active = True
        self._bus.logger.debug("Subscribed to %s on %s", PROPERTIES_CHANGED, self._path)

    async def close(self):
        if not self._active:
            return

        self._active = False
        self._bus.message_bus.remove_message_handler(self._on_message)
        if self._bus.connected:
            await self._bus.remove_match(self._rule)
        self._bus.logger.debug("Released subscription on %s", self._path)


class BluezBus:
    """
    Connection to the BlueZ service.

    Entities share one handle and never own it.
    """

    def __init__(self, message_bus: MessageBus, service: str = BLUEZ_SERVICE):
        self._bus = message_bus
        self._service = service
        self._logger = Log.get("bluen.bus")

    @classmethod
    async def connect(cls, bus_type: BusType = BusType.SYSTEM, service: str = BLUEZ_SERVICE) -> "BluezBus":
        """
        Connect to the given bus

        :param bus_type: SYSTEM for a real BlueZ daemon
        :param service: Well-known name of the service
        """
        message_bus = await MessageBus(bus_type=bus_type).connect()
        return cls(message_bus, service=service)

    @property
    def message_bus(self) -> MessageBus:
        return self._bus

    @property
    def service(self) -> str:
        return self._service

    @property
    def logger(self):
        return self._logger

    @property
    def connected(self) -> bool:
        return bool(getattr(self._bus, "connected", False))

    def disconnect(self):
        """Disconnect from the bus."""
        self._bus.disconnect()

    async def _call(self, msg: Message) -> list:
        reply = await self._bus.call(msg)
        if reply is None:
            return []

        if reply.message_type == MessageType.ERROR:
            text = reply.body[0] if reply.body else ""
            raise DBusError(reply.error_name, text, reply=reply)

        return reply.body

    async def call_method(
        self, path: str, interface: str, member: str, signature: str = "", body: list = None
    ) -> list:
        """
        Invoke a method on the service

        :return: The reply body
        """
        self._logger.debug("Calling %s.%s on %s", interface, member, path)
        return await self._call(
            Message(
                destination=self._service,
                path=path,
                interface=interface,
                member=member,
                signature=signature,
                body=body or [],
            )
        )

    async def get_managed_objects(self) -> dict:
        """
        Fetch the whole object graph

        :return: dict of path -> interface -> property -> Variant
        """
        body = await self.call_method(OBJECT_MANAGER_PATH, OBJECT_MANAGER_INTERFACE, "GetManagedObjects")
        return body[0] if body else {}

    async def get_property(self, path: str, interface: str, name: str) -> Variant:
        body = await self.call_method(path, PROPERTIES_INTERFACE, "Get", "ss", [interface, name])
        return body[0]

    async def get_all_properties(self, path: str, interface: str) -> dict:
        body = await self.call_method(path, PROPERTIES_INTERFACE, "GetAll", "s", [interface])
        return body[0] if body else {}

    async def set_property(self, path: str, interface: str, name: str, value: Variant):
        await self.call_method(path, PROPERTIES_INTERFACE, "Set", "ssv", [interface, name, value])

    async def add_match(self, rule: str):
        await self._call(
            Message(
                destination=DBUS_SERVICE,
                path=DBUS_PATH,
                interface=DBUS_INTERFACE,
                member="AddMatch",
                signature="s",
                body=[rule],
            )
        )

    async def remove_match(self, rule: str):
        await self._call(
            Message(
                destination=DBUS_SERVICE,
                path=DBUS_PATH,
                interface=DBUS_INTERFACE,
                member="RemoveMatch",
                signature="s",
                body=[rule],
            )
        )

    async def subscribe_properties_changed(self, path: str, handler: PropertiesChangedHandler) -> Subscription:
        """
        Listen for property changes on one object

        :param path: Object path to watch
        :param handler: Called as handler(interface, changed, invalidated)
        :return: The open Subscription
        """
        subscription = Subscription(self, path, handler)
        await subscription.open()
        return subscription
