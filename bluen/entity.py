#
# Copyright (C) 2026 bluen Developers — LGPL-3.0-or-later
#

# pylint: disable=protected-access

"""
Synchronized remote entities

A BusEntity mirrors the properties of one interface on one object
path. It is built from a property snapshot, then kept current by
PropertiesChanged notifications from the bus. Concrete kinds only
declare an interface name and a set of tagged traits; everything
else lives here.
"""

import asyncio

from traitlets import HasTraits, TraitError
from traitlets.traitlets import MetaHasTraits

from .bus import BluezBus, Subscription
from .codec import BusField, decode_properties, unwrap, wrap
from .log import Log
from .traits import WriteOnceObjectPath, is_trait_writable
from .util import Signal, ensure_future


class BusEntityMeta(MetaHasTraits):
    """
    Builds the static property table for each entity class
    when the class is created.
    """

    def __init__(cls, name, bases, classdict, **kwds):
        super().__init__(name, bases, classdict, **kwds)

        fields = {}
        by_bus_name = {}
        for attr, trait in cls.class_traits(bus_name=lambda v: v is not None).items():
            meta = trait.metadata
            optional = bool(meta.get("optional", False))
            writable = bool(meta.get("writable", False))

            if "signature" not in meta:
                raise TypeError("%s.%s has no wire signature" % (name, attr))
            if optional != bool(trait.allow_none):
                raise TypeError("%s.%s: optional fields must allow None" % (name, attr))
            if writable != is_trait_writable(trait):
                raise TypeError("%s.%s: only writable fields may be assignable" % (name, attr))
            if meta["bus_name"] in by_bus_name:
                raise TypeError("%s: property %s is bound twice" % (name, meta["bus_name"]))

            field = BusField(attr, meta["bus_name"], meta["signature"], optional, writable)
            fields[attr] = field
            by_bus_name[field.bus_name] = field

        cls._fields = fields
        cls._by_bus_name = by_bus_name


class BusEntity(HasTraits, metaclass=BusEntityMeta):
    """
    Base class for local mirrors of remote objects.

    The ``changed`` signal fires once for each notification which
    modified at least one field. Handlers take no arguments and
    should read back whatever fields they care about.
    """

    INTERFACE = None

    path = WriteOnceObjectPath()

    def __init__(self, bus: BluezBus, path: str, values: dict):
        super().__init__()

        self._bus = bus
        self._subscription = None
        self._tasks = set()
        self._writes = set()
        self._logger = Log.get("bluen.%s" % self.__class__.__name__.lower())

        self.changed = Signal()

        self.path = path
        for attr, value in values.items():
            self.set_trait(attr, value)

    @classmethod
    def fields(cls) -> dict:
        """
        Field bindings of this entity kind, keyed by attribute name
        """
        return dict(cls._fields)

    @classmethod
    def from_properties(cls, bus: BluezBus, path: str, properties: dict):
        """
        Build an entity from a property snapshot without subscribing.

        :param bus: The shared remote handle
        :param path: Object path of the remote object
        :param properties: Property bag for this entity's interface

        :raises MissingPropertyError: if a required property is absent
        """
        values = decode_properties(cls._fields.values(), properties, cls.INTERFACE, path)
        return cls(bus, path, values)

    @classmethod
    async def create(cls, bus: BluezBus, path: str, properties: dict):
        """
        Build an entity from a property snapshot and start listening
        for changes.
        """
        entity = cls.from_properties(bus, path, properties)
        await entity.listen()
        return entity

    @property
    def bus(self) -> BluezBus:
        return self._bus

    @property
    def subscription(self) -> Subscription:
        return self._subscription

    @property
    def pending_writes(self) -> tuple:
        """
        Property writes which have not yet been confirmed
        """
        return tuple(self._writes)

    def __setattr__(self, name, value):
        field = self._fields.get(name)
        if field is None or not field.writable:
            super().__setattr__(name, value)
            return

        super().__setattr__(name, value)
        self._track(ensure_future(self._write_property(field, getattr(self, name))), self._writes)

    def __repr__(self):
        return "<%s %s>" % (self.__class__.__name__, self.path)

    async def __aenter__(self):
        if self._subscription is None:
            await self.listen()
        return self

    async def __aexit__(self, *exc):
        await self.close()

    def _track(self, task: asyncio.Future, bucket: set) -> asyncio.Future:
        bucket.add(task)
        task.add_done_callback(bucket.discard)
        return task

    def _spawn(self, coro) -> asyncio.Future:
        return self._track(ensure_future(coro), self._tasks)

    async def _write_property(self, field: BusField, value):
        self._logger.debug("Setting %s.%s = %r on %s", self.INTERFACE, field.bus_name, value, self.path)
        await self._bus.set_property(self.path, self.INTERFACE, field.bus_name, wrap(field, value))

    async def set_property(self, name: str, value):
        """
        Update a writable field and wait for the remote write.

        The local value is updated first and is not rolled back if
        the remote call fails; the failure is raised to the caller.

        :param name: Attribute name of the field
        :param value: The new value
        """
        field = self._fields.get(name)
        if field is None or not field.writable:
            raise TraitError("The '%s' trait of %s is not writable" % (name, self.__class__.__name__))

        self.set_trait(name, value)
        await self._write_property(field, getattr(self, name))

    async def refresh(self):
        """
        Re-read all properties of this interface from the bus and
        apply them as a single change.
        """
        properties = await self._bus.get_all_properties(self.path, self.INTERFACE)
        known = {k: v for k, v in properties.items() if k in self._by_bus_name}
        if self.apply_changes(known):
            self.changed.fire()

    async def listen(self):
        """
        Start mirroring remote changes. Safe to call more than once.
        """
        if self._subscription is not None:
            return

        self._subscription = await self._bus.subscribe_properties_changed(self.path, self._on_properties_changed)

    async def close(self):
        """
        Stop mirroring remote changes and drop background work.
        """
        for task in list(self._tasks):
            task.cancel()

        if self._subscription is not None:
            subscription, self._subscription = self._subscription, None
            await subscription.close()

    def apply_changes(self, changed: dict) -> bool:
        """
        Apply a partial property diff.

        Unknown names are logged and skipped.

        :param changed: Mapping of property name to wrapped value
        :return: True if at least one field was assigned
        """
        applied = False
        for bus_name, wrapped in changed.items():
            field = self._by_bus_name.get(bus_name)
            if field is None:
                self._logger.warning("Unhandled property change on %s: %s", self.path, bus_name)
                continue

            old = getattr(self, field.attr)
            self.set_trait(field.attr, unwrap(wrapped))
            self._field_updated(field, old)
            applied = True

        return applied

    def _field_updated(self, field: BusField, old):
        """
        Hook for subclasses which react to individual field updates

        :param field: The field which was assigned
        :param old: Its value before the assignment
        """

    def _on_properties_changed(self, interface: str, changed: dict, invalidated: list):
        if interface != self.INTERFACE:
            return

        if invalidated:
            self._logger.debug("Invalidated on %s: %s", self.path, ", ".join(invalidated))

        if self.apply_changes(changed):
            self.changed.fire()
