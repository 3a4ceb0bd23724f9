#
# Copyright (C) 2026 bluen Developers — LGPL-3.0-or-later
#
"""
Exceptions raised by bluen.

Failures of the remote calls themselves are not wrapped: they
surface as :class:`dbus_fast.DBusError` from the bus client.
"""


class BluenError(Exception):
    """Base class for all bluen errors."""


class ProtocolError(BluenError):
    """The remote object does not look the way BlueZ promises it does."""


class MissingPropertyError(ProtocolError):
    """A required property was absent from an initial snapshot."""

    def __init__(self, interface: str, name: str, path: str = None):
        self.interface = interface
        self.name = name
        self.path = path
        where = " at %s" % path if path else ""
        super().__init__("%s%s is missing required property %s" % (interface, where, name))


class UnsupportedInterfaceError(ProtocolError):
    """The remote object does not expose an interface we need."""

    def __init__(self, interface: str, path: str):
        self.interface = interface
        self.path = path
        super().__init__("%s does not support %s" % (path, interface))


class AdapterNotFoundError(BluenError):
    """No adapter matched a lookup."""
