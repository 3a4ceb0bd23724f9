#
# Copyright (C) 2026 bluen Developers — LGPL-3.0-or-later
#

# pylint: disable=protected-access

"""
Trait types for fields mirrored from the bus

Entity fields are plain traitlets, tagged with the metadata that
ties them to a remote property:

    alias = Unicode().tag(bus_name="Alias", signature="s", writable=True)

Fields which are not writable are declared read_only, and
optional fields allow None.
"""

from traitlets import Int, TraitType, Unicode


class WriteOnceMixin:
    """
    Mixin for traits which cannot be changed after an initial
    value has been set.
    """

    write_once = True

    def validate(self, obj, value):
        if self.name not in obj._trait_values or obj._trait_values[self.name] == self.default_value:
            return super().validate(obj, value)

        self.error(obj, value)


class ObjectPath(Unicode):
    """
    A D-Bus object path
    """

    info_text = "a D-Bus object path"

    def validate(self, obj, value):
        value = super().validate(obj, value)
        if value and not value.startswith("/"):
            self.error(obj, value)
        return value


class WriteOnceObjectPath(WriteOnceMixin, ObjectPath):
    """
    Object path which may only be written once
    """


class _BoundedInt(Int):
    """
    Int with bounds fixed by the D-Bus wire type
    """

    _min = 0
    _max = 0

    def __init__(self, default_value=0, **kwargs):
        kwargs.setdefault("min", self._min)
        kwargs.setdefault("max", self._max)
        super().__init__(default_value=default_value, **kwargs)


class Byte(_BoundedInt):
    """Unsigned 8-bit integer (y)"""

    _max = 0xFF


class Int16(_BoundedInt):
    """Signed 16-bit integer (n)"""

    _min = -0x8000
    _max = 0x7FFF


class UInt16(_BoundedInt):
    """Unsigned 16-bit integer (q)"""

    _max = 0xFFFF


class UInt32(_BoundedInt):
    """Unsigned 32-bit integer (u)"""

    _max = 0xFFFFFFFF


def is_trait_writable(trait: TraitType) -> bool:
    """
    Test if a trait is writable

    :param trait: the trait to be tested
    :return: True if the trait is writable
    """
    if trait.read_only:
        return False

    if hasattr(trait, "write_once") and trait.write_once:
        return False

    return True
