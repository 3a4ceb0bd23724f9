#
# Copyright (C) 2026 bluen Developers — LGPL-3.0-or-later
#
"""
Property codec

Converts between the variant-wrapped property bags that travel over
the bus and the plain Python values held by entity fields.
"""
from typing import Iterable, NamedTuple

from dbus_fast import Variant

from .errors import MissingPropertyError


class BusField(NamedTuple):
    """
    Binding between an entity field and a remote property
    """

    attr: str
    bus_name: str
    signature: str
    optional: bool = False
    writable: bool = False


def unwrap(value):
    """
    Strip variant wrappers from a value, descending into containers.

    Anything with ``value`` and ``signature`` attributes is a wrapper, so
    both dbus-fast Variants and look-alikes are accepted.
    """
    if isinstance(value, Variant) or (hasattr(value, "value") and hasattr(value, "signature")):
        return unwrap(value.value)

    if isinstance(value, dict):
        return {k: unwrap(v) for k, v in value.items()}

    if isinstance(value, (list, tuple)):
        return type(value)(unwrap(v) for v in value)

    return value


def wrap(field: BusField, value) -> Variant:
    """
    Wrap a value for the wire using the field's declared signature
    """
    if isinstance(value, Variant):
        return value
    return Variant(field.signature, value)


def decode_properties(fields: Iterable[BusField], properties: dict, interface: str, path: str = None) -> dict:
    """
    Decode an initial snapshot into field values.

    Required fields must be present in the bag. Optional fields
    which are absent decode to None. Keys with no matching field
    are ignored.

    :param fields: The entity's field bindings
    :param properties: Mapping of property name to wrapped value
    :param interface: Interface name, for error reporting
    :param path: Object path, for error reporting

    :raises MissingPropertyError: if a required property is absent
    :return: dict of attribute name to unwrapped value
    """
    values = {}
    for field in fields:
        if field.bus_name in properties:
            values[field.attr] = unwrap(properties[field.bus_name])
        elif field.optional:
            values[field.attr] = None
        else:
            raise MissingPropertyError(interface, field.bus_name, path)

    return values
