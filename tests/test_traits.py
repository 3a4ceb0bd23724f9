import pytest

from traitlets import HasTraits, TraitError

from bluen.traits import Byte, Int16, ObjectPath, UInt16, UInt32, WriteOnceObjectPath, is_trait_writable


class Fields(HasTraits):
    path = WriteOnceObjectPath()
    target = ObjectPath()
    level = Byte()
    rssi = Int16()
    appearance = UInt16()
    klass = UInt32()


def test_write_once_path():
    obj = Fields()
    obj.path = '/org/bluez/hci0'

    with pytest.raises(TraitError):
        obj.path = '/org/bluez/hci1'

    assert obj.path == '/org/bluez/hci0'


def test_object_path_validation():
    obj = Fields()
    obj.target = '/org/bluez'

    with pytest.raises(TraitError):
        obj.target = 'org/bluez'


@pytest.mark.parametrize('name,low,high', [
    ('level', 0, 0xFF),
    ('rssi', -0x8000, 0x7FFF),
    ('appearance', 0, 0xFFFF),
    ('klass', 0, 0xFFFFFFFF)])
def test_integer_bounds(name, low, high):
    obj = Fields()
    setattr(obj, name, low)
    setattr(obj, name, high)

    with pytest.raises(TraitError):
        setattr(obj, name, low - 1)
    with pytest.raises(TraitError):
        setattr(obj, name, high + 1)


def test_is_trait_writable():
    assert is_trait_writable(Fields.class_traits()['target'])
    assert not is_trait_writable(Fields.class_traits()['path'])
    assert not is_trait_writable(Byte(read_only=True))
