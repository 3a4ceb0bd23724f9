"""
bluen - typed, live mirrors of BlueZ objects
"""
from .adapter import Adapter
from .battery import Battery
from .bluez import Bluez
from .bus import BluezBus, Subscription
from .config import BluenConfig
from .device import Device
from .entity import BusEntity
from .errors import (
    AdapterNotFoundError,
    BluenError,
    MissingPropertyError,
    ProtocolError,
    UnsupportedInterfaceError,
)
from .version import __version__
