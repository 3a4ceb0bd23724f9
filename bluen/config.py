#
# Copyright (C) 2026 bluen Developers — LGPL-3.0-or-later
#
"""
Library configuration

Settings are read from a small YAML file. The location defaults to
~/.config/bluen/bluen.yaml and may be overridden with BLUEN_CONFIG.
"""
import os
from typing import NamedTuple

from dbus_fast import BusType
from ruamel.yaml import YAML

from .const import BLUEZ_SERVICE
from .log import Log


CONFDIR = os.path.join(os.path.expanduser("~"), ".config", "bluen")
CONFFILE = os.path.join(CONFDIR, "bluen.yaml")

_BUS_TYPES = {"system": BusType.SYSTEM, "session": BusType.SESSION}


def debug_enabled() -> bool:
    return os.environ.get("BLUEN_DEBUG") is not None


class BluenConfig(NamedTuple):
    """
    Connection and logging settings
    """

    bus: str = "system"
    service: str = BLUEZ_SERVICE
    log_level: str = "WARNING"
    log_color: bool = False

    @property
    def bus_type(self) -> BusType:
        """
        The dbus-fast bus type for the configured bus name
        """
        try:
            return _BUS_TYPES[self.bus.lower()]
        except KeyError:
            raise ValueError("Unknown bus '%s', expected one of %s" % (self.bus, ", ".join(_BUS_TYPES))) from None

    @classmethod
    def from_dict(cls, values: dict) -> "BluenConfig":
        """
        Build a config from a plain mapping, rejecting unknown keys.
        """
        unknown = set(values) - set(cls._fields)
        if unknown:
            raise ValueError("Unknown configuration keys: %s" % ", ".join(sorted(unknown)))

        config = cls(**values)
        config.bus_type  # pylint: disable=pointless-statement
        return config

    @classmethod
    def load(cls, filename: str = None) -> "BluenConfig":
        """
        Load configuration from YAML. A missing file yields the defaults.

        :param filename: Path to the YAML file, defaults to BLUEN_CONFIG
                         or ~/.config/bluen/bluen.yaml
        :return: The loaded configuration
        """
        if filename is None:
            filename = os.environ.get("BLUEN_CONFIG", CONFFILE)

        values = {}
        if os.path.isfile(filename):
            with open(filename, "r", encoding="utf-8") as yaml_file:
                data = YAML(typ="safe").load(yaml_file)
            if data is not None:
                if not isinstance(data, dict):
                    raise ValueError("%s: expected a mapping at the top level" % filename)
                values = dict(data)

        config = cls.from_dict(values)
        if debug_enabled():
            config = config._replace(log_level="DEBUG")
        return config

    def apply_logging(self):
        """
        Push the logging settings into the Log module
        """
        Log.enable_color(self.log_color)
        Log.set_level(self.log_level)
