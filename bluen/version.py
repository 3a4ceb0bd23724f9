#
# Copyright (C) 2026 bluen Developers — LGPL-3.0-or-later
#
__version__ = "0.4.0"
