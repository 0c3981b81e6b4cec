"""
ipextract — interface addresses from ifconfig output.

Not a netlink client — a text parser.
"""

__version__ = "0.1.0"

from .models import InterfaceRecord, InterfaceClass
from .commands import Platform, detect_platform
from .collector import CommandUnavailable
from .parsers import iter_blocks, split_blocks, parse_interface, parse
from .lookup import (
    SelectorConfig,
    enumerate_all, find, list_wireless, list_wired, classify,
)
from .diagnostics import ExtractionDiagnostic, setup_logging
