"""
Interface Extractor — Platform, Commands, and Name Prefixes

Platform: fast, dumb, reliable. Identify the host OS from sys.platform.
Commands: per-platform command line that lists every interface.
Prefixes: the fixed name prefixes used to tell wireless from wired.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional
import os
import shlex
import sys


# ============================================================
# Platform detection
# ============================================================
#
# All supported dialects come from the same family of tools:
#   Linux net-tools (modern):  "wlp2s0: flags=4163<UP,...>  mtu 1500"
#   Linux net-tools (legacy):  "eth0      Link encap:Ethernet  HWaddr ..."
#   BSD / macOS:               "en0: flags=8863<UP,...> mtu 1500"
#
# The parser is dialect-tolerant, so the platform only picks the command.
#

class Platform(Enum):
    LINUX = "linux"
    MACOS = "macos"
    BSD = "bsd"
    UNKNOWN = "unknown"


def detect_platform(platform_str: Optional[str] = None) -> Platform:
    """Map sys.platform (or a supplied value) onto a Platform."""
    p = (platform_str if platform_str is not None else sys.platform).lower()
    if p.startswith("linux"):
        return Platform.LINUX
    if p == "darwin":
        return Platform.MACOS
    if "bsd" in p or p.startswith("dragonfly"):
        return Platform.BSD
    return Platform.UNKNOWN


# ============================================================
# Command Sets
# ============================================================

COMMAND_ENV_VAR = "IPEXTRACT_COMMAND"


class CommandUnavailable(Exception):
    """The interface listing command cannot be located or executed."""

    def __init__(self, command: str, reason: str = ""):
        self.command = command
        self.reason = reason
        msg = f"Command unavailable: {command}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


@dataclass
class CommandSpec:
    """How to ask the OS for every interface's configuration."""
    argv: list[str]
    description: str = ""

    @property
    def display(self) -> str:
        return " ".join(self.argv)


COMMAND_SETS: dict[Platform, CommandSpec] = {
    Platform.LINUX: CommandSpec(
        argv=["ifconfig", "-a"],
        description="net-tools ifconfig, all interfaces including down",
    ),
    Platform.MACOS: CommandSpec(
        argv=["ifconfig", "-a"],
        description="BSD ifconfig, all interfaces",
    ),
    Platform.BSD: CommandSpec(
        argv=["ifconfig", "-a"],
        description="BSD ifconfig, all interfaces",
    ),
    Platform.UNKNOWN: CommandSpec(
        argv=["ifconfig"],          # best guess
        description="plain ifconfig",
    ),
}


def get_command(
    platform: Platform,
    override: Optional[str] = None,
) -> CommandSpec:
    """
    Resolve the command line to run.

    Precedence: explicit override, then $IPEXTRACT_COMMAND, then the
    per-platform default.

    Raises:
        CommandUnavailable: the override is not a parseable command line
    """
    line = override or os.environ.get(COMMAND_ENV_VAR)
    if line:
        try:
            argv = shlex.split(line)
        except ValueError as e:
            raise CommandUnavailable(line, str(e))
        return CommandSpec(argv=argv, description="override")
    return COMMAND_SETS.get(platform, COMMAND_SETS[Platform.UNKNOWN])


# ============================================================
# Interface name prefixes
# ============================================================
#
# Small and hardcoded on purpose. Callers widen them through
# SelectorConfig or the filter argument, not by editing these.
#

WIRELESS_PREFIXES: tuple[str, ...] = ("wlan", "wlp")
WIRED_PREFIXES: tuple[str, ...] = ("eth", "enp")

