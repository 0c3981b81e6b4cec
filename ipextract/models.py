"""
Interface Extractor — Core Data Models

One record per interface, built fresh from one block of ifconfig output.
All fields are plain text. Nothing is validated: absence is an empty string.
"""

from __future__ import annotations
from dataclasses import dataclass, fields, asdict
from enum import Enum


# ============================================================
# Interface Record
# ============================================================

@dataclass(frozen=True)
class InterfaceRecord:
    """Snapshot of one network interface at parse time."""
    name: str                           # token before the first colon
    inet: str = ""                      # IPv4 address
    mac: str = ""                       # hardware address
    netmask: str = ""                   # dotted-decimal subnet mask
    broadcast: str = ""                 # broadcast address

    @property
    def has_inet(self) -> bool:
        return bool(self.inet)

    @property
    def missing_fields(self) -> list[str]:
        return [f.name for f in fields(self) if not getattr(self, f.name)]

    def to_dict(self) -> dict:
        return asdict(self)

    def __str__(self) -> str:
        return "\n".join(
            f"{f.name}: {getattr(self, f.name)}" for f in fields(self)
        )


# ============================================================
# Interface Class — name-prefix classification
# ============================================================

class InterfaceClass(Enum):
    WIRELESS = "wireless"
    WIRED = "wired"
    OTHER = "other"                     # loopback, bridges, tunnels, ...
