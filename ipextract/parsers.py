"""
Interface Extractor — Block Splitter and Record Parser

raw ifconfig output → blocks → InterfaceRecord.

Two stages:
  iter_blocks / split_blocks   column-0 line + its indented continuation lines
  parse_interface              one block → one InterfaceRecord

Every parser function:
  - Takes raw text (str)
  - Returns a record; fields it cannot find stay ""
  - Never raises
  - Treats each field independently, so any subset may be missing

Dialects seen in the wild and handled here:

  net-tools (modern):
    wlp2s0: flags=4163<UP,BROADCAST,RUNNING,MULTICAST>  mtu 1500
            inet 192.168.1.5  netmask 255.255.255.0  broadcast 192.168.1.255
            inet6 fe80::1  prefixlen 64  scopeid 0x20<link>
            ether aa:bb:cc:dd:ee:ff  txqueuelen 1000  (Ethernet)

  net-tools (legacy):
    eth0      Link encap:Ethernet  HWaddr 00:11:22:33:44:55
              inet addr:10.1.1.1  Bcast:10.1.1.255  Mask:255.255.255.0

  BSD / macOS:
    en0: flags=8863<UP,BROADCAST,SMART,RUNNING,SIMPLEX,MULTICAST> mtu 1500
    	ether a4:83:e7:00:00:01
    	inet 10.0.0.7 netmask 0xffffff00 broadcast 10.0.0.255
"""

from __future__ import annotations
from typing import Iterator, Optional
import logging
import re

from .models import InterfaceRecord

logger = logging.getLogger("ipextract.parsers")


# ============================================================
# Utility — token helpers
# ============================================================

_IPV4_RE = re.compile(r'^\d{1,3}(?:\.\d{1,3}){3}$')
_HEX_MASK_RE = re.compile(r'^0x([0-9a-fA-F]{8})$')

# keyword token → field it fills
_KEYWORDS: dict[str, str] = {
    "inet": "inet",
    "ether": "mac",
    "HWaddr": "mac",                    # legacy net-tools
    "lladdr": "mac",                    # OpenBSD
    "netmask": "netmask",
    "broadcast": "broadcast",
}

# legacy "key:value" tokens → field
_COLON_KEYS: dict[str, str] = {
    "addr:": "inet",                    # only after "inet"
    "Bcast:": "broadcast",
    "Mask:": "netmask",
}


def _is_ipv4(value: str) -> bool:
    return bool(_IPV4_RE.match(value))


def _hex_to_dotted(mask: str) -> str:
    """0xffffff00 → 255.255.255.0. Anything else comes back unchanged."""
    m = _HEX_MASK_RE.match(mask)
    if not m:
        return mask
    hex_mask = m.group(1)
    return '.'.join(str(int(hex_mask[i:i+2], 16)) for i in range(0, 8, 2))


def _is_column_zero(line: str) -> bool:
    return bool(line) and not line[0].isspace()


def _extract_name(header: str) -> str:
    """
    Name is the text before the first colon on the header line, trimmed.
    Legacy headers ("eth0      Link encap:Ethernet") put more text
    before that colon, so keep only the first token. A header without
    any colon has no name.
    """
    if ':' not in header:
        return ""
    head = header.split(':', 1)[0].strip()
    if not head:
        return ""
    return head.split()[0]


# ============================================================
# Block Splitter
# ============================================================

def iter_blocks(raw: str) -> Iterator[str]:
    """
    Yield one text block per interface, in source order.

    A block starts at a column-0 line and takes every indented line
    after it. Blank lines are skipped and never end a block.
    """
    if not raw:
        return

    block: list[str] = []
    for line in raw.splitlines():
        if not line.strip():
            continue
        if _is_column_zero(line) and block:
            yield "\n".join(block)
            block = []
        block.append(line)

    if block:
        yield "\n".join(block)


def split_blocks(raw: str) -> list[str]:
    return list(iter_blocks(raw))


# ============================================================
# Record Parser
# ============================================================

def _scan_line(line: str, found: dict[str, str]) -> None:
    """Fill any still-empty field from the keyword tokens on one line."""
    tokens = line.split()
    for i, tok in enumerate(tokens):
        nxt: Optional[str] = tokens[i + 1] if i + 1 < len(tokens) else None

        field_name = _KEYWORDS.get(tok)
        if field_name and nxt is not None:
            value = nxt
            if field_name == "inet":
                if value.startswith("addr:"):
                    value = value[len("addr:"):]
                # inet followed by an IPv6-shaped value: ignore
                if not _is_ipv4(value):
                    continue
            elif field_name == "netmask":
                value = _hex_to_dotted(value)
            if value and not found[field_name]:
                found[field_name] = value
            continue

        for key, colon_field in _COLON_KEYS.items():
            if tok.startswith(key) and len(tok) > len(key):
                if key == "addr:" and (i == 0 or tokens[i - 1] != "inet"):
                    break
                value = tok[len(key):]
                if colon_field == "inet" and not _is_ipv4(value):
                    break
                if not found[colon_field]:
                    found[colon_field] = value
                break


def parse_interface(block: str) -> InterfaceRecord:
    """
    Parse one interface block into an InterfaceRecord.

    Sample:
    wlp2s0: flags=4163<UP,BROADCAST,RUNNING,MULTICAST>  mtu 1500
            inet 192.168.1.5  netmask 255.255.255.0  broadcast 192.168.1.255
            ether aa:bb:cc:dd:ee:ff

    The name comes from the header line. Every line, header included,
    is then scanned for keyword tokens; first match wins per field.
    A block without an extractable name yields name "" and the caller
    decides whether to drop it.
    """
    if not block or not block.strip():
        return InterfaceRecord(name="")

    lines = [line for line in block.splitlines() if line.strip()]
    name = _extract_name(lines[0])

    found = {"inet": "", "mac": "", "netmask": "", "broadcast": ""}
    for line in lines:
        _scan_line(line, found)

    if not name:
        logger.debug(f"No interface name in block: {lines[0][:80]!r}")

    return InterfaceRecord(name=name, **found)


def parse_all(raw: str) -> list[InterfaceRecord]:
    """Split and parse. No filtering; nameless records are kept."""
    return [parse_interface(block) for block in iter_blocks(raw)]


# Short alias for the standalone entry point
parse = parse_interface
