"""
Interface Extractor — Lookup and Class Filters

Everything here derives from one call: enumerate_all().

    enumerate_all   run the command once → split → parse → drop nameless
    find            first record whose name contains the query
    list_wireless   names starting with a wireless prefix (or containing a filter)
    list_wired      names starting with a wired prefix (or containing a filter)

No caching. Interface state changes between calls, so every call
re-runs the command and builds a fresh list.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
import logging
import sys

from .models import InterfaceRecord, InterfaceClass
from .commands import (
    Platform, WIRELESS_PREFIXES, WIRED_PREFIXES,
    detect_platform, get_command,
)
from .collector import CommandUnavailable, TextSource, capture_output
from .parsers import iter_blocks, parse_interface
from .diagnostics import ExtractionDiagnostic, parse_with_diagnostics

logger = logging.getLogger("ipextract.selectors")


# ============================================================
# Selector Configuration
# ============================================================

@dataclass
class SelectorConfig:
    # Where the text comes from
    platform: Optional[Platform] = None   # None → detect from sys.platform
    command: Optional[str] = None         # full command line override

    # Class filters
    wireless_prefixes: tuple[str, ...] = WIRELESS_PREFIXES
    wired_prefixes: tuple[str, ...] = WIRED_PREFIXES

    # Diagnostics
    log_file: Optional[str] = None
    verbose: bool = False
    debug: bool = False

    def resolved_platform(self) -> Platform:
        return self.platform or detect_platform()


_DEFAULT_CONFIG = SelectorConfig()


# ============================================================
# Enumerate-all — the single source of truth
# ============================================================

def enumerate_all(
    source: Optional[TextSource] = None,
    config: Optional[SelectorConfig] = None,
    diagnostic: Optional[ExtractionDiagnostic] = None,
) -> list[InterfaceRecord]:
    """
    Capture the interface listing once and parse every block.

    Records come back in the order they appear in the text. Blocks
    without an interface name are dropped (and logged).

    Raises:
        CommandUnavailable: the listing command could not be run
    """
    config = config or _DEFAULT_CONFIG

    if diagnostic is not None:
        diagnostic.started_at = datetime.now()

    try:
        if source is None:
            platform = config.resolved_platform()
            spec = get_command(platform, config.command)
            if diagnostic is not None:
                diagnostic.platform = platform.value
                diagnostic.command = spec.display
            raw = capture_output(spec)
        else:
            # saved or injected text: no command, no platform
            raw = source()
    except CommandUnavailable as e:
        if diagnostic is not None:
            diagnostic.error_message = str(e)
            diagnostic.completed_at = datetime.now()
        raise

    records: list[InterfaceRecord] = []
    for index, block in enumerate(iter_blocks(raw)):
        record, block_diag = parse_with_diagnostics(
            index, block, parse_interface, logger=logger,
        )
        if diagnostic is not None:
            diagnostic.blocks.append(block_diag)
        if record is not None:
            records.append(record)

    if diagnostic is not None:
        diagnostic.raw_output = raw
        diagnostic.completed_at = datetime.now()

    logger.info(f"Enumerated {len(records)} interfaces")
    return records


# ============================================================
# Find — substring match on name
# ============================================================

def find(
    query: str,
    source: Optional[TextSource] = None,
    config: Optional[SelectorConfig] = None,
) -> Optional[InterfaceRecord]:
    """
    First record (in enumeration order) whose name contains `query`.
    Case-sensitive. Returns None on no match, and also when the
    listing command is unavailable.
    """
    try:
        records = enumerate_all(source=source, config=config)
    except CommandUnavailable as e:
        logger.warning(f"find({query!r}): {e}")
        return None
    return _first_match(records, query)


def _first_match(
    records: list[InterfaceRecord], query: str,
) -> Optional[InterfaceRecord]:
    for record in records:
        if query in record.name:
            return record
    return None


# ============================================================
# Class filters
# ============================================================

def classify(
    record: InterfaceRecord,
    config: Optional[SelectorConfig] = None,
) -> InterfaceClass:
    """Wireless prefixes are checked before wired ones."""
    config = config or _DEFAULT_CONFIG
    if record.name.startswith(tuple(config.wireless_prefixes)):
        return InterfaceClass.WIRELESS
    if record.name.startswith(tuple(config.wired_prefixes)):
        return InterfaceClass.WIRED
    return InterfaceClass.OTHER


def select_class(
    records: list[InterfaceRecord],
    prefixes: tuple[str, ...],
    name_filter: Optional[str] = None,
    require_inet: bool = False,
) -> list[InterfaceRecord]:
    """
    Pure post-processing over an enumerated list.

    name_filter absent  → name must start with one of `prefixes`
    name_filter present → name must contain it; prefixes are not consulted
    """
    if name_filter is None:
        matched = [r for r in records if r.name.startswith(tuple(prefixes))]
    else:
        matched = [r for r in records if name_filter in r.name]
    if require_inet:
        matched = [r for r in matched if r.has_inet]
    return matched


def list_wireless(
    name_filter: Optional[str] = None,
    source: Optional[TextSource] = None,
    config: Optional[SelectorConfig] = None,
    require_inet: bool = False,
) -> list[InterfaceRecord]:
    """
    Wireless interfaces.

    Raises:
        CommandUnavailable: the listing command could not be run
    """
    config = config or _DEFAULT_CONFIG
    records = enumerate_all(source=source, config=config)
    return select_class(
        records, config.wireless_prefixes, name_filter, require_inet,
    )


def list_wired(
    name_filter: Optional[str] = None,
    source: Optional[TextSource] = None,
    config: Optional[SelectorConfig] = None,
    require_inet: bool = False,
) -> list[InterfaceRecord]:
    """
    Wired interfaces. Mirror of list_wireless().

    Raises:
        CommandUnavailable: the listing command could not be run
    """
    config = config or _DEFAULT_CONFIG
    records = enumerate_all(source=source, config=config)
    return select_class(
        records, config.wired_prefixes, name_filter, require_inet,
    )


# ============================================================
# CLI Entry Point
# ============================================================

def _render_table(records: list[InterfaceRecord], config: SelectorConfig):
    from rich.table import Table

    table = Table(title="Network interfaces", header_style="bold")
    table.add_column("name", style="bold #00d4ff")
    table.add_column("inet")
    table.add_column("mac")
    table.add_column("netmask")
    table.add_column("broadcast")
    table.add_column("class", style="#888888")
    for r in records:
        table.add_row(
            r.name, r.inet, r.mac, r.netmask, r.broadcast,
            classify(r, config).value,
        )
    return table


def main(argv: Optional[list[str]] = None) -> int:
    """
    ipextract                       # every interface
    ipextract --find wl             # first name containing "wl"
    ipextract --wireless            # wlan*/wlp*
    ipextract --wired enp3          # names containing "enp3"
    ipextract --file saved.txt --json
    """
    import argparse
    import json as json_mod

    from rich.console import Console

    from .collector import file_source
    from .diagnostics import dump_summary, setup_logging

    parser = argparse.ArgumentParser(
        prog="ipextract",
        description="Extract interface addresses from ifconfig output.",
        epilog=(
            "Examples:\n"
            "  ipextract\n"
            "  ipextract --find wl\n"
            "  ipextract --wireless --connected\n"
            "  ifconfig -a | ipextract --file - --json\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--find", metavar="QUERY", default=None,
                      help="First interface whose name contains QUERY")
    mode.add_argument("--wireless", nargs="?", const="", default=None,
                      metavar="FILTER",
                      help="Wireless interfaces (optionally: names containing FILTER)")
    mode.add_argument("--wired", nargs="?", const="", default=None,
                      metavar="FILTER",
                      help="Wired interfaces (optionally: names containing FILTER)")

    parser.add_argument("--connected", action="store_true",
                        help="Only interfaces with an IPv4 address")
    parser.add_argument("--file", default=None,
                        help="Parse saved ifconfig output from FILE ('-' for stdin)")
    parser.add_argument("--command", default=None,
                        help="Command line to run instead of the platform default")
    parser.add_argument("--json", action="store_true",
                        help="Output records as JSON")

    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("--log", default=None,
                        help="Write debug log to file")
    parser.add_argument("--log-json", default=None,
                        help="Write full diagnostic JSON to file")

    args = parser.parse_args(argv)

    config = SelectorConfig(
        command=args.command,
        log_file=args.log,
        verbose=args.verbose,
        debug=args.debug,
    )
    setup_logging(log_file=config.log_file, debug=config.debug,
                  verbose=config.verbose)

    source = file_source(args.file) if args.file else None
    diagnostic = ExtractionDiagnostic()

    # One enumeration; every mode below is post-processing over it
    try:
        records = enumerate_all(source=source, config=config,
                                diagnostic=diagnostic)
    except CommandUnavailable as e:
        if args.log_json:
            diagnostic.dump_json(args.log_json)
        parser.exit(2, f"ipextract: {e}\n")

    if args.log_json:
        diagnostic.dump_json(args.log_json)
    if args.debug:
        print(dump_summary(diagnostic), file=sys.stderr)

    exit_code = 0
    if args.find is not None:
        candidates = [r for r in records if r.has_inet or not args.connected]
        match = _first_match(candidates, args.find)
        selected = [match] if match else []
        if match is None:
            exit_code = 1
    elif args.wireless is not None:
        selected = select_class(records, config.wireless_prefixes,
                                args.wireless or None, args.connected)
    elif args.wired is not None:
        selected = select_class(records, config.wired_prefixes,
                                args.wired or None, args.connected)
    else:
        selected = [r for r in records if r.has_inet or not args.connected]

    if args.json:
        print(json_mod.dumps([r.to_dict() for r in selected], indent=2))
    else:
        console = Console()
        if selected:
            console.print(_render_table(selected, config))
        else:
            console.print("[#ffcc00]No matching interfaces[/]")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
