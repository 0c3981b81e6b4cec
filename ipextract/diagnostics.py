"""
Interface Extractor — Diagnostic Framework

Every block, every parse — traceable.
Two levels:
  1. Logging (stderr with -v/--debug, or a file with --log)
  2. Structured capture (--log-json): one BlockRecord per block,
     serialisable to JSON

If a block yields a record with missing fields, or no name at all,
we want to see the raw text that produced it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Optional
import json
import logging

from .models import InterfaceRecord


# ============================================================
# Structured Diagnostic Records
# ============================================================

class ParseResult(Enum):
    OK = "ok"                       # all five fields present
    PARTIAL = "partial"             # named, some fields empty
    NO_NAME = "no-name"             # no extractable name, record dropped
    EMPTY_INPUT = "empty-input"     # nothing to parse


@dataclass
class BlockRecord:
    """Complete record of parsing a single block."""
    index: int                          # position in the source text
    raw_text: str = ""                  # FULL block, unmodified
    parse_result: ParseResult = ParseResult.OK
    parse_detail: str = ""              # which fields were missing
    extracted_data: Optional[dict] = None

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "raw_lines": len(self.raw_text.splitlines()),
            "raw_text": self.raw_text,
            "parse_result": self.parse_result.value,
            "parse_detail": self.parse_detail,
            "extracted_data": self.extracted_data,
        }


@dataclass
class ExtractionDiagnostic:
    """Complete diagnostic record for one enumerate-all call."""
    command: str = ""
    platform: str = ""
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    raw_output: str = ""
    error_message: str = ""
    blocks: list[BlockRecord] = field(default_factory=list)

    def dropped(self) -> list[BlockRecord]:
        return [b for b in self.blocks if b.parse_result in (
            ParseResult.NO_NAME, ParseResult.EMPTY_INPUT
        )]

    def partial(self) -> list[BlockRecord]:
        return [b for b in self.blocks if b.parse_result == ParseResult.PARTIAL]

    def to_dict(self) -> dict:
        return {
            "command": self.command,
            "platform": self.platform,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "error_message": self.error_message,
            "summary": {
                "total_blocks": len(self.blocks),
                "dropped": len(self.dropped()),
                "partial": len(self.partial()),
                "raw_output_lines": len(self.raw_output.splitlines()),
            },
            "blocks": [b.to_dict() for b in self.blocks],
        }

    def dump_json(self, path: str):
        """Write full diagnostic to JSON file."""
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2, default=str)


# ============================================================
# Logger Setup
# ============================================================
#
#   default         : nothing (NullHandler)
#   --verbose / -v  : info-level to stderr
#   --debug         : debug-level to stderr
#   --log FILE      : debug-level to file, safe alongside the TUI
#

def setup_logging(
    log_file: Optional[str] = None,
    debug: bool = False,
    verbose: bool = False,
) -> logging.Logger:
    """
    Configure the "ipextract" logger.

    - log_file: write debug-level to file (TUI-safe)
    - debug: debug-level to stderr (non-TUI mode only)
    - verbose: info-level to stderr
    """
    logger = logging.getLogger("ipextract")
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if log_file:
        fh = logging.FileHandler(log_file, mode="w")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    if debug or verbose:
        sh = logging.StreamHandler()
        sh.setLevel(logging.DEBUG if debug else logging.INFO)
        sh.setFormatter(formatter)
        logger.addHandler(sh)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


# ============================================================
# Diagnostic-Aware Parse Wrapper
# ============================================================

def parse_with_diagnostics(
    index: int,
    block: str,
    parser_func: Callable[[str], InterfaceRecord],
    logger: Optional[logging.Logger] = None,
) -> tuple[Optional[InterfaceRecord], BlockRecord]:
    """
    Run one block through the parser and classify the outcome.

    Returns:
        (record, block_record)
        record is None when the block has no usable name.
    """
    diag = BlockRecord(index=index, raw_text=block)

    if not block or not block.strip():
        diag.parse_result = ParseResult.EMPTY_INPUT
        diag.parse_detail = "Empty or whitespace-only block"
        return None, diag

    record = parser_func(block)

    if not record.name:
        diag.parse_result = ParseResult.NO_NAME
        diag.parse_detail = "No interface name on header line"
        if logger:
            logger.warning(
                f"Dropping block {index}: no interface name\n"
                f"{_indent(block[:300])}"
            )
        return None, diag

    diag.extracted_data = record.to_dict()
    missing = record.missing_fields
    if missing:
        diag.parse_result = ParseResult.PARTIAL
        diag.parse_detail = "missing: " + ", ".join(missing)
        if logger:
            logger.debug(f"[{record.name}] partial parse, {diag.parse_detail}")
    elif logger:
        logger.debug(f"[{record.name}] parsed OK")

    return record, diag


def _indent(text: str, prefix: str = "    ") -> str:
    return "\n".join(prefix + line for line in text.splitlines())


# ============================================================
# Diagnostic Dump Formats
# ============================================================

def dump_summary(diag: ExtractionDiagnostic) -> str:
    """Short summary suitable for terminal output."""
    s = diag.to_dict()["summary"]
    lines = [
        f"Extraction: {diag.command or '(text source)'}",
        f"{'─' * 50}",
    ]
    icons = {
        ParseResult.OK: "✓",
        ParseResult.PARTIAL: "~",
        ParseResult.NO_NAME: "✗",
        ParseResult.EMPTY_INPUT: "○",
    }
    for b in diag.blocks:
        name = (b.extracted_data or {}).get("name", "?")
        line = f"  [{icons.get(b.parse_result, '?')}] block {b.index}: {name}"
        if b.parse_detail:
            line += f"  ({b.parse_detail})"
        lines.append(line)
    lines.append(f"{'─' * 50}")
    lines.append(
        f"Blocks: {s['total_blocks']} | "
        f"Dropped: {s['dropped']} | "
        f"Partial: {s['partial']}"
    )
    return "\n".join(lines)
