"""
Interface Extractor — Command Collector

The only place a process is launched. Runs the interface listing command
once, waits for it to finish, and hands back its stdout as text.

One failure is surfaced: the command could not be started at all.
A non-zero exit status is not an error; whatever stdout was produced
still goes to the parser.
"""

from __future__ import annotations
from typing import Callable, Optional
import logging
import subprocess
import sys

from .commands import (
    CommandSpec, CommandUnavailable, detect_platform, get_command,
)

logger = logging.getLogger("ipextract.collector")

# Anything that yields the raw listing text
TextSource = Callable[[], str]


def capture_output(spec: Optional[CommandSpec] = None) -> str:
    """
    Run the listing command and return its decoded stdout.

    Raises:
        CommandUnavailable: the executable is missing or not runnable
    """
    if spec is None:
        spec = get_command(detect_platform())

    if not spec.argv:
        raise CommandUnavailable("", "empty command line")

    logger.debug(f"Running: {spec.display}")
    try:
        result = subprocess.run(
            spec.argv,
            capture_output=True,
            check=False,
        )
    except FileNotFoundError:
        logger.error(f"Command not found: {spec.argv[0]}")
        raise CommandUnavailable(spec.display, "not found")
    except PermissionError:
        logger.error(f"Command not executable: {spec.argv[0]}")
        raise CommandUnavailable(spec.display, "permission denied")
    except OSError as e:
        logger.error(f"Failed to launch {spec.display}: {e}")
        raise CommandUnavailable(spec.display, str(e))

    if result.returncode != 0:
        logger.warning(
            f"{spec.display} exited with status {result.returncode}: "
            f"{result.stderr.decode('utf-8', errors='replace').strip()[:200]}"
        )

    text = result.stdout.decode("utf-8", errors="replace")
    logger.debug(f"Captured {len(text.splitlines())} lines from {spec.display}")
    return text


def file_source(path: str) -> TextSource:
    """
    Text source that reads saved ifconfig output instead of running it.
    '-' reads stdin. An unreadable file is reported like a missing
    command: CommandUnavailable.
    """
    def _source() -> str:
        if path == "-":
            return sys.stdin.read()
        try:
            with open(path, encoding="utf-8", errors="replace") as f:
                return f.read()
        except OSError as e:
            logger.error(f"Cannot read {path}: {e}")
            raise CommandUnavailable(path, e.strerror or str(e))

    return _source
