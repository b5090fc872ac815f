"""Readers for the live host's identification sources.

Each reader returns what the host reports, or an empty value when the source
is unavailable. Nothing here raises for a missing source: the classifier
treats an empty feature source as "no extended features".
"""

from __future__ import annotations

import logging
import platform
import subprocess
from pathlib import Path

from native_properties.platform_info import BitWidth

logger = logging.getLogger(__name__)

SYSCTL_FEATURE_KEYS = ("machdep.cpu.features", "machdep.cpu.leaf7_features")


def read_uname() -> tuple[str, str]:
    """Return the ``(uname -s, uname -m)`` pair of the running host."""
    uname = platform.uname()
    return uname.system, uname.machine


def read_cpuinfo(path: Path) -> str:
    """Read a cpuinfo-style file; an unreadable file reads as empty."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug("Cannot read %s (%s), assuming no CPU features", path, e)
        return ""


def _run(command: list[str]) -> str | None:
    try:
        completed = subprocess.run(  # noqa: S603
            command,
            check=False,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        logger.debug("Cannot run %s: %s", command[0], e)
        return None
    if completed.returncode != 0:
        logger.debug(
            "%s exited with %d: %s",
            " ".join(command),
            completed.returncode,
            completed.stderr.strip(),
        )
        return None
    return completed.stdout


def read_sysctl_features() -> str:
    """Return the Darwin CPU feature names (``sysctl machdep.cpu.*features``).

    Both keys are queried separately because Apple Silicon and older Intel
    Macs lack ``leaf7_features``, which would fail a combined query.
    """
    outputs = (_run(["sysctl", "-n", key]) for key in SYSCTL_FEATURE_KEYS)
    return " ".join(output.strip() for output in outputs if output)


def read_bit_width() -> BitWidth | None:
    """Return the OS word size from ``getconf LONG_BIT``, if available."""
    output = _run(["getconf", "LONG_BIT"])
    if output is None:
        return None
    value = output.strip()
    if value == "32":
        return 32
    if value == "64":
        return 64
    logger.debug("Unexpected getconf LONG_BIT output %r", value)
    return None
