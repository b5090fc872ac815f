"""Normalisation of raw host identification strings.

Turns the OS identifier and machine string reported by ``uname`` into the
``OSFamily``/``ArchFamily`` pair the rest of the pipeline works with.
"""

from __future__ import annotations

import logging
import re
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

BitWidth = Literal[32, 64]


class OSFamily(StrEnum):
    """Operating system families with a known feature source."""

    LINUX = "linux"
    WINDOWS_EMU = "windows_emu"
    DARWIN = "darwin"
    UNSUPPORTED = "unsupported"


class ArchFamily(StrEnum):
    """CPU architecture families, one classification cascade each."""

    X86_32 = "x86_32"
    X86_64 = "x86_64"
    ARMV5 = "armv5"
    ARMV6 = "armv6"
    ARMV7 = "armv7"
    ARMV8 = "armv8"
    PPC32 = "ppc32"
    PPC64 = "ppc64"
    LOONGARCH64 = "loongarch64"
    RISCV64 = "riscv64"
    E2K = "e2k"
    UNKNOWN = "unknown"


# POSIX emulation layers on Windows, e.g. MSYS_NT-10.0, CYGWIN_NT-10.0-19045,
# MINGW64_NT-10.0 or MINGW64_ARM64_NT-10.0
_WINDOWS_EMU_PREFIXES = ("MSYS_NT", "CYGWIN_NT", "MINGW")

_X86_32_PATTERN = re.compile(r"^(i[3-6]86|x86)$")

_EXACT_ARCHES: dict[str, ArchFamily] = {
    "x86_64": ArchFamily.X86_64,
    "amd64": ArchFamily.X86_64,
    "aarch64": ArchFamily.ARMV8,
    "arm64": ArchFamily.ARMV8,
    "loongarch64": ArchFamily.LOONGARCH64,
    "riscv64": ArchFamily.RISCV64,
    "e2k": ArchFamily.E2K,
    "ppc64": ArchFamily.PPC64,
    "ppc64le": ArchFamily.PPC64,
    "powerpc64": ArchFamily.PPC64,
    "powerpc64le": ArchFamily.PPC64,
    "ppc": ArchFamily.PPC32,
    "ppc32": ArchFamily.PPC32,
    "powerpc": ArchFamily.PPC32,
}


def normalise_os(system: str) -> OSFamily:
    """Map a raw OS identifier (``uname -s``) to its family.

    Matching is case-sensitive: only ``Linux`` and ``Darwin`` match exactly,
    Windows emulation layers match by prefix.
    """
    if system == "Linux":
        return OSFamily.LINUX
    if system == "Darwin":
        return OSFamily.DARWIN
    if system.startswith(_WINDOWS_EMU_PREFIXES):
        return OSFamily.WINDOWS_EMU
    return OSFamily.UNSUPPORTED


def normalise_arch(machine: str) -> ArchFamily:
    """Map a raw machine string (``uname -m``) to its architecture family."""
    if machine in _EXACT_ARCHES:
        return _EXACT_ARCHES[machine]
    if _X86_32_PATTERN.match(machine):
        return ArchFamily.X86_32
    if machine.startswith("armv7"):
        return ArchFamily.ARMV7
    if machine.startswith("armv6"):
        return ArchFamily.ARMV6
    if machine.startswith("arm"):
        # armv5tel, armv4l, plain "arm": all legacy 32-bit ARM
        return ArchFamily.ARMV5
    return ArchFamily.UNKNOWN


class PlatformInfo(BaseModel):
    """Normalised identity of the host.

    Attributes:
        system: Raw OS identifier as reported by the host
        machine: Raw machine architecture as reported by the host
        os_family: Normalised OS family
        arch_family: Normalised architecture family
        bit_width: Word size hint, only kept for unknown architectures

    """

    model_config = ConfigDict(frozen=True)

    system: str
    machine: str
    os_family: OSFamily
    arch_family: ArchFamily
    bit_width: BitWidth | None = Field(
        default=None, description="Selects general-32/general-64 for unknown arches"
    )

    @classmethod
    def from_uname(
        cls, system: str, machine: str, bit_width: BitWidth | None = None
    ) -> PlatformInfo:
        """Build platform info from raw ``uname -s``/``uname -m`` values.

        Args:
            system: Raw OS identifier
            machine: Raw machine architecture
            bit_width: Optional 32/64 hint for unrecognised architectures

        Returns:
            Normalised, immutable platform info

        """
        os_family = normalise_os(system)
        arch_family = normalise_arch(machine)
        if arch_family is not ArchFamily.UNKNOWN:
            bit_width = None

        logger.debug(
            "Platform %r/%r normalised to %s/%s", system, machine, os_family, arch_family
        )
        return cls(
            system=system,
            machine=machine,
            os_family=os_family,
            arch_family=arch_family,
            bit_width=bit_width,
        )

    @property
    def is_supported(self) -> bool:
        """Whether the OS has a known feature source."""
        return self.os_family is not OSFamily.UNSUPPORTED

    @property
    def is_little_endian(self) -> bool:
        """Whether the machine string names a little-endian variant (e.g. ``ppc64le``)."""
        return self.machine.endswith("le")
