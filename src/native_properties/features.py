"""Feature extraction from the host's CPU description.

Linux and the Windows emulation layers describe the CPU as a ``key : value``
table (``/proc/cpuinfo``); Darwin reports a flat list of feature names via
``sysctl``. Both are reduced to a ``CpuDescription`` whose feature tokens
share one canonical spelling, so the cascades never care where a token came
from.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from native_properties.platform_info import ArchFamily, OSFamily, PlatformInfo

logger = logging.getLogger(__name__)

# Name of the cpuinfo field that carries the flag list, per architecture.
# PowerPC has no flag list; altivec/vsx support is spelled out in the cpu line.
_FLAG_FIELDS: dict[ArchFamily, tuple[str, ...]] = {
    ArchFamily.X86_32: ("flags",),
    ArchFamily.X86_64: ("flags",),
    ArchFamily.E2K: ("flags",),
    ArchFamily.ARMV5: ("features",),
    ArchFamily.ARMV6: ("features",),
    ArchFamily.ARMV7: ("features",),
    ArchFamily.ARMV8: ("features",),
    ArchFamily.LOONGARCH64: ("features", "flags"),
    ArchFamily.PPC32: ("cpu",),
    ArchFamily.PPC64: ("cpu",),
    ArchFamily.RISCV64: ("isa",),
}
_DEFAULT_FLAG_FIELDS = ("flags", "features")

_MODEL_FIELDS = ("model name", "cpu model", "processor", "cpu")

_TOKEN_SEPARATORS = re.compile(r"[\s,]+")
_TOKEN_PUNCTUATION = "()[]{}:;\"'"


class CpuDescription(BaseModel):
    """CPU capabilities reported by the host.

    Attributes:
        features: Normalised feature tokens (the FeatureSet), possibly empty
        vendor_id: Vendor string, e.g. ``GenuineIntel`` or ``AuthenticAMD``
        cpu_family: Numeric x86 CPU family
        cpu_architecture: ARM ``CPU architecture`` field, e.g. ``7`` or ``5TEJ``
        model_name: Human readable model line, e.g. ``POWER9 (architected), altivec supported``

    """

    model_config = ConfigDict(frozen=True)

    features: frozenset[str] = Field(default_factory=frozenset)
    vendor_id: str | None = None
    cpu_family: int | None = None
    cpu_architecture: str | None = None
    model_name: str | None = None

    def has_all(self, tokens: Iterable[str]) -> bool:
        """Return True when every token is present."""
        return self.features.issuperset(tokens)

    def has_any(self, tokens: Iterable[str]) -> bool:
        """Return True when at least one token is present."""
        return not self.features.isdisjoint(tokens)


def normalise_token(token: str) -> str:
    """Return the canonical spelling of a feature token.

    Lower-cases the token, strips surrounding punctuation and drops ``.`` and
    ``_`` so that ``sse4_1``, ``SSE4.1`` and ``sse41`` all compare equal.
    """
    return token.strip(_TOKEN_PUNCTUATION).lower().replace(".", "").replace("_", "")


def parse_feature_string(text: str | None) -> frozenset[str]:
    """Split a whitespace (or comma) separated feature list into tokens."""
    if not text:
        return frozenset()
    tokens = (normalise_token(raw) for raw in _TOKEN_SEPARATORS.split(text))
    return frozenset(token for token in tokens if token)


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        logger.debug("Ignoring non-numeric cpu family %r", value)
        return None


def parse_cpuinfo(
    text: str | None, flag_fields: tuple[str, ...] = _DEFAULT_FLAG_FIELDS
) -> CpuDescription:
    """Parse a cpuinfo-style ``key : value`` table.

    The table repeats one block per logical processor. Flags are taken from
    the last matching line, vendor fields from the first one. Lines without a
    colon are ignored.

    Args:
        text: Raw cpuinfo text, may be empty or None
        flag_fields: Field names (case-insensitive) that carry the flag list

    Returns:
        Parsed CPU description; empty when nothing usable was found

    """
    if not text:
        return CpuDescription()

    wanted_flags = {field.lower() for field in flag_fields}
    flags_line: str | None = None
    fields: dict[str, str] = {}

    for line in text.splitlines():
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip().lower()
        value = value.strip()
        if key in wanted_flags:
            flags_line = value
        if key == "processor" and value.isdigit():
            # x86 numbers its blocks with "processor : N"; not a model line
            continue
        fields.setdefault(key, value)

    model_name = next(
        (fields[name] for name in _MODEL_FIELDS if fields.get(name)), None
    )
    return CpuDescription(
        features=parse_feature_string(flags_line),
        vendor_id=fields.get("vendor_id") or None,
        cpu_family=_parse_int(fields.get("cpu family")),
        cpu_architecture=fields.get("cpu architecture") or None,
        model_name=model_name,
    )


def extract_cpu_description(platform: PlatformInfo, source: str | None) -> CpuDescription:
    """Reduce the OS-specific feature source to a CPU description.

    Args:
        platform: Normalised host identity; selects the source format
        source: cpuinfo text (Linux, Windows emulation) or the sysctl
            feature string (Darwin); None when the source was unavailable

    Returns:
        CPU description with normalised feature tokens

    """
    if platform.os_family is OSFamily.DARWIN:
        description = CpuDescription(features=parse_feature_string(source))
    else:
        flag_fields = _FLAG_FIELDS.get(platform.arch_family, _DEFAULT_FLAG_FIELDS)
        description = parse_cpuinfo(source, flag_fields)

    logger.debug(
        "Extracted %d feature tokens for %s/%s",
        len(description.features),
        platform.os_family,
        platform.arch_family,
    )
    return description
