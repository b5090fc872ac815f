"""Host conditions that cascade rules can require or exclude.

Most rules only look at feature tokens. A few decisions depend on who made
the CPU or what the OS reports about it (errata, pre-ARMv7 cores running an
armv7 userland, byte order); those are named conditions so the
cascade data can refer to them.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from native_properties.features import CpuDescription
from native_properties.platform_info import OSFamily, PlatformInfo

# AMD family 17h covers Zen, Zen+ and Zen 2, which implement PDEP/PEXT in
# microcode (18+ cycles) although they advertise BMI2.
_AMD_VENDOR = "AuthenticAMD"
_AMD_ZEN1_ZEN2_FAMILY = 23

_LEGACY_ARM_MODEL = re.compile(r"armv[4-6]|\(v[4-6]\w*\)", re.IGNORECASE)
_LEADING_DIGITS = re.compile(r"\d+")


class HostProfile(BaseModel):
    """Everything a cascade rule may inspect about the host."""

    model_config = ConfigDict(frozen=True)

    platform: PlatformInfo
    cpu: CpuDescription


class HostCondition(StrEnum):
    """Named host conditions usable in ``when``/``unless`` clauses."""

    AMD_ZEN1_ZEN2 = "amd_zen1_zen2"
    DARWIN_HOST = "darwin_host"
    WINDOWS_EMU_HOST = "windows_emu_host"
    PRE_ARMV7_CORE = "pre_armv7_core"
    LITTLE_ENDIAN_HOST = "little_endian_host"


def _is_amd_zen1_zen2(host: HostProfile) -> bool:
    return (
        host.cpu.vendor_id == _AMD_VENDOR
        and host.cpu.cpu_family == _AMD_ZEN1_ZEN2_FAMILY
    )


def _is_darwin_host(host: HostProfile) -> bool:
    return host.platform.os_family is OSFamily.DARWIN


def _is_windows_emu_host(host: HostProfile) -> bool:
    return host.platform.os_family is OSFamily.WINDOWS_EMU


def _is_pre_armv7_core(host: HostProfile) -> bool:
    if host.cpu.model_name and _LEGACY_ARM_MODEL.search(host.cpu.model_name):
        return True
    # ARM11 cores report "CPU architecture: 7" but name themselves ARMv6 above
    match = _LEADING_DIGITS.match(host.cpu.cpu_architecture or "")
    return match is not None and int(match.group()) < 7


def _is_little_endian_host(host: HostProfile) -> bool:
    # ppc64le userlands require POWER8, which implements VSX
    return host.platform.is_little_endian


_CONDITIONS: dict[HostCondition, Callable[[HostProfile], bool]] = {
    HostCondition.AMD_ZEN1_ZEN2: _is_amd_zen1_zen2,
    HostCondition.DARWIN_HOST: _is_darwin_host,
    HostCondition.WINDOWS_EMU_HOST: _is_windows_emu_host,
    HostCondition.PRE_ARMV7_CORE: _is_pre_armv7_core,
    HostCondition.LITTLE_ENDIAN_HOST: _is_little_endian_host,
}


def check_condition(condition: HostCondition, host: HostProfile) -> bool:
    """Evaluate a named condition against the host."""
    return _CONDITIONS[condition](host)
