"""The detection pipeline: platform, features, classification."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from native_properties import host
from native_properties.cascades import CascadeRegistry
from native_properties.classifier import Classification, classify
from native_properties.configuration import ProbeConfiguration
from native_properties.errors import UnsupportedPlatformError
from native_properties.features import CpuDescription, extract_cpu_description
from native_properties.platform_info import (
    ArchFamily,
    OSFamily,
    PlatformInfo,
    normalise_arch,
    normalise_os,
)

logger = logging.getLogger(__name__)


class DetectionResult(BaseModel):
    """Everything learnt about the host in one run."""

    model_config = ConfigDict(frozen=True)

    platform: PlatformInfo
    cpu: CpuDescription
    classification: Classification

    @property
    def tag(self) -> str:
        """The result tag."""
        return self.classification.tag


def detect_platform(config: ProbeConfiguration) -> PlatformInfo:
    """Identify the host, preferring configured values over live ones.

    Raises:
        UnsupportedPlatformError: If the OS identifier is not recognised

    """
    system, machine = config.system, config.machine
    if system is None or machine is None:
        live_system, live_machine = host.read_uname()
        system = system if system is not None else live_system
        machine = machine if machine is not None else live_machine

    if normalise_os(system) is OSFamily.UNSUPPORTED:
        raise UnsupportedPlatformError(system)

    bits = config.bits
    if bits is None and normalise_arch(machine) is ArchFamily.UNKNOWN:
        bits = host.read_bit_width()

    return PlatformInfo.from_uname(system, machine, bits)


def read_feature_source(platform: PlatformInfo, config: ProbeConfiguration) -> str | None:
    """Read the one feature source that applies to the platform.

    Returns None when the architecture needs no features.
    """
    if platform.arch_family is ArchFamily.UNKNOWN:
        return None
    if platform.os_family is OSFamily.DARWIN:
        if config.sysctl_features is not None:
            return config.sysctl_features
        return host.read_sysctl_features()
    return host.read_cpuinfo(config.cpuinfo_path)


def detect_native_properties(
    config: ProbeConfiguration | None = None,
    registry: CascadeRegistry | None = None,
) -> DetectionResult:
    """Run the full pipeline and return the classification of the host.

    Args:
        config: Injected inputs; defaults to environment/live values
        registry: Cascades to classify with, defaults to the bundled ones

    Returns:
        Detection result carrying the tag

    Raises:
        UnsupportedPlatformError: If the OS is not recognised
        IndeterminateArchitectureError: Unknown architecture without bit width

    """
    if config is None:
        config = ProbeConfiguration.from_properties({})

    platform = detect_platform(config)
    source = read_feature_source(platform, config)
    cpu = extract_cpu_description(platform, source)
    classification = classify(platform, cpu, registry)
    return DetectionResult(platform=platform, cpu=cpu, classification=classification)
