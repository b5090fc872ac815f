"""Architecture classifier: turns a host profile into exactly one tag."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from native_properties.cascades import CascadeRegistry, default_registry
from native_properties.conditions import HostProfile
from native_properties.errors import IndeterminateArchitectureError
from native_properties.features import CpuDescription
from native_properties.platform_info import ArchFamily, PlatformInfo

logger = logging.getLogger(__name__)

GENERIC_TAGS = {32: "general-32", 64: "general-64"}


class Classification(BaseModel):
    """Outcome of classifying a host.

    Attributes:
        tag: The result tag
        architecture: Architecture family the tag was chosen for
        cascade: Name of the cascade used, None for the generic fallback
        rule: Name of the matching rule, None for the generic fallback

    """

    model_config = ConfigDict(frozen=True)

    tag: str
    architecture: ArchFamily
    cascade: str | None = None
    rule: str | None = None


def classify(
    platform: PlatformInfo,
    cpu: CpuDescription,
    registry: CascadeRegistry | None = None,
) -> Classification:
    """Select the most specific tag the host supports.

    Runs the cascade registered for the host's architecture family and
    returns the first matching rule's tag. Unrecognised architectures fall
    back to ``general-32``/``general-64`` by bit width.

    Args:
        platform: Normalised host identity
        cpu: CPU description with normalised feature tokens
        registry: Cascades to use, defaults to the bundled ones

    Returns:
        The classification, never empty

    Raises:
        IndeterminateArchitectureError: Unknown architecture without a usable
            bit width
        CascadeNotFoundError: Known architecture missing from the registry

    """
    if registry is None:
        registry = default_registry()
    arch = platform.arch_family

    if arch is ArchFamily.UNKNOWN:
        tag = GENERIC_TAGS.get(platform.bit_width) if platform.bit_width else None
        if tag is None:
            raise IndeterminateArchitectureError(platform.machine)
        logger.info(
            "Unrecognised machine %r, using %d-bit generic build",
            platform.machine,
            platform.bit_width,
        )
        return Classification(tag=tag, architecture=arch)

    cascade = registry.get(arch)
    rule = cascade.select(HostProfile(platform=platform, cpu=cpu))
    logger.info("Cascade %s selected rule %s -> %s", cascade.name, rule.name, rule.tag)
    return Classification(
        tag=rule.tag, architecture=arch, cascade=cascade.name, rule=rule.name
    )
