"""CLI command implementations for detecting and explaining the host tag."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from native_properties.cascades import default_registry
from native_properties.cli.errors import cli_error_handler
from native_properties.cli.formatting import OutputFormatter
from native_properties.conditions import HostProfile
from native_properties.configuration import ProbeConfiguration
from native_properties.detection import DetectionResult, detect_native_properties
from native_properties.logging import setup_logging

logger = logging.getLogger(__name__)


def _detect(
    system: str | None,
    machine: str | None,
    cpuinfo: Path | None,
    sysctl_features: str | None,
    bits: str | None,
) -> DetectionResult:
    """Build the probe configuration and run the pipeline."""
    config = ProbeConfiguration.from_properties(
        {
            "system": system,
            "machine": machine,
            "cpuinfo_path": cpuinfo,
            "sysctl_features": sysctl_features,
            "bits": bits,
        }
    )
    logger.debug("Probe configuration: %s", config.model_dump(exclude_none=True))
    return detect_native_properties(config)


def detect_tag_command(  # noqa: PLR0913 - mirrors the CLI options
    system: str | None = None,
    machine: str | None = None,
    cpuinfo: Path | None = None,
    sysctl_features: str | None = None,
    bits: str | None = None,
    log_level: str = "WARNING",
) -> None:
    """CLI command implementation for printing the host's tag.

    Writes exactly one line, the tag, to stdout.

    Args:
        system: OS identifier override
        machine: Machine architecture override
        cpuinfo: cpuinfo file override
        sysctl_features: Darwin feature string override
        bits: 32/64 hint for unknown architectures
        log_level: Logging level

    """
    setup_logging(level=log_level)

    with cli_error_handler("detect", "Native properties detection failed"):
        result = _detect(system, machine, cpuinfo, sysctl_features, bits)

    typer.echo(result.tag)


def explain_command(  # noqa: PLR0913 - mirrors the CLI options
    system: str | None = None,
    machine: str | None = None,
    cpuinfo: Path | None = None,
    sysctl_features: str | None = None,
    bits: str | None = None,
    log_level: str = "WARNING",
) -> None:
    """CLI command implementation for explaining how the tag was chosen.

    Args:
        system: OS identifier override
        machine: Machine architecture override
        cpuinfo: cpuinfo file override
        sysctl_features: Darwin feature string override
        bits: 32/64 hint for unknown architectures
        log_level: Logging level

    """
    setup_logging(level=log_level)

    with cli_error_handler("explain", "Native properties detection failed"):
        result = _detect(system, machine, cpuinfo, sysctl_features, bits)

        cascade = None
        evaluation = []
        if result.classification.cascade is not None:
            cascade = default_registry().get(result.platform.arch_family)
            host = HostProfile(platform=result.platform, cpu=result.cpu)
            evaluation = cascade.evaluate(host)

        formatter = OutputFormatter()
        formatter.format_platform(result)
        formatter.format_evaluation(result, cascade, evaluation)
