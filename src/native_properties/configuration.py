"""Configuration of the host probe with environment variable fallback.

Every input the pipeline reads from the host can be injected, which is how
the test-suite simulates other machines. Resolution order:

1. Explicit properties (CLI options)
2. Environment variables
3. The live host (see ``native_properties.host``)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from native_properties.platform_info import BitWidth

logger = logging.getLogger(__name__)

DEFAULT_CPUINFO_PATH = Path("/proc/cpuinfo")

# Property name -> environment variable
ENVIRONMENT_VARIABLES = {
    "system": "GP_UNAME_S",
    "machine": "GP_UNAME_M",
    "cpuinfo_path": "GP_CPUINFO",
    "sysctl_features": "GP_SYSCTL_FEATURES",
    "bits": "GP_BITS",
}


class ProbeConfiguration(BaseModel):
    """Injectable inputs of the detection pipeline.

    Fields left as None are read from the live host.

    Attributes:
        system: OS identifier, as ``uname -s`` would print it
        machine: Machine architecture, as ``uname -m`` would print it
        cpuinfo_path: cpuinfo-style file read on Linux and Windows emulation hosts
        sysctl_features: Feature string used on Darwin instead of calling sysctl
        bits: 32/64 hint for unrecognised architectures

    Example:
        ```python
        # Explicit configuration
        config = ProbeConfiguration(system="Linux", machine="x86_64")

        # From CLI options with GP_* environment fallback
        config = ProbeConfiguration.from_properties({"machine": "aarch64"})
        ```

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    system: str | None = Field(default=None, description="Raw OS identifier")
    machine: str | None = Field(default=None, description="Raw machine architecture")
    cpuinfo_path: Path = Field(
        default=DEFAULT_CPUINFO_PATH, description="Path to a cpuinfo-style file"
    )
    sysctl_features: str | None = Field(
        default=None, description="Darwin machdep.cpu feature string"
    )
    bits: BitWidth | None = Field(
        default=None, description="Word size hint for unknown architectures"
    )

    @field_validator("system", "machine", mode="before")
    @classmethod
    def validate_identifier(cls, v: object) -> object:
        """Treat blank identifiers as unset."""
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator("cpuinfo_path", mode="before")
    @classmethod
    def validate_cpuinfo_path(cls, v: object) -> object:
        """Fall back to /proc/cpuinfo when the path is blank."""
        if isinstance(v, str) and not v.strip():
            return DEFAULT_CPUINFO_PATH
        return v

    @field_validator("bits", mode="before")
    @classmethod
    def validate_bits(cls, v: object) -> int | None:
        """Accept 32/64 as int or string; anything else is not a usable hint."""
        if v is None:
            return None
        text = str(v).strip()
        if not text:
            return None
        if text in ("32", "64"):
            return int(text)
        logger.warning("Ignoring unusable bit-width hint %r (expected 32 or 64)", v)
        return None

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from properties with environment fallback.

        Environment variables used:
        - GP_UNAME_S: OS identifier
        - GP_UNAME_M: machine architecture
        - GP_CPUINFO: cpuinfo file path
        - GP_SYSCTL_FEATURES: Darwin feature string
        - GP_BITS: 32/64 hint

        Args:
            properties: Configuration properties; None values are ignored

        Returns:
            Validated configuration instance

        Raises:
            ValidationError: If configuration is invalid

        """
        config_data = {key: value for key, value in properties.items() if value is not None}

        for key, variable in ENVIRONMENT_VARIABLES.items():
            if key not in config_data and variable in os.environ:
                config_data[key] = os.environ[variable]

        return cls.model_validate(config_data)
