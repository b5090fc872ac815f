"""native-properties - detect the best CPU capability tag for the host.

The pipeline normalises the host identity, extracts CPU feature tokens and
runs the architecture's classification cascade to select exactly one tag.
"""

__version__ = "0.1.0"

from native_properties.cascades import CascadeRegistry, default_registry
from native_properties.classifier import Classification, classify
from native_properties.conditions import HostCondition, HostProfile
from native_properties.configuration import ProbeConfiguration
from native_properties.detection import DetectionResult, detect_native_properties
from native_properties.errors import (
    CascadeDataError,
    CascadeError,
    CascadeNotFoundError,
    IndeterminateArchitectureError,
    NativePropertiesError,
    UnsupportedPlatformError,
)
from native_properties.features import (
    CpuDescription,
    extract_cpu_description,
    normalise_token,
    parse_cpuinfo,
    parse_feature_string,
)
from native_properties.platform_info import ArchFamily, OSFamily, PlatformInfo
from native_properties.rules import Cascade, CascadeRule

__all__ = [
    # Version
    "__version__",
    # Pipeline
    "DetectionResult",
    "detect_native_properties",
    "ProbeConfiguration",
    # Platform detection
    "ArchFamily",
    "OSFamily",
    "PlatformInfo",
    # Feature extraction
    "CpuDescription",
    "extract_cpu_description",
    "normalise_token",
    "parse_cpuinfo",
    "parse_feature_string",
    # Classification
    "Cascade",
    "CascadeRegistry",
    "CascadeRule",
    "Classification",
    "HostCondition",
    "HostProfile",
    "classify",
    "default_registry",
    # Errors
    "CascadeDataError",
    "CascadeError",
    "CascadeNotFoundError",
    "IndeterminateArchitectureError",
    "NativePropertiesError",
    "UnsupportedPlatformError",
]
