"""Bundled classification cascades, one YAML file per architecture group."""

from native_properties.cascades.loader import (
    DATA_DIR,
    CascadeRegistry,
    default_registry,
    load_cascade_file,
)

__all__ = [
    "DATA_DIR",
    "CascadeRegistry",
    "default_registry",
    "load_cascade_file",
]
