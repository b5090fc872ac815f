"""Loading and lookup of the bundled classification cascades."""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

import yaml
from pydantic import ValidationError

from native_properties.errors import CascadeDataError, CascadeNotFoundError
from native_properties.platform_info import ArchFamily
from native_properties.rules import Cascade

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"


def load_cascade_file(path: Path) -> Cascade:
    """Load and validate one cascade from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        The validated, immutable cascade

    Raises:
        CascadeDataError: If the file cannot be read, parsed or validated

    """
    try:
        with path.open("r", encoding="utf-8") as f:
            raw_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CascadeDataError(f"Failed to parse cascade file {path}: {e}") from e
    except OSError as e:
        raise CascadeDataError(f"Failed to read cascade file {path}: {e}") from e

    try:
        cascade = Cascade.model_validate(raw_data)
    except ValidationError as e:
        raise CascadeDataError(f"Invalid cascade file {path}: {e}") from e

    logger.debug("Loaded %d rules from cascade %s", len(cascade.rules), cascade.name)
    return cascade


class CascadeRegistry:
    """Maps each architecture family to the cascade that classifies it."""

    def __init__(self, cascades: Iterable[Cascade]) -> None:
        """Index the cascades by architecture family.

        Args:
            cascades: Cascades to register

        Raises:
            CascadeDataError: If two cascades claim the same architecture

        """
        self._cascades: dict[ArchFamily, Cascade] = {}
        for cascade in cascades:
            for arch in cascade.architectures:
                if arch in self._cascades:
                    raise CascadeDataError(
                        f"Architecture '{arch}' is claimed by both "
                        f"'{self._cascades[arch].name}' and '{cascade.name}'"
                    )
                self._cascades[arch] = cascade

    @classmethod
    def from_directory(cls, directory: Path) -> CascadeRegistry:
        """Load every ``*.yaml`` cascade found in a directory."""
        paths = sorted(directory.glob("*.yaml"))
        if not paths:
            raise CascadeDataError(f"No cascade files found in {directory}")
        return cls(load_cascade_file(path) for path in paths)

    def get(self, arch: ArchFamily) -> Cascade:
        """Return the cascade for an architecture family.

        Raises:
            CascadeNotFoundError: If no cascade covers the architecture

        """
        try:
            return self._cascades[arch]
        except KeyError:
            raise CascadeNotFoundError(
                f"No cascade registered for architecture '{arch}'"
            ) from None

    def __contains__(self, arch: object) -> bool:
        return arch in self._cascades

    def __iter__(self) -> Iterator[Cascade]:
        """Iterate over distinct cascades, in architecture declaration order."""
        seen: set[str] = set()
        for arch in ArchFamily:
            cascade = self._cascades.get(arch)
            if cascade is not None and cascade.name not in seen:
                seen.add(cascade.name)
                yield cascade


@functools.cache
def default_registry() -> CascadeRegistry:
    """Return the registry of cascades shipped with the package.

    Loaded once per process; the cascades are immutable afterwards.
    """
    return CascadeRegistry.from_directory(DATA_DIR)
