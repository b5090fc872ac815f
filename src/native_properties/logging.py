"""Logging profiles for native-properties.

A profile is a ``logging.config.dictConfig`` document stored as YAML in
``native_properties/config/``. ``NATIVE_PROPERTIES_ENV`` picks the profile;
``--log-level`` overrides its levels. Every bundled handler writes to stderr,
so stdout only ever carries the tag.
"""

from __future__ import annotations

import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Any

import yaml

from native_properties.errors import NativePropertiesError

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).parent / "config"
ENVIRONMENT_VARIABLE = "NATIVE_PROPERTIES_ENV"

DEFAULT_PROFILE = "logging.yaml"
PROFILES = {
    "dev": "logging-dev.yaml",
    "development": "logging-dev.yaml",
    "test": "logging-test.yaml",
}


class LoggingError(NativePropertiesError):
    """Raised when a logging profile cannot be loaded or applied."""

    pass


def profile_path() -> Path:
    """Return the profile selected by ``NATIVE_PROPERTIES_ENV``.

    Unknown or missing environments (including ``prod``) use ``logging.yaml``.
    """
    environment = os.getenv(ENVIRONMENT_VARIABLE, "").strip().lower()
    return CONFIG_DIR / PROFILES.get(environment, DEFAULT_PROFILE)


def load_profile(path: Path) -> dict[str, Any]:
    """Read a dictConfig document from YAML.

    Raises:
        LoggingError: If the file is unreadable, malformed or not a mapping

    """
    try:
        with path.open(encoding="utf-8") as f:
            profile = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LoggingError(f"Failed to parse logging profile {path.name}: {e}") from e
    except OSError as e:
        raise LoggingError(f"Failed to read logging profile {path}: {e}") from e

    if not isinstance(profile, dict):
        raise LoggingError(f"Logging profile {path.name} is not a mapping")
    return profile


def _override_level(profile: dict[str, Any], level: str) -> None:
    """Apply ``level`` to every logger, and lower handlers that would filter it."""
    name = level.upper()
    numeric_level = logging.getLevelNamesMapping().get(name)
    if numeric_level is None:
        raise LoggingError(f"Invalid log level: {level}")

    for logger_config in profile.get("loggers", {}).values():
        logger_config["level"] = name
    if "root" in profile:
        profile["root"]["level"] = name

    for handler_config in profile.get("handlers", {}).values():
        current = logging.getLevelNamesMapping().get(
            str(handler_config.get("level", "NOTSET")).upper(), logging.NOTSET
        )
        if numeric_level < current:
            handler_config["level"] = name


def setup_logging(level: str | None = None) -> None:
    """Configure logging from the selected profile.

    A profile that cannot be applied degrades to plain stderr logging with a
    warning; detection itself never fails because of logging.

    Args:
        level: Optional level override (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    """
    path = profile_path()
    try:
        profile = load_profile(path)
        if level:
            _override_level(profile, level)
        logging.config.dictConfig(profile)
    except (LoggingError, ValueError, TypeError, KeyError) as e:
        logging.basicConfig(
            level=logging.WARNING,
            format="%(levelname)s: %(message)s",
            stream=sys.stderr,
            force=True,
        )
        logger.warning("Using basic stderr logging, %s was not applied: %s", path.name, e)
        return

    logger.debug("Logging configured from %s", path.name)
