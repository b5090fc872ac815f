"""CLI command implementation for listing the tag vocabulary."""

from __future__ import annotations

import logging

from native_properties.cascades import default_registry
from native_properties.cli.errors import cli_error_handler
from native_properties.cli.formatting import OutputFormatter
from native_properties.logging import setup_logging

logger = logging.getLogger(__name__)


def list_tags_command(log_level: str = "WARNING") -> None:
    """CLI command implementation for listing cascades and their tags.

    Args:
        log_level: Logging level

    """
    setup_logging(level=log_level)
    with cli_error_handler("ls-tags", "Failed to list tags"):
        OutputFormatter().format_cascade_list(default_registry())
