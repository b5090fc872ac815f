"""CLI command implementations for native-properties."""

from native_properties.cli.detect import detect_tag_command, explain_command
from native_properties.cli.errors import cli_error_handler, format_failure
from native_properties.cli.formatting import OutputFormatter
from native_properties.cli.list import list_tags_command

__all__ = [
    "OutputFormatter",
    "cli_error_handler",
    "detect_tag_command",
    "explain_command",
    "format_failure",
    "list_tags_command",
]
