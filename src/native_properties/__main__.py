"""Main entry point for native-properties.

This module provides the command-line interface, including commands for:
- Printing the capability tag of the host (the default command)
- Explaining how the tag was chosen
- Listing the tag vocabulary of every architecture
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from native_properties.cli import (
    detect_tag_command,
    explain_command,
    list_tags_command,
)

app = typer.Typer(name="native-properties", add_completion=False)

SystemOption = Annotated[
    str | None,
    typer.Option(
        "--system",
        help="OS identifier as printed by 'uname -s' [env: GP_UNAME_S]",
        rich_help_panel="Host overrides",
    ),
]
MachineOption = Annotated[
    str | None,
    typer.Option(
        "--machine",
        help="Machine architecture as printed by 'uname -m' [env: GP_UNAME_M]",
        rich_help_panel="Host overrides",
    ),
]
CpuinfoOption = Annotated[
    Path | None,
    typer.Option(
        "--cpuinfo",
        help="cpuinfo file read on Linux and Windows hosts [env: GP_CPUINFO]",
        dir_okay=False,
        rich_help_panel="Host overrides",
        show_default="/proc/cpuinfo",
    ),
]
SysctlFeaturesOption = Annotated[
    str | None,
    typer.Option(
        "--sysctl-features",
        help="Darwin CPU feature names, space separated [env: GP_SYSCTL_FEATURES]",
        rich_help_panel="Host overrides",
    ),
]
BitsOption = Annotated[
    str | None,
    typer.Option(
        "--bits",
        help="32 or 64, used only for unrecognised machines [env: GP_BITS]",
        rich_help_panel="Host overrides",
    ),
]
LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        case_sensitive=False,
    ),
]


@app.callback(invoke_without_command=True)
def main(  # noqa: PLR0913 - CLI entry point with many options
    ctx: typer.Context,
    system: SystemOption = None,
    machine: MachineOption = None,
    cpuinfo: CpuinfoOption = None,
    sysctl_features: SysctlFeaturesOption = None,
    bits: BitsOption = None,
    log_level: LogLevelOption = "WARNING",
) -> None:
    """Print the most specific CPU capability tag this machine supports.

    Without a command, behaves like 'detect'.
    """
    if ctx.invoked_subcommand is None:
        detect_tag_command(system, machine, cpuinfo, sysctl_features, bits, log_level)


@app.command()
def detect(  # noqa: PLR0913 - CLI entry point with many options
    system: SystemOption = None,
    machine: MachineOption = None,
    cpuinfo: CpuinfoOption = None,
    sysctl_features: SysctlFeaturesOption = None,
    bits: BitsOption = None,
    log_level: LogLevelOption = "WARNING",
) -> None:
    """Print the capability tag of this machine.

    Example:
        native-properties detect
        native-properties detect --machine aarch64 --cpuinfo tests/fixtures/cpuinfo/armv8.cpuinfo

    """
    detect_tag_command(system, machine, cpuinfo, sysctl_features, bits, log_level)


@app.command()
def explain(  # noqa: PLR0913 - CLI entry point with many options
    system: SystemOption = None,
    machine: MachineOption = None,
    cpuinfo: CpuinfoOption = None,
    sysctl_features: SysctlFeaturesOption = None,
    bits: BitsOption = None,
    log_level: LogLevelOption = "WARNING",
) -> None:
    """Show the detected host and how each cascade rule matched."""
    explain_command(system, machine, cpuinfo, sysctl_features, bits, log_level)


@app.command(name="ls-tags")
def list_tags(log_level: LogLevelOption = "WARNING") -> None:
    """List every cascade and its tags in priority order."""
    list_tags_command(log_level)


if __name__ == "__main__":
    app()
