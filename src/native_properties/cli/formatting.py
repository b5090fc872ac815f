"""Output formatting for native-properties CLI commands."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from native_properties.cascades import CascadeRegistry
from native_properties.detection import DetectionResult
from native_properties.rules import Cascade, CascadeRule

logger = logging.getLogger(__name__)
console = Console()


class OutputFormatter:
    """Handles formatting CLI output for the human-readable commands."""

    STATUS_SELECTED = "[bold green]selected[/bold green]"
    STATUS_MATCHED = "[green]matches[/green]"
    STATUS_SKIPPED = "[dim]-[/dim]"

    @staticmethod
    def _describe_clauses(rule: CascadeRule) -> str:
        """Render a rule's predicate as a short expression."""
        clauses: list[str] = []
        if rule.all_of:
            clauses.append(" ".join(rule.all_of))
        if rule.any_of:
            clauses.append(f"one of ({' '.join(rule.any_of)})")
        clauses.extend(f"when {condition}" for condition in rule.when)
        clauses.extend(f"unless {condition}" for condition in rule.unless)
        return escape(", ".join(clauses)) if clauses else "[dim]always[/dim]"

    def format_platform(self, result: DetectionResult) -> None:
        """Print the detected platform and CPU description."""
        platform, cpu = result.platform, result.cpu

        table = Table(show_header=False, box=None, pad_edge=False)
        table.add_column("Property", style="cyan")
        table.add_column("Value")
        table.add_row("System", f"{escape(platform.system)} ({platform.os_family})")
        table.add_row("Machine", f"{escape(platform.machine)} ({platform.arch_family})")
        if platform.bit_width is not None:
            table.add_row("Bit width", str(platform.bit_width))
        if cpu.vendor_id:
            table.add_row("Vendor", escape(cpu.vendor_id))
        if cpu.cpu_family is not None:
            table.add_row("CPU family", str(cpu.cpu_family))
        if cpu.cpu_architecture:
            table.add_row("CPU architecture", escape(cpu.cpu_architecture))
        if cpu.model_name:
            table.add_row("Model", escape(cpu.model_name))
        table.add_row(
            "Features",
            escape(" ".join(sorted(cpu.features))) if cpu.features else "[dim]none[/dim]",
        )

        console.print(Panel(table, title="🖥️  Host", border_style="blue"))

    def format_evaluation(
        self,
        result: DetectionResult,
        cascade: Cascade | None,
        evaluation: list[tuple[CascadeRule, bool]],
    ) -> None:
        """Print how every rule of the cascade fared, and the final tag.

        Args:
            result: The detection result.
            cascade: Cascade that was evaluated, None for the generic fallback.
            evaluation: Rules in priority order with their match outcome.

        """
        if cascade is None:
            console.print(
                f"\nNo cascade for machine [bold]{escape(result.platform.machine)}"
                f"[/bold]; generic build chosen from a {result.platform.bit_width}-bit hint."
            )
        else:
            table = Table(
                title=f"Cascade {cascade.name} v{cascade.version}",
                show_header=True,
                header_style="bold magenta",
            )
            table.add_column("#", justify="right", style="dim")
            table.add_column("Rule", style="cyan")
            table.add_column("Tag", style="white")
            table.add_column("Requires")
            table.add_column("Outcome")

            for index, (rule, matched) in enumerate(evaluation, start=1):
                if rule.name == result.classification.rule:
                    outcome = self.STATUS_SELECTED
                elif matched:
                    outcome = self.STATUS_MATCHED
                else:
                    outcome = self.STATUS_SKIPPED
                table.add_row(
                    str(index),
                    rule.name,
                    rule.tag,
                    self._describe_clauses(rule),
                    outcome,
                )
            console.print(table)

        console.print(f"\n[bold green]Tag:[/bold green] {result.tag}")

    def format_cascade_list(self, registry: CascadeRegistry) -> None:
        """Print every cascade with its tag vocabulary.

        Args:
            registry: The cascades to list.

        """
        table = Table(
            title="Classification Cascades",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Cascade", style="cyan")
        table.add_column("Version", style="dim")
        table.add_column("Architectures", style="yellow")
        table.add_column("Tags (priority order)", style="white")

        count = 0
        for cascade in registry:
            table.add_row(
                cascade.name,
                cascade.version,
                ", ".join(cascade.architectures),
                "\n".join(cascade.tags),
            )
            count += 1
        table.add_row("generic", "-", "unknown", "general-64\ngeneral-32")

        console.print(table)
        logger.info("Listed %d cascades", count)
