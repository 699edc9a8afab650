"""
CLI utility functions for the semantics inspector.

Contains:
- Shared Console
- Table builders for indicators, pairings and validation results
- Error display
"""

from typing import List, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..rules.types import ValidationResult
from ..semantics.conditions import Condition
from ..semantics.formatters import (
    get_operator_symbol,
    get_subject_label,
    get_target_label,
)
from ..semantics.registry import SemanticsRegistry
from ..semantics.variants import ValueTarget


# Global Console
console = Console()


def print_error(error_message: str, error_details: str = None):
    """Print an error panel."""
    error_text = f"[bold red]✗ Error:[/] {error_message}"
    if error_details:
        error_text += f"\n[dim]{error_details}[/dim]"
    console.print(Panel(error_text, border_style="red", title="[bold red]ERROR[/]", padding=(1, 2)))


def _format_target(target) -> str:
    label = get_target_label(target)
    if isinstance(target, ValueTarget) and target.min is not None and target.max is not None:
        label += f" [dim]\\[{target.min:g}..{target.max:g}][/dim]"
    return label


def build_indicator_table(registry: SemanticsRegistry) -> Table:
    """Table of indicators and the subjects each one offers."""
    table = Table(title="Indicator Semantics", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan")
    table.add_column("Label")
    table.add_column("Subjects")

    for indicator_id in registry.list_indicators():
        semantics = registry.get_semantics(indicator_id)
        subjects = ", ".join(
            get_subject_label(s) for s in registry.get_valid_subjects(indicator_id)
        )
        table.add_row(indicator_id, semantics.label, subjects)
    return table


def build_pairing_table(registry: SemanticsRegistry, indicator_id: str) -> Table:
    """Table of subject / target / operators for one indicator."""
    semantics = registry.get_semantics(indicator_id)
    table = Table(
        title=f"{semantics.label} ({semantics.id})",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Subject", style="cyan")
    table.add_column("Target")
    table.add_column("Operators")

    for subject in registry.get_valid_subjects(indicator_id):
        for target_rule in registry.get_valid_targets(indicator_id, subject):
            table.add_row(
                get_subject_label(subject),
                _format_target(target_rule.target),
                " ".join(get_operator_symbol(op) for op in target_rule.operators),
            )
    return table


def build_validation_table(
    conditions: Sequence[Condition], results: Sequence[ValidationResult]
) -> Table:
    """Table of validation outcomes, one row per result."""
    table = Table(title="Condition Validation", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Condition")
    table.add_column("Result")
    table.add_column("Details", style="dim")

    for i, result in enumerate(results):
        described = conditions[i].describe() if i < len(conditions) else "(rule set)"
        status = "[bold green]✓ OK[/]" if result.ok else f"[bold red]✗ {result.reason.name}[/]"
        details = "" if result.ok else (result.message or "")
        if result.suggestions:
            details += f"\nallowed: {', '.join(result.suggestions)}"
        table.add_row(str(i + 1), described, status, details)
    return table


def summarize(results: List[ValidationResult]) -> str:
    """One-line pass/fail summary."""
    failed = sum(1 for r in results if not r.ok)
    if failed:
        return f"[bold red]{failed} of {len(results)} checks failed[/]"
    return f"[bold green]All {len(results)} conditions are legal[/]"
