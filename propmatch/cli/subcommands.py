"""
Subcommand handlers for propmatch CLI.

All handle_* functions are module-level, accept an `args` namespace and
return a process exit code. They are dispatched from propmatch.cli.main.
"""

from __future__ import annotations

import argparse
import json
from typing import Any, Mapping

from rich.panel import Panel
from rich.table import Table

from ..rules import (
    MatchStatus,
    OPERATOR_REGISTRY,
    match_property_dict,
)
from .utils import (
    EXIT_BAD_INPUT,
    EXIT_CODES,
    InputError,
    console,
    load_document,
    status_text,
)


# =============================================================================
# SHARED HELPERS
# =============================================================================

def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise InputError(f"{what} must be a mapping, got {type(value).__name__}")
    return value


def _parse_expectation(raw: Any, case_name: str) -> MatchStatus | None:
    if raw is None:
        return None
    try:
        return MatchStatus(str(raw).lower())
    except ValueError:
        choices = ", ".join(status.value for status in MatchStatus)
        raise InputError(f"Case '{case_name}': expect must be one of {choices}, got '{raw}'")


def _describe_condition(condition: Mapping[str, Any]) -> str:
    return f"{condition.get('key', '?')} {condition.get('operator', 'exact')} {condition.get('value')!r}"


# =============================================================================
# MATCH
# =============================================================================

def handle_match(args: argparse.Namespace) -> int:
    """Evaluate one condition and print the outcome."""
    try:
        condition = _require_mapping(load_document(args.condition, "condition"), "Condition")
        properties = _require_mapping(load_document(args.properties, "properties"), "Properties")
    except InputError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        return EXIT_BAD_INPUT

    outcome = match_property_dict(condition, properties)

    if args.json_output:
        console.print_json(json.dumps(outcome.to_dict()))
    else:
        lines = [
            f"Condition: [bold]{_describe_condition(condition)}[/bold]",
            f"Outcome:   {status_text(outcome)}",
            f"Reason:    {outcome.reason.name}",
        ]
        if outcome.message:
            lines.append(f"Detail:    {outcome.message}")
        console.print(Panel("\n".join(lines), title="Property Match", expand=False))

    return EXIT_CODES[outcome.status]


# =============================================================================
# BATCH
# =============================================================================

def handle_batch(args: argparse.Namespace) -> int:
    """
    Evaluate every case in a file.

    Accepts either a top-level list of cases or a mapping with a "cases" list.
    Returns 1 if any case misses its expectation.
    """
    try:
        document = load_document(args.file, "batch file")
        cases = document.get("cases") if isinstance(document, Mapping) else document
        if not isinstance(cases, list):
            raise InputError("Batch file must contain a list of cases")

        rows = []
        failures = 0
        for index, raw_case in enumerate(cases, start=1):
            case = _require_mapping(raw_case, f"Case #{index}")
            name = str(case.get("name", f"case-{index}"))
            condition = _require_mapping(case.get("condition"), f"Case '{name}' condition")
            properties = _require_mapping(case.get("properties") or {}, f"Case '{name}' properties")
            expected = _parse_expectation(case.get("expect"), name)

            outcome = match_property_dict(condition, properties)

            if expected is None:
                verdict = "[dim]-[/dim]"
            elif outcome.status == expected:
                verdict = "[green]PASS[/green]"
            else:
                verdict = "[red]FAIL[/red]"
                failures += 1

            rows.append((
                str(index),
                name,
                _describe_condition(condition),
                status_text(outcome),
                outcome.reason.name,
                expected.name if expected else "",
                verdict,
            ))
    except InputError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        return EXIT_BAD_INPUT

    table = Table(title="Batch Results")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name")
    table.add_column("Condition")
    table.add_column("Outcome")
    table.add_column("Reason", style="dim")
    table.add_column("Expected")
    table.add_column("Result")
    for row in rows:
        table.add_row(*row)
    console.print(table)

    if failures:
        console.print(f"[bold red]{failures} of {len(rows)} case(s) failed[/bold red]")
        return 1
    console.print(f"[bold green]{len(rows)} case(s) evaluated[/bold green]")
    return 0


# =============================================================================
# OPERATORS
# =============================================================================

def handle_operators(args: argparse.Namespace) -> int:
    """Print the operator catalog."""
    table = Table(title="Supported Operators")
    table.add_column("Operator", style="bold", no_wrap=True)
    table.add_column("Category")
    table.add_column("Negates", style="dim")
    table.add_column("Description")

    for spec in OPERATOR_REGISTRY.values():
        table.add_row(
            spec.name,
            spec.category.name,
            spec.negates.value if spec.negates else "",
            spec.description,
        )

    console.print(table)
    return 0
