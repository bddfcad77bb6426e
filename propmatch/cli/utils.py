"""
CLI utility functions for propmatch.

Contains:
- Shared rich Console
- Document loading (YAML/JSON from a file path or inline text)
- Outcome rendering helpers
"""

from pathlib import Path
from typing import Any

import yaml
from rich.console import Console

from ..rules import MatchOutcome, MatchStatus


# Global Console
console = Console()

STATUS_STYLES = {
    MatchStatus.MATCHED: "bold green",
    MatchStatus.NOT_MATCHED: "bold red",
    MatchStatus.INCONCLUSIVE: "bold yellow",
}

# Process exit codes for `match`
EXIT_CODES = {
    MatchStatus.MATCHED: 0,
    MatchStatus.NOT_MATCHED: 1,
    MatchStatus.INCONCLUSIVE: 2,
}
EXIT_BAD_INPUT = 3


class InputError(Exception):
    """Raised when CLI input cannot be loaded."""


def load_document(source: str, what: str = "document") -> Any:
    """
    Load YAML or JSON from a file path, or parse the string itself.

    JSON is valid YAML, so one parser covers both.

    Raises:
        InputError: If the text does not parse
    """
    path = Path(source)
    try:
        is_file = path.is_file()
    except OSError:
        # Inline documents can be longer than the OS path limit
        is_file = False

    text = path.read_text(encoding="utf-8") if is_file else source
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InputError(f"Could not parse {what}: {exc}") from exc


def status_text(outcome: MatchOutcome) -> str:
    """Rich markup for an outcome status."""
    style = STATUS_STYLES[outcome.status]
    return f"[{style}]{outcome.status.name}[/{style}]"
