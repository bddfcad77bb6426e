"""
Argument parser setup for propmatch CLI.

Subcommands:
- match: evaluate one condition against one property bag
- batch: evaluate a YAML/JSON file of cases with optional expectations
- operators: list the operator catalog
"""

import argparse
from typing import Optional, Sequence


def setup_argparse(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments for propmatch_cli.

    Supports:
      match --condition C --properties P   Evaluate one condition
      batch --file cases.yaml              Evaluate many cases
      operators                            List supported operators
    """
    parser = argparse.ArgumentParser(
        description="propmatch - local feature-flag property matching",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python propmatch_cli.py match --condition '{"key": "age", "operator": "gte", "value": 18}' --properties '{"age": 21}'
  python propmatch_cli.py match --condition cond.yaml --properties person.json
  python propmatch_cli.py batch --file cases.yaml
  python propmatch_cli.py operators
        """
    )

    # Verbosity: mutually exclusive group (-q / -v / --debug)
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Quiet mode: errors only"
    )
    verbosity.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Verbose mode: INFO"
    )
    verbosity.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Debug mode: log every match decision"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    subparsers.required = True

    match_parser = subparsers.add_parser("match", help="Evaluate one condition")
    match_parser.add_argument(
        "--condition", "-c",
        required=True,
        help="Condition as a YAML/JSON file path or inline text",
    )
    match_parser.add_argument(
        "--properties", "-p",
        required=True,
        help="Property bag as a YAML/JSON file path or inline text",
    )
    match_parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Print the outcome as JSON instead of a panel",
    )

    batch_parser = subparsers.add_parser("batch", help="Evaluate a file of cases")
    batch_parser.add_argument(
        "--file", "-f",
        required=True,
        help="YAML/JSON file with a list of {name, condition, properties, expect} cases",
    )

    subparsers.add_parser("operators", help="List supported operators")

    return parser.parse_args(argv)


def log_level_from_args(args: argparse.Namespace) -> str:
    """Map verbosity flags to a logging level name."""
    if args.debug:
        return "DEBUG"
    if args.verbose:
        return "INFO"
    if args.quiet:
        return "ERROR"
    return "WARNING"
