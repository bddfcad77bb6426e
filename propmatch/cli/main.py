"""
Entry point for the propmatch CLI.
"""

from typing import Optional, Sequence

from ..config import get_config
from ..utils.logger import setup_logger
from .argparser import log_level_from_args, setup_argparse
from .subcommands import handle_batch, handle_match, handle_operators
from .utils import EXIT_BAD_INPUT, console

HANDLERS = {
    "match": handle_match,
    "batch": handle_batch,
    "operators": handle_operators,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, configure logging and run the selected subcommand."""
    args = setup_argparse(argv)

    config = get_config()
    is_valid, errors = config.validate()
    if not is_valid:
        for error in errors:
            console.print(f"[bold red]Config error:[/bold red] {error}")
        return EXIT_BAD_INPUT

    setup_logger(
        log_dir=config.log.log_dir,
        log_level=log_level_from_args(args),
        log_to_file=config.log.log_to_file,
    )

    return HANDLERS[args.command](args)
