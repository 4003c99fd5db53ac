"""
Command Line Interface for goinit.

Provides the `create`, `list` and `version` commands.
"""

import argparse
import sys
from typing import List, Optional

from goinit.cli_commands import COMMANDS
from goinit.common.constants import ExitCodes
from goinit.common.logging_config import configure_logging, get_logger


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='goinit',
        description='Initialize a new project from a template architecture',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    for command in COMMANDS:
        command.add_parser(subparsers)

    return parser


def main(args: Optional[List[str]] = None) -> None:
    """
    Main entry point for the CLI.

    Args:
        args: Command line arguments (uses sys.argv if None)
    """
    parser = create_parser()

    if args is None:
        args = sys.argv[1:]

    if not args:
        parser.print_help()
        sys.exit(ExitCodes.OK)

    parsed_args = parser.parse_args(args)
    configure_logging('DEBUG' if parsed_args.verbose else None)
    get_logger(__name__).debug("Running command %s", parsed_args.command)

    if hasattr(parsed_args, 'func'):
        parsed_args.func(parsed_args)
    else:
        parser.print_help()
        sys.exit(ExitCodes.OK)


if __name__ == '__main__':
    main()
