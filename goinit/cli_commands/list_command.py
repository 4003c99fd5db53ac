"""Architecture listing command for the goinit CLI."""

import sys
import textwrap
from typing import List

from goinit.cli_helpers import exit_with_error, map_exception_to_exit_code
from goinit.common.config import GoinitSettings, TemplateRegistry
from goinit.common.constants import DESCRIPTION_WRAP_WIDTH, ExitCodes
from goinit.common.errors import GoinitError


def wrap_text(text: str, width: int = DESCRIPTION_WRAP_WIDTH) -> List[str]:
    """Greedy word wrap; words longer than `width` stay on their own line."""
    return textwrap.wrap(text, width=width, break_long_words=False, break_on_hyphens=False)


class ListCommand:
    """Lists the available project architectures."""

    @staticmethod
    def add_parser(subparsers) -> None:
        parser = subparsers.add_parser(
            'list',
            help='List available architectures',
            description='List all available project architectures and their details',
        )
        parser.set_defaults(func=ListCommand.execute)

    @staticmethod
    def execute(args) -> None:
        settings = getattr(args, "settings", None)
        if not isinstance(settings, GoinitSettings):
            settings = GoinitSettings()
        try:
            registry = TemplateRegistry.load(settings=settings)
        except Exception as exc:
            exit_code = map_exception_to_exit_code(exc) or ExitCodes.UNEXPECTED_ERROR
            message = str(exc) if isinstance(exc, GoinitError) else f"List failed: {exc}"
            exit_with_error(f"failed to load configuration: {message}", exit_code)
            return

        print("Available Architectures:")
        print()

        architectures = registry.available_architectures
        for index, architecture in enumerate(architectures):
            try:
                boilerplate = registry.get_boilerplate(architecture)
            except GoinitError as exc:
                print(f"Warning: Could not load details for {architecture}: {exc}", file=sys.stderr)
                continue

            print(f"┌─ {architecture}")
            print(f"│  Name: {boilerplate.name}")
            print("│  Description:")
            for line in wrap_text(boilerplate.description):
                print(f"│    {line}")

            if index < len(architectures) - 1:
                print("│")
            else:
                print("└─")

        print()
        print("Usage:")
        print("  goinit create --project <dir> --module <name> --architecture <arch>")
