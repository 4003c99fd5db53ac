"""Registry for CLI subcommands."""

from .create_command import CreateCommand
from .list_command import ListCommand
from .version_command import VersionCommand

COMMANDS = (
    CreateCommand,
    ListCommand,
    VersionCommand,
)

__all__ = ["COMMANDS", "CreateCommand", "ListCommand", "VersionCommand"]
