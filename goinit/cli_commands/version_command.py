"""Version command for the goinit CLI."""

from goinit._version import __version__


class VersionCommand:
    """Prints the goinit version."""

    @staticmethod
    def add_parser(subparsers) -> None:
        parser = subparsers.add_parser(
            'version',
            help='Show version information',
            description='Display the current version of goinit',
        )
        parser.set_defaults(func=VersionCommand.execute)

    @staticmethod
    def execute(_args) -> None:
        print(f"goinit version {__version__}")
