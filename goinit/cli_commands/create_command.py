"""Project creation command handling for the goinit CLI."""

from goinit.cli_helpers import exit_with_error, map_exception_to_exit_code
from goinit.common.config import GoinitSettings, TemplateRegistry
from goinit.common.constants import ExitCodes
from goinit.common.errors import ConfigError, GoinitError
from goinit.core.materializer import ProgressEvent, ProgressKind
from goinit.core.pipeline import create_project


def print_progress(event: ProgressEvent) -> None:
    """Render materialization progress the way the CLI reports it."""
    if event.kind is ProgressKind.DIRECTORY_CREATED:
        print(f"  Creating directory: {event.relative_path}")
    elif event.kind is ProgressKind.DIRECTORY_SKIPPED:
        print(f"  Skipping hidden directory: {event.relative_path}")
    elif event.kind is ProgressKind.FILE_PROCESSED:
        suffix = " (replaced module name)" if event.replaced else ""
        print(f"  Processing file: {event.relative_path}{suffix}")


class CreateCommand:
    """Handles new project creation."""

    @staticmethod
    def add_parser(subparsers) -> None:
        """Add create command parser to subparsers."""
        parser = subparsers.add_parser(
            'create',
            help='Create a new project',
            description='Create a new project from a template architecture',
        )
        parser.add_argument('-p', '--project', required=True, help='project directory path')
        parser.add_argument('-m', '--module', required=True, help='module name')
        parser.add_argument('-a', '--architecture', required=True,
                            help='architecture name (e.g., layered@v0)')
        parser.set_defaults(func=CreateCommand.execute)

    @staticmethod
    def execute(args) -> None:
        """Create a project and print a summary."""
        try:
            settings = getattr(args, "settings", None)
            if not isinstance(settings, GoinitSettings):
                settings = GoinitSettings()
            try:
                registry = TemplateRegistry.load(settings=settings)
            except ConfigError as exc:
                raise ConfigError(f"failed to load configuration: {exc}") from exc
            boilerplate = registry.resolve(args.architecture)

            print(f"Creating new project: {args.module}")
            print(f"Architecture: {boilerplate.name}")
            print(f"Target directory: {args.project}")
            print()

            created = create_project(
                args.architecture,
                args.project,
                args.module,
                registry=registry,
                progress=print_progress,
                settings=settings,
            )
        except Exception as exc:
            exit_code = map_exception_to_exit_code(exc)
            if isinstance(exc, GoinitError):
                message = str(exc)
            else:
                message = f"Project creation failed: {exc}"
            if exit_code is None:
                exit_code = ExitCodes.UNEXPECTED_ERROR
            exit_with_error(message, exit_code)
            return

        result = created.result
        print()
        print(f"✓ Processed {result.files_processed} files "
              f"({result.files_modified} files with module name replacements)")
        print()
        print(f"✓ Project created successfully at {args.project}")
        print()
        print("Next steps:")
        print(f"  cd {args.project}")
        print("  go mod tidy")
