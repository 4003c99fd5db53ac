"""Shared CLI helpers for goinit commands."""

import sys
from typing import Optional

from goinit.common.constants import ExitCodes
from goinit.common.errors import (
    ConfigError,
    DownloadError,
    ExtractionError,
    FileOperationError,
    ProjectDirectoryError,
    UnknownArchitectureError,
)


def exit_with_error(message: str, exit_code: int) -> None:
    """Print an error message and exit with the specified code."""
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(exit_code)


def map_exception_to_exit_code(exc: Exception) -> Optional[int]:
    """Translate known exceptions to goinit exit codes."""
    if isinstance(exc, UnknownArchitectureError):
        return ExitCodes.UNKNOWN_ARCHITECTURE
    if isinstance(exc, ConfigError):
        return ExitCodes.CONFIG_ERROR
    if isinstance(exc, ProjectDirectoryError):
        return ExitCodes.INVALID_PROJECT_DIRECTORY
    if isinstance(exc, DownloadError):
        return ExitCodes.DOWNLOAD_FAILED
    if isinstance(exc, ExtractionError):
        return ExitCodes.EXTRACTION_FAILED
    if isinstance(exc, FileOperationError):
        return ExitCodes.FILE_OPERATION_FAILED
    return None
