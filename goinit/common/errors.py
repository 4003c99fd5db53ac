"""
Custom exception classes for goinit.
"""

from typing import Optional


class GoinitError(Exception):
    """Base exception class for goinit errors."""
    pass


class ConfigError(GoinitError):
    """Raised when the architecture configuration cannot be loaded or is malformed."""
    pass


class UnknownArchitectureError(ConfigError):
    """Raised when an architecture key is not available in the configuration."""

    def __init__(self, architecture: str, message: str):
        super().__init__(message)
        self.architecture = architecture


class DownloadError(GoinitError):
    """Raised when a template archive cannot be downloaded."""
    pass


class ProjectDirectoryError(GoinitError):
    """Raised when the project directory cannot be used for a new project."""
    pass


class DirectoryNotEmptyError(ProjectDirectoryError):
    """Raised when the project directory already contains entries."""
    pass


class ExtractionError(GoinitError):
    """Base class for archive extraction errors."""
    pass


class UnsupportedFormatError(ExtractionError):
    """Raised when an archive format tag is not recognized."""
    pass


class PathTraversalError(ExtractionError):
    """Raised when an archive entry resolves outside the extraction directory."""

    def __init__(self, entry_name: str):
        super().__init__(f"invalid file path in archive: {entry_name!r}")
        self.entry_name = entry_name


class FileOperationError(GoinitError):
    """Raised when a filesystem operation fails, carrying the offending path."""

    def __init__(self, operation: str, path: str, cause: Optional[BaseException] = None):
        message = f"failed to {operation} {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.operation = operation
        self.path = path
