"""Project directory precondition checks."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from goinit.common.constants import DEFAULT_DIR_MODE
from goinit.common.errors import DirectoryNotEmptyError, ProjectDirectoryError
from goinit.common.logging_config import get_logger

_log = get_logger(__name__)


def validate_project_directory(project_path: Union[str, Path]) -> Path:
    """
    Ensure the project directory exists and is empty, creating it if absent.

    Returns:
        The absolute project directory path

    Raises:
        ProjectDirectoryError: If the path is not a usable directory
        DirectoryNotEmptyError: If the directory already has entries
    """
    abs_path = Path(os.path.abspath(project_path))

    if not abs_path.exists():
        try:
            abs_path.mkdir(mode=DEFAULT_DIR_MODE, parents=True)
        except OSError as e:
            raise ProjectDirectoryError(f"failed to create directory '{abs_path}': {e}") from e
        _log.debug("Created project directory %s", abs_path)
        return abs_path

    if not abs_path.is_dir():
        raise ProjectDirectoryError(f"path '{abs_path}' exists but is not a directory")

    try:
        has_entries = any(abs_path.iterdir())
    except OSError as e:
        raise ProjectDirectoryError(f"failed to read directory '{abs_path}': {e}") from e

    if has_entries:
        raise DirectoryNotEmptyError(
            f"directory '{abs_path}' is not empty. goinit should be used for creating new projects only"
        )
    return abs_path
