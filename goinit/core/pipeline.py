"""Project creation pipeline: validate, download, extract, materialize."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from goinit.common.config import Boilerplate, GoinitSettings, TemplateRegistry
from goinit.common.logging_config import get_logger

from .downloader import downloaded_archive
from .extractor import extracted_archive
from .formats import detect_archive_format
from .materializer import MaterializeResult, ProgressCallback, materialize
from .validator import validate_project_directory

_log = get_logger(__name__)


@dataclass(frozen=True)
class CreateResult:
    project_dir: Path
    boilerplate: Boilerplate
    result: MaterializeResult


def create_project(architecture: str, project_dir: Union[str, Path], module_name: str,
                   registry: Optional[TemplateRegistry] = None,
                   progress: Optional[ProgressCallback] = None,
                   settings: Optional[GoinitSettings] = None) -> CreateResult:
    """
    Create a new project from a template architecture.

    The downloaded archive and the extraction directory are removed before this
    returns, whether it succeeds or raises.
    """
    settings = settings or GoinitSettings()
    registry = registry or TemplateRegistry.load(settings=settings)
    boilerplate = registry.resolve(architecture)

    target = validate_project_directory(project_dir)
    archive_format = detect_archive_format(boilerplate.archive_url)
    _log.info("Creating %s from %s (%s)", module_name, architecture, archive_format.value)

    with downloaded_archive(boilerplate.archive_url, archive_format,
                            settings.download_timeout()) as archive_path:
        with extracted_archive(archive_path, archive_format) as source_root:
            result = materialize(
                source_root,
                target,
                boilerplate.module_placeholder,
                module_name,
                progress=progress,
            )

    return CreateResult(project_dir=target, boilerplate=boilerplate, result=result)
