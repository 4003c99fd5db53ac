"""Template archive extraction.

Unpacks a `tar.gz` or `zip` archive into a fresh working directory, rejecting
any entry that would land outside it, then applies the root stripping
convention used by archive hosts (a single `repo-vX.Y.Z/` wrapper directory
is treated as the project root).
"""

from __future__ import annotations

import os
import shutil
import tarfile
import tempfile
import zipfile
import zlib
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Dict, Iterator, Optional, Union

from goinit.common.constants import (
    DEFAULT_DIR_MODE,
    DOWNLOAD_CHUNK_SIZE,
    EXTRACT_TEMP_PREFIX,
    PERMISSION_BITS,
)
from goinit.common.errors import FileOperationError, PathTraversalError
from goinit.common.logging_config import get_logger

from .formats import ArchiveFormat

_log = get_logger(__name__)

# Errors raised while reading or decompressing archive data.
_ARCHIVE_READ_ERRORS = (OSError, EOFError, zlib.error, tarfile.TarError, zipfile.BadZipFile)


@dataclass(frozen=True)
class Extraction:
    """Result of an extraction: the owned working directory and the project root inside it."""

    working_dir: Path
    root: Path


def _guarded_target(dest_root: Path, entry_name: str) -> Path:
    """Resolve an archive entry below `dest_root`, rejecting escapes."""
    target = (dest_root / entry_name).resolve()
    if dest_root not in target.parents:
        raise PathTraversalError(entry_name)
    return target


def _make_dirs(path: Path) -> None:
    try:
        os.makedirs(path, mode=DEFAULT_DIR_MODE, exist_ok=True)
    except OSError as e:
        raise FileOperationError("create directory", str(path), e) from e


def _write_stream(target: Path, source: BinaryIO, mode: Optional[int]) -> None:
    """Stream `source` into `target`, created with `mode` or the default creation mode."""
    try:
        if mode is None:
            handle = open(target, "wb")
        else:
            fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
            handle = os.fdopen(fd, "wb")
        with handle:
            shutil.copyfileobj(source, handle, DOWNLOAD_CHUNK_SIZE)
    except _ARCHIVE_READ_ERRORS as e:
        raise FileOperationError("write file", str(target), e) from e


def _extract_tar_gz(archive_path: Path, dest_root: Path) -> None:
    try:
        tar = tarfile.open(archive_path, "r:gz")
    except _ARCHIVE_READ_ERRORS as e:
        raise FileOperationError("open archive", str(archive_path), e) from e

    with tar:
        while True:
            try:
                member = tar.next()
            except _ARCHIVE_READ_ERRORS as e:
                raise FileOperationError("read tar header from", str(archive_path), e) from e
            if member is None:
                break

            target = _guarded_target(dest_root, member.name)
            if member.isdir():
                _make_dirs(target)
            elif member.isreg():
                _make_dirs(target.parent)
                try:
                    source = tar.extractfile(member)
                except _ARCHIVE_READ_ERRORS as e:
                    raise FileOperationError("read archive entry", member.name, e) from e
                with source:
                    _write_stream(target, source, member.mode & PERMISSION_BITS)
            else:
                _log.debug("Skipping non-regular tar member: %s", member.name)


def _extract_zip(archive_path: Path, dest_root: Path) -> None:
    try:
        archive = zipfile.ZipFile(archive_path)
    except _ARCHIVE_READ_ERRORS as e:
        raise FileOperationError("open zip archive", str(archive_path), e) from e

    with archive:
        for info in archive.infolist():
            target = _guarded_target(dest_root, info.filename)
            if info.is_dir():
                _make_dirs(target)
                continue

            _make_dirs(target.parent)
            try:
                source = archive.open(info)
            except (_ARCHIVE_READ_ERRORS + (NotImplementedError, RuntimeError)) as e:
                raise FileOperationError("open file in archive", info.filename, e) from e
            with source:
                # Stored zip permission bits are not applied.
                _write_stream(target, source, None)


_HANDLERS: Dict[ArchiveFormat, Callable[[Path, Path], None]] = {
    ArchiveFormat.TAR_GZ: _extract_tar_gz,
    ArchiveFormat.ZIP: _extract_zip,
}


def strip_root_directory(directory: Path) -> Path:
    """Return the single child directory of `directory`, or `directory` itself."""
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise FileOperationError("read extracted directory", str(directory), e) from e

    if len(entries) == 1 and entries[0].is_dir():
        return entries[0]
    return directory


def extract_into(archive_path: Union[str, Path], archive_format: Union[ArchiveFormat, str],
                 working_dir: Union[str, Path]) -> Path:
    """
    Extract an archive into an existing, empty working directory.

    Returns:
        The extraction root (the working directory or its single child directory)

    Raises:
        UnsupportedFormatError: If the format tag is not recognized
        PathTraversalError: If an entry resolves outside `working_dir`
        FileOperationError: On any read, decompress or write failure
    """
    fmt = ArchiveFormat.coerce(archive_format)
    dest_root = Path(working_dir).resolve()
    _log.info("Extracting template (%s)...", fmt.value)
    _HANDLERS[fmt](Path(archive_path), dest_root)
    root = strip_root_directory(dest_root)
    if root != dest_root:
        _log.debug("Stripped wrapping directory %s", root.name)
    _log.info("Extraction complete")
    return root


def extract(archive_path: Union[str, Path], archive_format: Union[ArchiveFormat, str]) -> Extraction:
    """
    Extract an archive into a newly created temporary directory.

    The caller owns the returned working directory. On failure the directory is
    removed before the error propagates.
    """
    fmt = ArchiveFormat.coerce(archive_format)
    try:
        working_dir = Path(tempfile.mkdtemp(prefix=EXTRACT_TEMP_PREFIX)).resolve()
    except OSError as e:
        raise FileOperationError("create temporary directory in", tempfile.gettempdir(), e) from e

    try:
        root = extract_into(archive_path, fmt, working_dir)
    except Exception:
        shutil.rmtree(working_dir, ignore_errors=True)
        raise
    return Extraction(working_dir=working_dir, root=root)


@contextmanager
def extracted_archive(archive_path: Union[str, Path],
                      archive_format: Union[ArchiveFormat, str]) -> Iterator[Path]:
    """Extract into a temporary directory that is removed when the block exits."""
    fmt = ArchiveFormat.coerce(archive_format)
    with tempfile.TemporaryDirectory(prefix=EXTRACT_TEMP_PREFIX) as tmp_dir:
        yield extract_into(archive_path, fmt, tmp_dir)
