"""
Template materialization.

Copies an extracted template tree into the project directory:
* hidden directories (`.git`, `.github`, ...) are skipped with their subtrees
* binary files are copied byte-for-byte
* text files get every literal occurrence of the module placeholder replaced
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Union

from goinit.common.constants import BINARY_CONTROL_RATIO, BINARY_SAMPLE_SIZE, PERMISSION_BITS
from goinit.common.errors import FileOperationError
from goinit.common.logging_config import get_logger

_log = get_logger(__name__)

_WHITESPACE_CONTROLS = frozenset(b"\n\r\t")


class FileClassification(Enum):
    BINARY = "binary"
    TEXT = "text"


class ProgressKind(str, Enum):
    """Progress event kinds emitted during materialization."""
    DIRECTORY_CREATED = "directory_created"
    DIRECTORY_SKIPPED = "directory_skipped"
    FILE_PROCESSED = "file_processed"


@dataclass(frozen=True)
class ProgressEvent:
    kind: ProgressKind
    relative_path: str
    # Set on FILE_PROCESSED events when the placeholder was replaced.
    replaced: bool = False


ProgressCallback = Callable[[ProgressEvent], None]


@dataclass
class MaterializeResult:
    """Totals of one materialization run."""

    files_processed: int = 0
    modified_files: List[str] = field(default_factory=list)

    @property
    def files_modified(self) -> int:
        return len(self.modified_files)


def classify(content: bytes) -> FileClassification:
    """
    Classify content as binary or text from its first 512 bytes.

    A null byte in the sample means binary; otherwise the content is binary when
    more than 10% of the sampled bytes are control characters other than
    newline, carriage return and tab.
    """
    sample = content[:BINARY_SAMPLE_SIZE]
    if not sample:
        return FileClassification.TEXT
    if b"\x00" in sample:
        return FileClassification.BINARY

    control = sum(1 for byte in sample if byte < 0x20 and byte not in _WHITESPACE_CONTROLS)
    if control / len(sample) > BINARY_CONTROL_RATIO:
        return FileClassification.BINARY
    return FileClassification.TEXT


def is_binary(content: bytes) -> bool:
    return classify(content) is FileClassification.BINARY


def replace_placeholder(content: bytes, placeholder: str, replacement: str) -> tuple[bytes, bool]:
    """Replace every literal occurrence of `placeholder`; report whether any occurred."""
    if not placeholder:
        return content, False
    token = placeholder.encode("utf-8")
    if token not in content:
        return content, False
    return content.replace(token, replacement.encode("utf-8")), True


def _write_file(dest: Path, data: bytes, mode: int) -> None:
    fd = os.open(dest, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    with os.fdopen(fd, "wb") as handle:
        handle.write(data)


class TemplateMaterializer:
    """Walks an extracted template tree and writes it into a destination tree."""

    def __init__(self, placeholder: str, replacement: str,
                 progress: Optional[ProgressCallback] = None):
        self.placeholder = placeholder
        self.replacement = replacement
        self._progress = progress

    def _emit(self, kind: ProgressKind, relative_path: str, replaced: bool = False) -> None:
        _log.debug("%s: %s%s", kind.value, relative_path, " (replaced module name)" if replaced else "")
        if self._progress is not None:
            self._progress(ProgressEvent(kind, relative_path, replaced))

    def run(self, source_root: Union[str, Path], dest_root: Union[str, Path]) -> MaterializeResult:
        """
        Materialize `source_root` into `dest_root`.

        Raises:
            FileOperationError: On the first stat/read/create/write failure;
                files written before it stay on disk
        """
        result = MaterializeResult()
        self._walk(Path(source_root), Path(dest_root), "", result)
        _log.info(
            "Processed %d files (%d files with module name replacements)",
            result.files_processed,
            result.files_modified,
        )
        return result

    def _walk(self, source_dir: Path, dest_root: Path, relative_dir: str,
              result: MaterializeResult) -> None:
        try:
            entries = sorted(os.scandir(source_dir), key=lambda entry: entry.name)
        except OSError as e:
            raise FileOperationError("read directory", relative_dir or ".", e) from e

        for entry in entries:
            relative = os.path.join(relative_dir, entry.name) if relative_dir else entry.name
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                raise FileOperationError("stat", relative, e) from e

            if is_dir:
                if entry.name.startswith("."):
                    self._emit(ProgressKind.DIRECTORY_SKIPPED, relative)
                    continue
                self._create_directory(Path(entry.path), dest_root / relative, relative)
                self._walk(Path(entry.path), dest_root, relative, result)
            else:
                if self._process_file(Path(entry.path), dest_root / relative, relative):
                    result.modified_files.append(relative)
                result.files_processed += 1

    def _create_directory(self, source: Path, dest: Path, relative: str) -> None:
        try:
            mode = source.stat().st_mode & PERMISSION_BITS
            dest.mkdir(mode=mode, parents=True, exist_ok=True)
        except OSError as e:
            raise FileOperationError("create directory", relative, e) from e
        self._emit(ProgressKind.DIRECTORY_CREATED, relative)

    def _process_file(self, source: Path, dest: Path, relative: str) -> bool:
        try:
            content = source.read_bytes()
            mode = source.stat().st_mode & PERMISSION_BITS
        except OSError as e:
            raise FileOperationError("read file", relative, e) from e

        replaced = False
        if classify(content) is FileClassification.TEXT:
            content, replaced = replace_placeholder(content, self.placeholder, self.replacement)

        try:
            _write_file(dest, content, mode)
        except OSError as e:
            raise FileOperationError("write file", relative, e) from e

        self._emit(ProgressKind.FILE_PROCESSED, relative, replaced)
        return replaced


def materialize(source_root: Union[str, Path], dest_root: Union[str, Path],
                placeholder: str, replacement: str,
                progress: Optional[ProgressCallback] = None) -> MaterializeResult:
    """Convenience wrapper around `TemplateMaterializer`."""
    return TemplateMaterializer(placeholder, replacement, progress).run(source_root, dest_root)
