"""Supported template archive formats."""

from __future__ import annotations

from enum import Enum
from urllib.parse import urlsplit

from goinit.common.errors import UnsupportedFormatError


class ArchiveFormat(Enum):
    TAR_GZ = "tar.gz"
    ZIP = "zip"

    @property
    def suffix(self) -> str:
        return f".{self.value}"

    @classmethod
    def coerce(cls, value: ArchiveFormat | str) -> ArchiveFormat:
        """Return the format for a tag, raising UnsupportedFormatError if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedFormatError(f"unsupported archive format: {value}") from None


def detect_archive_format(url: str) -> ArchiveFormat:
    """Derive the archive format from the URL path suffix, defaulting to tar.gz."""
    path = urlsplit(url).path
    if path.endswith(".tar.gz"):
        return ArchiveFormat.TAR_GZ
    if path.endswith(".zip"):
        return ArchiveFormat.ZIP
    return ArchiveFormat.TAR_GZ
