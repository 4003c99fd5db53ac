import pytest

from goinit.common.errors import UnsupportedFormatError
from goinit.core.formats import ArchiveFormat, detect_archive_format


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://github.com/o/r/archive/refs/tags/v0.1.0.tar.gz", ArchiveFormat.TAR_GZ),
        ("https://github.com/o/r/archive/refs/heads/main.zip", ArchiveFormat.ZIP),
        ("https://example.com/download?id=42", ArchiveFormat.TAR_GZ),
        ("https://example.com/template.tgz", ArchiveFormat.TAR_GZ),
        ("https://example.com/template.zip?raw=true", ArchiveFormat.ZIP),
        ("https://example.com/archive.gz", ArchiveFormat.TAR_GZ),
    ],
)
def test_detect_archive_format(url, expected):
    assert detect_archive_format(url) is expected


def test_coerce_accepts_tags_and_members():
    assert ArchiveFormat.coerce("zip") is ArchiveFormat.ZIP
    assert ArchiveFormat.coerce(ArchiveFormat.TAR_GZ) is ArchiveFormat.TAR_GZ
    assert ArchiveFormat.ZIP.suffix == ".zip"


def test_coerce_rejects_unknown_tag():
    with pytest.raises(UnsupportedFormatError, match="7z"):
        ArchiveFormat.coerce("7z")
