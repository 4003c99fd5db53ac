"""Shared fixtures: archive builders and an isolated temp directory."""

from __future__ import annotations

import io
import os
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

import pytest

# (name, content, mode); content None means directory, a str starting with
# "->" means symlink to the rest of the string.
Entry = Tuple[str, Union[bytes, str, None], Optional[int]]


def build_tar_gz(path: Path, entries: Iterable[Entry]) -> Path:
    with tarfile.open(path, "w:gz") as tar:
        for name, content, mode in entries:
            info = tarfile.TarInfo(name)
            if content is None:
                info.type = tarfile.DIRTYPE
                info.mode = mode if mode is not None else 0o755
                tar.addfile(info)
            elif isinstance(content, str) and content.startswith("->"):
                info.type = tarfile.SYMTYPE
                info.linkname = content[2:]
                tar.addfile(info)
            else:
                data = content.encode("utf-8") if isinstance(content, str) else content
                info.size = len(data)
                info.mode = mode if mode is not None else 0o644
                tar.addfile(info, io.BytesIO(data))
    return path


def build_zip(path: Path, entries: Iterable[Entry]) -> Path:
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, content, mode in entries:
            info = zipfile.ZipInfo(name)
            if content is None:
                info.external_attr = ((mode or 0o755) | 0o040000) << 16 | 0x10
                archive.writestr(info, b"")
            else:
                data = content.encode("utf-8") if isinstance(content, str) else content
                info.external_attr = ((mode or 0o644) | 0o100000) << 16
                info.compress_type = zipfile.ZIP_DEFLATED
                archive.writestr(info, data)
    return path


@pytest.fixture
def make_tar_gz(tmp_path):
    def _make(entries: Iterable[Entry], name: str = "template.tar.gz") -> Path:
        return build_tar_gz(tmp_path / name, entries)
    return _make


@pytest.fixture
def make_zip(tmp_path):
    def _make(entries: Iterable[Entry], name: str = "template.zip") -> Path:
        return build_zip(tmp_path / name, entries)
    return _make


@pytest.fixture
def isolated_tmpdir(tmp_path, monkeypatch):
    """Route tempfile into a private directory so leftovers can be inspected."""
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(scratch))
    return scratch


@pytest.fixture
def fixed_umask():
    previous = os.umask(0o022)
    try:
        yield 0o022
    finally:
        os.umask(previous)
