from __future__ import annotations

import os
import stat
import zipfile

import pytest

from goinit.common.errors import FileOperationError, PathTraversalError, UnsupportedFormatError
from goinit.core import extractor
from goinit.core.extractor import extract, extract_into, extracted_archive, strip_root_directory
from goinit.core.formats import ArchiveFormat
from goinit.core.materializer import materialize


def test_tar_gz_single_wrapping_directory_is_stripped(make_tar_gz, isolated_tmpdir):
    archive = make_tar_gz([
        ("proj-v1/", None, None),
        ("proj-v1/file.txt", b"hello", None),
    ])

    extraction = extract(archive, ArchiveFormat.TAR_GZ)

    assert extraction.root == extraction.working_dir / "proj-v1"
    assert extraction.root.name == "proj-v1"
    assert sorted(p.name for p in extraction.root.iterdir()) == ["file.txt"]
    assert (extraction.root / "file.txt").read_bytes() == b"hello"


def test_tar_gz_two_top_level_entries_keep_raw_directory(make_tar_gz, isolated_tmpdir):
    archive = make_tar_gz([
        ("proj-v1/", None, None),
        ("proj-v1/file.txt", b"hello", None),
        ("LICENSE", b"MIT", None),
    ])

    extraction = extract(archive, "tar.gz")

    assert extraction.root == extraction.working_dir
    assert sorted(p.name for p in extraction.root.iterdir()) == ["LICENSE", "proj-v1"]


def test_single_top_level_file_is_not_stripped(make_zip, isolated_tmpdir):
    archive = make_zip([("README.md", b"# readme", None)])

    extraction = extract(archive, ArchiveFormat.ZIP)

    assert extraction.root == extraction.working_dir


def test_tar_gz_creates_missing_parent_directories(make_tar_gz, isolated_tmpdir):
    archive = make_tar_gz([("a/b/c/deep.txt", b"deep", None)])

    extraction = extract(archive, ArchiveFormat.TAR_GZ)

    assert (extraction.root / "b" / "c" / "deep.txt").read_bytes() == b"deep"


def test_tar_gz_traversal_entry_aborts_without_escaping(make_tar_gz, isolated_tmpdir):
    archive = make_tar_gz([
        ("proj/", None, None),
        ("proj/ok.txt", b"ok", None),
        ("../evil.txt", b"pwned", None),
        ("proj/after.txt", b"never", None),
    ])

    with pytest.raises(PathTraversalError) as excinfo:
        extract(archive, ArchiveFormat.TAR_GZ)

    assert excinfo.value.entry_name == "../evil.txt"
    assert not (isolated_tmpdir / "evil.txt").exists()
    assert not (isolated_tmpdir.parent / "evil.txt").exists()
    # The working directory is discarded on failure.
    assert list(isolated_tmpdir.iterdir()) == []


def test_tar_gz_absolute_entry_is_rejected(make_tar_gz, tmp_path):
    target = tmp_path / "absolute.txt"
    archive = make_tar_gz([(str(target), b"pwned", None)])
    workdir = tmp_path / "work"
    workdir.mkdir()

    with pytest.raises(PathTraversalError):
        extract_into(archive, ArchiveFormat.TAR_GZ, workdir)

    assert not target.exists()


def test_traversal_stops_processing_remaining_entries(make_tar_gz, tmp_path):
    archive = make_tar_gz([
        ("first.txt", b"1", None),
        ("../escape.txt", b"x", None),
        ("second.txt", b"2", None),
    ])
    workdir = tmp_path / "work"
    workdir.mkdir()

    with pytest.raises(PathTraversalError):
        extract_into(archive, ArchiveFormat.TAR_GZ, workdir)

    assert (workdir / "first.txt").exists()
    assert not (workdir / "second.txt").exists()


def test_zip_traversal_entry_aborts(make_zip, tmp_path):
    archive = make_zip([
        ("ok.txt", b"ok", None),
        ("nested/../../evil.txt", b"pwned", None),
    ])
    workdir = tmp_path / "work"
    workdir.mkdir()

    with pytest.raises(PathTraversalError):
        extract_into(archive, ArchiveFormat.ZIP, workdir)

    assert not (tmp_path / "evil.txt").exists()


def test_tar_gz_skips_symlinks(make_tar_gz, isolated_tmpdir):
    archive = make_tar_gz([
        ("proj/", None, None),
        ("proj/real.txt", b"data", None),
        ("proj/link.txt", "->real.txt", None),
    ])

    extraction = extract(archive, ArchiveFormat.TAR_GZ)

    assert (extraction.root / "real.txt").exists()
    assert not os.path.lexists(extraction.root / "link.txt")


def test_zip_extracts_directories_and_files(make_zip, isolated_tmpdir):
    archive = make_zip([
        ("repo-main/", None, None),
        ("repo-main/cmd/", None, None),
        ("repo-main/cmd/main.go", b"package main\n", None),
        ("repo-main/go.mod", b"module x\n", None),
    ])

    extraction = extract(archive, ArchiveFormat.ZIP)

    assert extraction.root.name == "repo-main"
    assert (extraction.root / "cmd").is_dir()
    assert (extraction.root / "cmd" / "main.go").read_bytes() == b"package main\n"
    assert (extraction.root / "go.mod").read_bytes() == b"module x\n"


def test_tar_gz_applies_stored_mode_but_zip_does_not(make_tar_gz, make_zip, tmp_path, fixed_umask):
    tar_archive = make_tar_gz([("run.sh", b"#!/bin/sh\necho hi\n", 0o755)])
    zip_archive = make_zip([("run.sh", b"#!/bin/sh\necho hi\n", 0o755)])
    assert (zipfile.ZipFile(zip_archive).getinfo("run.sh").external_attr >> 16) & 0o777 == 0o755

    tar_dir = tmp_path / "tar"
    zip_dir = tmp_path / "zip"
    tar_dir.mkdir()
    zip_dir.mkdir()
    extract_into(tar_archive, ArchiveFormat.TAR_GZ, tar_dir)
    extract_into(zip_archive, ArchiveFormat.ZIP, zip_dir)

    assert stat.S_IMODE((tar_dir / "run.sh").stat().st_mode) == 0o755
    assert stat.S_IMODE((zip_dir / "run.sh").stat().st_mode) == 0o644


def test_tar_special_mode_bits_are_dropped(make_tar_gz, tmp_path, fixed_umask):
    archive = make_tar_gz([
        ("run.sh", b"#!/bin/sh\necho hi\n", 0o4755),
        ("share.sh", b"#!/bin/sh\n", 0o2750),
    ])
    work_dir = tmp_path / "work"
    work_dir.mkdir()

    root = extract_into(archive, ArchiveFormat.TAR_GZ, work_dir)

    assert stat.S_IMODE((root / "run.sh").stat().st_mode) == 0o755
    assert stat.S_IMODE((root / "share.sh").stat().st_mode) == 0o750

    dest = tmp_path / "project"
    dest.mkdir()
    materialize(root, dest, "{{MODULE}}", "example.com/app")

    assert stat.S_IMODE((dest / "run.sh").stat().st_mode) == 0o755
    assert stat.S_IMODE((dest / "share.sh").stat().st_mode) == 0o750


def test_unsupported_format_fails_before_any_io(tmp_path, monkeypatch):
    calls = []
    monkeypatch.setattr(extractor.tempfile, "mkdtemp", lambda **kwargs: calls.append(kwargs))

    with pytest.raises(UnsupportedFormatError, match="rar"):
        extract(tmp_path / "missing.rar", "rar")

    assert calls == []


def test_corrupt_archive_raises_file_operation_error(tmp_path, isolated_tmpdir):
    archive = tmp_path / "broken.tar.gz"
    archive.write_bytes(b"definitely not gzip data")

    with pytest.raises(FileOperationError):
        extract(archive, ArchiveFormat.TAR_GZ)

    assert list(isolated_tmpdir.iterdir()) == []


def test_corrupt_zip_raises_file_operation_error(tmp_path, isolated_tmpdir):
    archive = tmp_path / "broken.zip"
    archive.write_bytes(b"PK but not really")

    with pytest.raises(FileOperationError, match="broken.zip"):
        extract(archive, ArchiveFormat.ZIP)


def test_missing_archive_raises_file_operation_error(tmp_path, isolated_tmpdir):
    with pytest.raises(FileOperationError):
        extract(tmp_path / "nope.tar.gz", ArchiveFormat.TAR_GZ)


def test_extracted_archive_removes_working_directory(make_tar_gz, isolated_tmpdir):
    archive = make_tar_gz([("proj/", None, None), ("proj/a.txt", b"a", None)])

    with extracted_archive(archive, ArchiveFormat.TAR_GZ) as root:
        assert (root / "a.txt").exists()
        assert root.name == "proj"

    assert list(isolated_tmpdir.iterdir()) == []


def test_extracted_archive_cleans_up_when_block_raises(make_tar_gz, isolated_tmpdir):
    archive = make_tar_gz([("a.txt", b"a", None)])

    with pytest.raises(RuntimeError):
        with extracted_archive(archive, ArchiveFormat.TAR_GZ):
            raise RuntimeError("boom")

    assert list(isolated_tmpdir.iterdir()) == []


def test_strip_root_directory_rules(tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()
    assert strip_root_directory(empty) == empty

    wrapped = tmp_path / "wrapped"
    (wrapped / "inner").mkdir(parents=True)
    assert strip_root_directory(wrapped) == wrapped / "inner"

    (wrapped / "extra.txt").write_text("x")
    assert strip_root_directory(wrapped) == wrapped
