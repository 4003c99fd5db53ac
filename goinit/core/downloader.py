"""Template archive download helpers."""

from __future__ import annotations

import http.client
import os
import shutil
import tempfile
import urllib.error
import urllib.request
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from goinit.common.constants import DEFAULT_DOWNLOAD_TIMEOUT, DOWNLOAD_CHUNK_SIZE, TEMP_PREFIX
from goinit.common.errors import DownloadError, FileOperationError
from goinit.common.logging_config import get_logger

from .formats import ArchiveFormat, detect_archive_format

_log = get_logger(__name__)


def _discard(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


def download_archive(url: str, archive_format: Union[ArchiveFormat, str, None] = None,
                     timeout: float = DEFAULT_DOWNLOAD_TIMEOUT) -> Path:
    """
    Download an archive into a temporary file and return its path.

    The caller owns the returned file. Any failure removes the partial file.

    Raises:
        DownloadError: On transport errors or a non-200 HTTP status
    """
    fmt = ArchiveFormat.coerce(archive_format) if archive_format else detect_archive_format(url)
    _log.info("Downloading template from %s...", url)

    try:
        fd, tmp_path = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=fmt.suffix)
    except OSError as e:
        raise FileOperationError("create temporary file in", tempfile.gettempdir(), e) from e

    try:
        with os.fdopen(fd, "wb") as handle:
            with urllib.request.urlopen(url, timeout=timeout) as response:  # noqa: S310
                status = getattr(response, "status", None)
                # file:// responses carry no status code.
                if status is not None and status != 200:
                    raise DownloadError(
                        f"failed to download archive: HTTP {status} {getattr(response, 'reason', '')}".rstrip()
                    )
                shutil.copyfileobj(response, handle, DOWNLOAD_CHUNK_SIZE)
            written = handle.tell()
    except urllib.error.HTTPError as e:
        _discard(tmp_path)
        raise DownloadError(f"failed to download archive: HTTP {e.code} {e.reason}") from e
    except (urllib.error.URLError, http.client.HTTPException, TimeoutError, ValueError) as e:
        _discard(tmp_path)
        raise DownloadError(f"failed to download archive: {e}") from e
    except OSError as e:
        _discard(tmp_path)
        raise DownloadError(f"failed to save archive: {e}") from e
    except BaseException:
        _discard(tmp_path)
        raise

    _log.info("Downloaded %d bytes", written)
    return Path(tmp_path)


@contextmanager
def downloaded_archive(url: str, archive_format: Union[ArchiveFormat, str, None] = None,
                       timeout: Optional[float] = None) -> Iterator[Path]:
    """Download an archive and remove the temporary file when the block exits."""
    path = download_archive(url, archive_format, timeout or DEFAULT_DOWNLOAD_TIMEOUT)
    try:
        yield path
    finally:
        _discard(str(path))
