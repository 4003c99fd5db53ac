"""goinit - project scaffolding from template archives.

Provides:
* Safe `tar.gz` / `zip` template extraction with root stripping
* Template materialization with module placeholder replacement
* A bundled architecture table and the `goinit` CLI

The CLI is the primary interface; the helpers exported here can be used to
drive the same pipeline programmatically.
"""

from ._version import __version__
from .common.config import Boilerplate, GoinitSettings, TemplateRegistry  # noqa: F401
from .common.logging_config import configure_logging  # noqa: F401
from .core.extractor import extract, extracted_archive  # noqa: F401
from .core.formats import ArchiveFormat, detect_archive_format  # noqa: F401
from .core.materializer import materialize  # noqa: F401
from .core.pipeline import create_project  # noqa: F401

__all__ = [
	"__version__",
	"Boilerplate",
	"GoinitSettings",
	"TemplateRegistry",
	"configure_logging",
	"extract",
	"extracted_archive",
	"ArchiveFormat",
	"detect_archive_format",
	"materialize",
	"create_project",
]
