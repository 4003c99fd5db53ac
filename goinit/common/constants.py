"""
Constants and exit codes for goinit.
"""

from pathlib import Path


class ExitCodes:
    """Exit codes for different error conditions."""
    OK = 0
    CONFIG_ERROR = 1
    UNKNOWN_ARCHITECTURE = 2
    INVALID_PROJECT_DIRECTORY = 3
    DOWNLOAD_FAILED = 4
    EXTRACTION_FAILED = 5
    FILE_OPERATION_FAILED = 6
    UNEXPECTED_ERROR = 10


# Bundled architecture table
DEFAULT_CONFIG_PATH = str(Path(__file__).resolve().parent.parent / 'data' / 'goinit.json')

DEFAULT_DOWNLOAD_TIMEOUT = 30
DOWNLOAD_CHUNK_SIZE = 1024 * 1024

# Binary detection
BINARY_SAMPLE_SIZE = 512
BINARY_CONTROL_RATIO = 0.1

DEFAULT_DIR_MODE = 0o755
# setuid, setgid and sticky bits are never carried over
PERMISSION_BITS = 0o777

TEMP_PREFIX = 'goinit-'
EXTRACT_TEMP_PREFIX = 'goinit-extract-'

DESCRIPTION_WRAP_WIDTH = 70
