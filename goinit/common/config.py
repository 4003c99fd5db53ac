"""Configuration for goinit.

Two layers:
* `GoinitSettings` resolves environment overrides (config path, download
  timeout)
* `TemplateRegistry` loads the architecture table (bundled `data/goinit.json`
  by default) and looks boilerplates up by architecture key
"""

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .constants import DEFAULT_CONFIG_PATH, DEFAULT_DOWNLOAD_TIMEOUT
from .errors import ConfigError, UnknownArchitectureError
from .logging_config import get_logger


class GoinitSettings:
    """Resolve environment-backed configuration for goinit."""

    def __init__(self, environ: Optional[Mapping] = None) -> None:
        self._environ = environ if environ is not None else os.environ

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._environ.get(key, default)

    def config_path(self) -> str:
        return self.get("GOINIT_CONFIG_PATH") or DEFAULT_CONFIG_PATH

    def download_timeout(self) -> float:
        raw = self.get("GOINIT_DOWNLOAD_TIMEOUT")
        if not raw:
            return DEFAULT_DOWNLOAD_TIMEOUT
        try:
            value = float(raw)
        except ValueError:
            return DEFAULT_DOWNLOAD_TIMEOUT
        return value if value > 0 else DEFAULT_DOWNLOAD_TIMEOUT


@dataclass(frozen=True)
class Boilerplate:
    """A named project template definition."""

    name: str
    description: str
    archive_url: str
    module_placeholder: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        return {
            "name": data["name"],
            "description": data["description"],
            "archiveUrl": data["archive_url"],
            "modulePlaceholder": data["module_placeholder"],
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> 'Boilerplate':
        archive_url = data["archiveUrl"]
        placeholder = data["modulePlaceholder"]
        if not isinstance(archive_url, str) or not archive_url:
            raise ValueError("archiveUrl must be a non-empty string")
        if not isinstance(placeholder, str) or not placeholder:
            raise ValueError("modulePlaceholder must be a non-empty string")
        return cls(
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            archive_url=archive_url,
            module_placeholder=placeholder,
        )


class TemplateRegistry:
    """Architecture table: advertised keys plus their boilerplate records."""

    def __init__(self, available_architectures: List[str], boilerplates: Dict[str, Boilerplate]):
        self.available_architectures = list(available_architectures)
        self.boilerplates = dict(boilerplates)

    @classmethod
    def from_mapping(cls, data: Any) -> 'TemplateRegistry':
        """Build a registry from an already parsed configuration document."""
        if not isinstance(data, Mapping):
            raise ConfigError("configuration must be a JSON object")

        available = data.get("availableArchitectures", [])
        if not isinstance(available, list) or not all(isinstance(a, str) for a in available):
            raise ConfigError("availableArchitectures must be a list of strings")

        raw_boilerplates = data.get("boilerplates", {})
        if not isinstance(raw_boilerplates, Mapping):
            raise ConfigError("boilerplates must be a JSON object")

        boilerplates: Dict[str, Boilerplate] = {}
        for key, record in raw_boilerplates.items():
            if not isinstance(record, Mapping):
                raise ConfigError(f"boilerplate '{key}' must be a JSON object")
            try:
                boilerplates[key] = Boilerplate.from_dict(record)
            except (KeyError, ValueError) as e:
                raise ConfigError(f"boilerplate '{key}' is invalid: {e}") from e

        return cls(available, boilerplates)

    @classmethod
    def load(cls, source: Union[str, Path, bytes, None] = None,
             settings: Optional[GoinitSettings] = None) -> 'TemplateRegistry':
        """
        Load the architecture table.

        Args:
            source: Path to a JSON file, or raw JSON bytes. Defaults to the path
                resolved by `settings` (bundled table unless overridden).
            settings: Settings used when `source` is omitted

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        log = get_logger(__name__)
        if source is None:
            source = (settings or GoinitSettings()).config_path()

        if isinstance(source, bytes):
            raw = source
            origin = "<bytes>"
        else:
            origin = str(source)
            try:
                raw = Path(source).read_bytes()
            except OSError as e:
                raise ConfigError(f"failed to read configuration {origin}: {e}") from e

        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ConfigError(f"failed to parse config {origin}: {e}") from e

        registry = cls.from_mapping(data)
        log.debug("Loaded %d architectures from %s", len(registry.available_architectures), origin)
        return registry

    def validate_architecture(self, architecture: str) -> None:
        """Ensure the architecture is one of the advertised keys."""
        if architecture not in self.available_architectures:
            available = ", ".join(self.available_architectures) or "none"
            raise UnknownArchitectureError(
                architecture,
                f"architecture '{architecture}' is not available. Available architectures: {available}",
            )

    def get_boilerplate(self, architecture: str) -> Boilerplate:
        """Look a boilerplate up by architecture key."""
        boilerplate = self.boilerplates.get(architecture)
        if boilerplate is None:
            raise UnknownArchitectureError(
                architecture,
                f"architecture '{architecture}' not found in configuration",
            )
        return boilerplate

    def resolve(self, architecture: str) -> Boilerplate:
        """Validate an architecture key and return its boilerplate."""
        self.validate_architecture(architecture)
        return self.get_boilerplate(architecture)
