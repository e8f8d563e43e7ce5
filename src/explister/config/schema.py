"""
Configuration schema for the experiment lister.

Configuration is a type-safe dataclass that can be loaded from and saved
to YAML or JSON. Every field has a default, so a config file only needs to
list what it changes, and command-line flags override file values.

Usage:
    >>> config = load_config("explister.yaml")
    >>> config.format  # Format.TABLE
    >>> config.sort    # 'started'
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from explister.listing.output import Format
from explister.params.sorter import DEFAULT_SORT_KEY
from explister.project.repository import DEFAULT_HEARTBEAT_TIMEOUT

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class ListingConfig:
    """
    Settings for listing experiments.
    """

    repository_dir: str = "."
    """Project directory containing the tracker's metadata/ directory."""

    heartbeat_timeout_seconds: float = DEFAULT_HEARTBEAT_TIMEOUT
    """An experiment without a heartbeat for this long is shown as stopped."""

    format: Format = Format.TABLE
    """Output format: 'table', 'json' or 'quiet'."""

    sort: str = DEFAULT_SORT_KEY
    """Sort key, optionally suffixed with '-asc' or '-desc'."""

    filters: List[str] = field(default_factory=list)
    """Filter expressions applied to every listing, e.g. 'status = running'."""

    all_params: bool = False
    """Show all param columns instead of only those that differ."""

    log_level: str = "WARNING"
    """Logging level: DEBUG, INFO, WARNING, ERROR."""

    def __post_init__(self) -> None:
        if self.heartbeat_timeout_seconds <= 0:
            raise ValueError(
                f"heartbeat_timeout_seconds must be > 0, got {self.heartbeat_timeout_seconds}"
            )
        if not self.sort.strip():
            raise ValueError("sort must not be empty")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level}"
            )
        self.log_level = self.log_level.upper()

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict with the format as its string value."""
        data = asdict(self)
        data["format"] = self.format.value
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ListingConfig":
        """
        Create config from a dictionary. Missing keys keep their defaults.

        Raises:
            dacite.DaciteError: If a value has the wrong type.
            ValueError: If a value fails validation.
        """
        from dacite import from_dict, Config as DaciteConfig
        return from_dict(
            data_class=cls,
            data=data or {},
            config=DaciteConfig(cast=[Enum, Path, float]),
        )


# =============================================================================
# Files
# =============================================================================

_SUFFIXES = (".yaml", ".yml", ".json")


def _config_suffix(path: Union[str, Path]) -> str:
    suffix = Path(path).suffix.lower()
    if suffix not in _SUFFIXES:
        raise ValueError(f"Unsupported config format: {path}. Use {', '.join(_SUFFIXES)}")
    return suffix


def load_config(path: Union[str, Path]) -> ListingConfig:
    """
    Read a YAML or JSON config file, chosen by extension.

    An empty YAML file gives the default config.

    Raises:
        ValueError: If the extension is not supported or a value is invalid.
        OSError: If the file cannot be read.
    """
    suffix = _config_suffix(path)
    with open(path) as f:
        data = json.load(f) if suffix == ".json" else yaml.safe_load(f)
    logger.debug(f"Loaded config from {path}")
    return ListingConfig.from_dict(data)


def save_config(config: ListingConfig, path: Union[str, Path]) -> None:
    """Write a config as YAML or JSON, chosen by extension."""
    suffix = _config_suffix(path)
    data = config.to_dict()
    with open(path, "w") as f:
        if suffix == ".json":
            json.dump(data, f, indent=2)
        else:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
