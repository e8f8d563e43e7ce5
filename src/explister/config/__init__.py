"""
Configuration module for the experiment lister.

Provides a type-safe, serializable configuration dataclass for listing
defaults (repository location, output format, sort order, filters).
"""

from explister.config.schema import (
    # Configuration classes
    ListingConfig,
    # Constants
    LOG_LEVELS,
    # Functions
    load_config,
    save_config,
)

__all__ = [
    # Configuration classes
    "ListingConfig",
    # Constants
    "LOG_LEVELS",
    # Functions
    "load_config",
    "save_config",
]
