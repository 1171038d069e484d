"""In-memory configuration store."""

from .model import (
    DEFAULT_SECTION,
    ConfigStore,
    StoreError,
    NoSectionError,
    NoOptionError,
    InterpolationMissingOptionError,
    InterpolationDepthError,
)

__all__ = [
    "DEFAULT_SECTION",
    "ConfigStore",
    "StoreError",
    "NoSectionError",
    "NoOptionError",
    "InterpolationMissingOptionError",
    "InterpolationDepthError",
]
