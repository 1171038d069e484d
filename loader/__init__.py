"""Loader module for resolving included files and parsing their lines."""

from .config import LoaderConfig, DEFAULT_CONFIG
from .errors import (
    ConfigLoadError,
    ConfigSyntaxError,
    FilesystemError,
    RequiredFileMissing,
    ScannerError,
)
from .resolver import FileEntry, FileResolver
from .parser import LineParser, strip_comments, match_directive
from .builder import load_config, read, read_default

__all__ = [
    "LoaderConfig",
    "DEFAULT_CONFIG",
    "ConfigLoadError",
    "ConfigSyntaxError",
    "FilesystemError",
    "RequiredFileMissing",
    "ScannerError",
    "FileEntry",
    "FileResolver",
    "LineParser",
    "strip_comments",
    "match_directive",
    "load_config",
    "read",
    "read_default",
]
