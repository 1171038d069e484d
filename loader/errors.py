"""Errors raised while resolving and parsing configuration files."""

from pathlib import Path
from typing import Optional, Union


class ConfigLoadError(Exception):
    """Base class for every failure that aborts a load."""


class FilesystemError(ConfigLoadError):
    """A path could not be made absolute or a glob pattern could not be expanded."""
    
    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = str(path)
        message = f"cannot resolve path: {self.path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class RequiredFileMissing(ConfigLoadError):
    """A required file (the root, or a ``#require`` target) could not be opened."""
    
    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = str(path)
        message = f"required file cannot be opened: {self.path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ConfigSyntaxError(ConfigLoadError):
    """A line matches none of the recognized forms."""
    
    def __init__(
        self,
        line: str,
        path: Optional[Union[str, Path]] = None,
        lineno: Optional[int] = None,
    ):
        self.line = line
        self.path = str(path) if path is not None else None
        self.lineno = lineno
        
        message = f"could not parse line: {line}"
        if self.path is not None and lineno is not None:
            message = f"{self.path}:{lineno}: {message}"
        elif self.path is not None:
            message = f"{self.path}: {message}"
        super().__init__(message)


class ScannerError(ConfigLoadError):
    """Reading a file failed part way through."""
    
    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = str(path)
        message = f"error reading {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
