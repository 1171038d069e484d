"""Glob expansion for include and require directives."""

import glob
from pathlib import Path
from typing import List, Union


# Only these are wildcards; brackets are ordinary path characters.
WILDCARDS = ("*", "?")


def has_glob(path: Union[str, Path]) -> bool:
    """Return True if the path contains a ``*`` or ``?`` wildcard."""
    return any(ch in str(path) for ch in WILDCARDS)


def to_pattern(base: Union[str, Path], path: Union[str, Path]) -> str:
    """
    Build a glob pattern from a base directory and a user-written path.
    
    The base directory is matched literally. In the user part ``*`` and
    ``?`` keep their meaning and ``[`` is escaped. An absolute ``path``
    ignores ``base``.
    """
    literal_path = str(path).replace("[", "[[]")
    if Path(path).is_absolute():
        return literal_path
    return str(Path(glob.escape(str(base))) / literal_path)


def expand_pattern(pattern: Union[str, Path]) -> List[Path]:
    """
    Expand a glob pattern into the concrete paths it matches.
    
    Hidden files are matched only when the pattern names them explicitly,
    and directories are never returned since only files can be read.
    
    Args:
        pattern: Absolute glob pattern, e.g. ``/etc/app/conf.d/*.cfg``.
    
    Returns:
        Matching file paths sorted by name. An empty list when nothing
        matches; that is not an error here.
    """
    matches = glob.glob(str(pattern))
    
    files: List[Path] = []
    for match in sorted(matches):
        path = Path(match)
        if path.is_dir():
            continue
        files.append(path)
    
    return files
