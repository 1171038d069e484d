"""Worklist of configuration files to read.

Paths are canonicalized before they are queued, and a canonical path is
queued at most once. That is what makes circular includes terminate: the
second reference to a file is a no-op. Relative paths always resolve
against the directory of the root file (the first entry), no matter how
deeply nested the directive that named them.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Union

from graph.model import IncludeGraph
from .config import DEFAULT_CONFIG, LoaderConfig
from .discovery import expand_pattern, has_glob, to_pattern
from .errors import FilesystemError


logger = logging.getLogger(__name__)


@dataclass
class FileEntry:
    """A file that has been queued for reading."""
    
    path: Path
    required: bool
    read: bool = False


class FileResolver:
    """
    Ordered, deduplicated worklist of files for a single load.
    
    Entries are never removed or reordered; they only flip from unread to
    read once their content has been parsed.
    """
    
    def __init__(
        self,
        config: LoaderConfig = DEFAULT_CONFIG,
        graph: Optional[IncludeGraph] = None,
    ):
        self.config = config
        self.graph = graph if graph is not None else IncludeGraph()
        self._entries: List[FileEntry] = []
        self._by_path: Dict[Path, FileEntry] = {}
    
    @property
    def entries(self) -> List[FileEntry]:
        """Return the worklist in insertion order."""
        return list(self._entries)
    
    @property
    def root(self) -> Optional[FileEntry]:
        """Return the root entry, or None before anything was queued."""
        return self._entries[0] if self._entries else None
    
    def base_dir(self) -> Path:
        """Directory that relative references resolve against."""
        if self._entries:
            return self._entries[0].path.parent
        try:
            return Path(os.getcwd())
        except OSError as e:
            raise FilesystemError(".", str(e)) from e
    
    def enqueue(
        self,
        path: Union[str, Path],
        required: bool = False,
        source: Optional[Path] = None,
    ) -> List[FileEntry]:
        """
        Queue every file the path refers to.
        
        Args:
            path: Absolute or relative path, possibly a glob pattern.
            required: If True, failing to open the file aborts the load.
            source: The file whose directive named this path, if any.
        
        Returns:
            Newly added entries. Files that were already queued are skipped,
            whatever their read state.
        
        Raises:
            FilesystemError: If a path cannot be made absolute.
        """
        candidates = self._expand(path)
        
        added: List[FileEntry] = []
        for candidate in candidates:
            if source is not None:
                self.graph.add_edge(source, candidate, required)
            else:
                self.graph.add_node(candidate)
            
            if candidate in self._by_path:
                logger.debug("Already queued: %s", candidate)
                continue
            
            entry = FileEntry(path=candidate, required=required)
            self._entries.append(entry)
            self._by_path[candidate] = entry
            added.append(entry)
            logger.debug("Queued %s (required=%s)", candidate, required)
        
        return added
    
    def include(self, path: Union[str, Path], source: Optional[Path] = None) -> List[FileEntry]:
        """Shorthand for ``enqueue(path, required=False)``."""
        return self.enqueue(path, required=False, source=source)
    
    def require(self, path: Union[str, Path], source: Optional[Path] = None) -> List[FileEntry]:
        """Shorthand for ``enqueue(path, required=True)``."""
        return self.enqueue(path, required=True, source=source)
    
    def drain_pass(self, read_one: Callable[[FileEntry], None]) -> bool:
        """
        Read every entry that is still unread, once.
        
        ``read_one`` may queue more files; those are picked up by the next
        pass. An entry is marked read only after ``read_one`` returns, so an
        exception leaves it unread and propagates.
        
        Returns:
            True if at least one entry was processed.
        """
        processed = False
        for entry in list(self._entries):
            if entry.read:
                continue
            read_one(entry)
            entry.read = True
            processed = True
        return processed
    
    def drain(self, read_one: Callable[[FileEntry], None]) -> int:
        """Run passes until one finds nothing unread. Returns the number of passes that did work."""
        passes = 0
        while self.drain_pass(read_one):
            passes += 1
        return passes
    
    def _expand(self, path: Union[str, Path]) -> List[Path]:
        raw = Path(path)
        base = None
        if not raw.is_absolute():
            base = self.base_dir()
            raw = base / raw
        
        # Only the path as written can hold wildcards, never the root directory.
        if has_glob(path):
            try:
                matches = expand_pattern(to_pattern(base or "/", path))
            except OSError as e:
                raise FilesystemError(raw, str(e)) from e
            if not matches:
                if self.config.unmatched_glob_literal:
                    logger.debug("Pattern %s matched nothing, queueing it literally", raw)
                    matches = [raw]
                else:
                    logger.debug("Pattern %s matched nothing", raw)
            return [self._canonical(match) for match in matches]
        
        return [self._canonical(raw)]
    
    @staticmethod
    def _canonical(path: Path) -> Path:
        try:
            return path.resolve()
        except (OSError, RuntimeError) as e:
            raise FilesystemError(path, str(e)) from e
    
    def __len__(self) -> int:
        return len(self._entries)
    
    def __contains__(self, path: Union[str, Path]) -> bool:
        return Path(path) in self._by_path
    
    def __iter__(self) -> Iterator[FileEntry]:
        return iter(list(self._entries))
