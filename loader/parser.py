"""Line-oriented parser turning configuration text into sections and options."""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from store.model import ConfigStore
from .config import DEFAULT_CONFIG, LoaderConfig
from .errors import ConfigSyntaxError
from .resolver import FileResolver


logger = logging.getLogger(__name__)


COMMENT_MARKERS = (";", "#")

INCLUDE = "include"
REQUIRE = "require"

# A directive owns the whole line; the path is everything after the
# keyword, minus trailing whitespace.
DIRECTIVE_PATTERNS = (
    (INCLUDE, re.compile(r"^#include\s+(.+?)\s*$")),
    (REQUIRE, re.compile(r"^#require\s+(.+?)\s*$")),
)


def strip_comments(line: str) -> str:
    """
    Remove a trailing comment from a raw line.
    
    The first ``;`` or ``#`` that is not inside double quotes and not
    escaped with a backslash starts the comment. An escaped marker, quoted
    or not, is kept as the bare marker. A marker in the first column is
    left alone; the caller classifies those lines.
    
    Args:
        line: A single line without its newline.
    
    Returns:
        The line up to (not including) the comment.
    """
    if "\\" not in line and not any(m in line[1:] for m in COMMENT_MARKERS):
        return line
    
    out: List[str] = []
    quoted = False
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\" and i + 1 < len(line) and line[i + 1] in COMMENT_MARKERS:
            out.append(line[i + 1])
            i += 2
            continue
        if ch == '"':
            quoted = not quoted
        elif ch in COMMENT_MARKERS and not quoted and i > 0:
            break
        out.append(ch)
        i += 1
    
    return "".join(out)


def match_directive(line: str) -> Optional[Tuple[str, str]]:
    """
    Recognize a loader directive.
    
    Returns:
        ``(kind, path)`` where kind is ``"include"`` or ``"require"``, or
        None if the line is not a known directive.
    """
    for kind, pattern in DIRECTIVE_PATTERNS:
        match = pattern.match(line)
        if match:
            return kind, match.group(1)
    return None


def find_separator(line: str, separators: str = "=:") -> int:
    """Return the index of the first separator character in line, or -1."""
    positions = [pos for pos in (line.find(sep) for sep in separators) if pos >= 0]
    return min(positions) if positions else -1


class LineParser:
    """
    Feeds the lines of one file into a store.
    
    Section headers, option lines and continuation lines go to the store;
    ``#include`` and ``#require`` directives go to the resolver, when one is
    attached, and are always recorded in ``directives``.
    
    State (current section, open option) lives for one call to ``parse``.
    """
    
    def __init__(
        self,
        store: ConfigStore,
        resolver: Optional[FileResolver] = None,
        config: LoaderConfig = DEFAULT_CONFIG,
    ):
        self.store = store
        self.resolver = resolver
        self.config = config
        self.directives: List[Tuple[str, str]] = []
        self._reset()
    
    def _reset(self) -> None:
        self.section = ""
        self.option = ""
        self.source: Optional[Path] = None
        self.lineno = 0
    
    def parse(self, lines: Iterable[str], source: Optional[Union[str, Path]] = None) -> None:
        """
        Parse an iterable of lines, e.g. an open file.
        
        Args:
            lines: Lines with or without trailing newlines.
            source: File the lines came from, used in error messages and as
                the referrer for directives.
        
        Raises:
            ConfigSyntaxError: On the first line that cannot be classified.
        """
        self._reset()
        self.source = Path(source) if source is not None else None
        for lineno, raw in enumerate(lines, start=1):
            self.lineno = lineno
            self.parse_line(raw)
    
    def parse_string(self, text: str, source: Optional[Union[str, Path]] = None) -> None:
        """Parse a whole document held in a string."""
        self.parse(text.splitlines(), source)
    
    def parse_line(self, raw: str) -> None:
        """Classify one line and apply it."""
        line = strip_comments(raw.rstrip("\r\n")).rstrip()
        
        if not line or line[0] == ";":
            return
        
        if line[0] == "#":
            self._directive(line)
            return
        
        if line[0] == "[" and line[-1] == "]":
            self.option = ""
            self.section = line[1:-1].strip()
            self.store.add_section(self.section)
            return
        
        indented = line[0] in " \t"
        
        if indented and self.option:
            prev = self.store.get_raw_option(self.section, self.option) or ""
            self.store.add_option(self.section, self.option, prev + "\n" + line.strip())
            return
        
        i = find_separator(line, self.config.separators)
        if i > 0 and not indented:
            self.option = line[:i].strip()
            self.store.add_option(self.section, self.option, line[i + 1:].strip())
            return
        
        raise ConfigSyntaxError(line, self.source, self.lineno or None)
    
    def _directive(self, line: str) -> None:
        found = match_directive(line)
        if found is None:
            return
        
        kind, path = found
        self.directives.append(found)
        if self.resolver is None:
            logger.debug("No resolver attached, ignoring #%s %s", kind, path)
            return
        self.resolver.enqueue(path, required=(kind == REQUIRE), source=self.source)
