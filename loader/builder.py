"""Driver that loads a root file and everything it includes into a store."""

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from store.model import DEFAULT_SECTION, ConfigStore
from .config import DEFAULT_CONFIG, LoaderConfig
from .errors import RequiredFileMissing, ScannerError
from .parser import LineParser
from .resolver import FileEntry, FileResolver


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_file(entry: FileEntry, parser: LineParser, config: LoaderConfig = DEFAULT_CONFIG) -> bool:
    """
    Open one queued file and feed it to the parser.
    
    Args:
        entry: The worklist entry to read.
        parser: Parser bound to the store and resolver of this load.
        config: Loader settings (the encoding is used here).
    
    Returns:
        True if the file was parsed, False if it was optional and could not
        be opened.
    
    Raises:
        RequiredFileMissing: If a required file cannot be opened.
        ScannerError: If reading fails part way through the file.
        ConfigSyntaxError: If a line cannot be parsed.
    """
    try:
        handle = open(entry.path, "r", encoding=config.encoding)
    except OSError as e:
        if entry.required:
            raise RequiredFileMissing(entry.path, e.strerror or str(e)) from e
        logger.debug("Skipping optional file %s: %s", entry.path, e)
        if parser.resolver is not None:
            parser.resolver.graph.add_skipped(entry.path)
        return False
    
    with handle:
        logger.info("Reading %s", entry.path)
        try:
            parser.parse(handle, source=entry.path)
        except (OSError, UnicodeDecodeError) as e:
            raise ScannerError(entry.path, str(e)) from e
    
    return True


def load_config(
    paths: Union[PathLike, Iterable[PathLike]],
    store: Optional[ConfigStore] = None,
    config: LoaderConfig = DEFAULT_CONFIG,
    resolver: Optional[FileResolver] = None,
) -> ConfigStore:
    """
    Load configuration files and everything they include.
    
    The first path is the root: relative directives anywhere in the tree
    resolve against its directory. Every path given here is required.
    Files are read pass after pass until a pass finds nothing unread, so
    directives discovered in included files are followed too.
    
    Args:
        paths: One path or several; each may be a glob pattern.
        store: Store to fill; a new one is created when omitted. It is
            only written to once every file has loaded.
        config: Loader settings.
        resolver: Worklist to use. Pass one in to inspect the files that
            were loaded afterwards.
    
    Returns:
        The populated store. On any error nothing is returned; the caller
        gets the exception instead.
    """
    if isinstance(paths, (str, Path)):
        paths = [paths]
    if resolver is None:
        resolver = FileResolver(config)
    
    for path in paths:
        resolver.require(path)
    
    # Parse into a scratch store so a failed load leaves the caller's untouched.
    loaded = ConfigStore(store.default_section if store is not None else DEFAULT_SECTION)
    parser = LineParser(loaded, resolver, config)
    passes = resolver.drain(lambda entry: read_file(entry, parser, config))
    logger.debug("Loaded %d file(s) in %d pass(es)", len(resolver), passes)
    
    if store is None:
        return loaded
    store.update(loaded)
    return store


def read(
    path: PathLike,
    separators: str = DEFAULT_CONFIG.separators,
    encoding: str = DEFAULT_CONFIG.encoding,
    unmatched_glob_literal: bool = DEFAULT_CONFIG.unmatched_glob_literal,
) -> ConfigStore:
    """Read a configuration file with explicit settings."""
    config = LoaderConfig(
        separators=separators,
        encoding=encoding,
        unmatched_glob_literal=unmatched_glob_literal,
    )
    return load_config(path, config=config)


def read_default(path: PathLike) -> ConfigStore:
    """Read a configuration file with default settings."""
    return load_config(path)
