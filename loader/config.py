"""Loader settings.

The separator set and the text encoding are chosen by whoever constructs
the loader; the core only consumes them.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LoaderConfig:
    """Settings shared by the resolver, the parser and the driver."""
    
    # Any of these characters splits an option line; the first one found wins.
    separators: str = "=:"
    encoding: str = "utf-8"
    # When a glob pattern matches nothing, enqueue the literal pattern path
    # instead of nothing at all.
    unmatched_glob_literal: bool = False
    
    def __post_init__(self):
        if not self.separators:
            raise ValueError("separators must not be empty")


DEFAULT_CONFIG = LoaderConfig()
