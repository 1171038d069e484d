"""INI exporter: writes a merged store back out as a single file."""

import re
from typing import List, Optional

from store.model import ConfigStore


_MARKER = re.compile(r"([;#])")


def escape(text: str) -> str:
    """Backslash-escape comment markers so the parser keeps them as text."""
    return _MARKER.sub(r"\\\1", text)


def to_ini(
    store: ConfigStore,
    delimiter: str = " = ",
    section: Optional[str] = None,
) -> str:
    """
    Render a store as INI text that the loader can read back.
    
    Multi-line values are written as tab-indented continuation lines.
    Every ``;`` and ``#`` in option names and values is escaped, quoted
    or not. The default section is written first and only when it holds
    options.
    
    Args:
        store: The store to export.
        delimiter: Text placed between option and value.
        section: Render only this section.
    """
    names = [section] if section is not None else store.sections()
    
    blocks: List[str] = []
    for name in names:
        items = store.raw_items(name)
        if name == store.default_section and not items:
            continue
        
        lines = [f"[{name or store.default_section}]"]
        for option, value in items:
            first, *rest = escape(value).split("\n")
            lines.append(f"{escape(option)}{delimiter}{first}")
            lines.extend(f"\t{part}" for part in rest)
        blocks.append("\n".join(lines))
    
    return "\n\n".join(blocks) + ("\n" if blocks else "")
