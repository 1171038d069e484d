"""JSON exporter for loaded configuration (machine-friendly format)."""

import json
from typing import Any, Dict, Optional

from store.model import ConfigStore


def to_json(
    store: ConfigStore,
    indent: int = 2,
    expand: bool = False,
    section: Optional[str] = None,
) -> str:
    """
    Convert a configuration store to JSON format.
    
    Args:
        store: The store to export.
        indent: JSON indentation level.
        expand: If True, interpolate ``%(name)s`` references in values.
        section: Export only this section, as a flat object.
    
    Returns:
        JSON string of ``{section: {option: value}}``.
    """
    data: Dict[str, Any] = store.to_dict(expand=expand)
    if section is not None:
        data = dict(store.items(section, raw=not expand))
    
    return json.dumps(data, indent=indent, ensure_ascii=False)
