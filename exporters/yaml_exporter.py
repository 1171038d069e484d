"""YAML exporter for loaded configuration."""

from typing import Any, Dict, Optional

import yaml

from store.model import ConfigStore


class _BlockDumper(yaml.SafeDumper):
    """SafeDumper that writes multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    if "\n" in value:
        return dumper.represent_scalar("tag:yaml.org,2002:str", value, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", value)


_BlockDumper.add_representer(str, _represent_str)


def to_yaml(
    store: ConfigStore,
    expand: bool = False,
    section: Optional[str] = None,
) -> str:
    """
    Convert a configuration store to YAML.
    
    Multi-line values come out as YAML block scalars, which keeps
    continuation-line values readable.
    
    Args:
        store: The store to export.
        expand: If True, interpolate ``%(name)s`` references in values.
        section: Export only this section, as a flat mapping.
    
    Returns:
        YAML document of ``{section: {option: value}}``.
    """
    data: Dict[str, Any] = store.to_dict(expand=expand)
    if section is not None:
        data = dict(store.items(section, raw=not expand))
    
    return yaml.dump(
        data,
        Dumper=_BlockDumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
