"""Exporters for rendering a loaded configuration or its include graph."""

from .ini_exporter import to_ini
from .ascii_exporter import to_ascii
from .json_exporter import to_json
from .yaml_exporter import to_yaml

__all__ = ["to_ini", "to_ascii", "to_json", "to_yaml"]
