"""YAML serialization for note frontmatter."""

from __future__ import annotations

from io import StringIO
from typing import Any

from ruamel.yaml import YAML


def _new_yaml() -> YAML:
    yaml = YAML(typ="safe")
    yaml.default_flow_style = False  # Block style dictionaries and lists.

    # Keep insertion order and drop None values.
    def represent_dict(dumper, data):
        return dumper.represent_dict({k: v for k, v in data.items() if v is not None})

    yaml.representer.add_representer(dict, represent_dict)
    yaml.representer.sort_base_mapping_type_on_output = False
    return yaml


def to_yaml_string(value: Any) -> str:
    """Convert a Python object to a YAML string."""
    stream = StringIO()
    _new_yaml().dump(value, stream)
    return stream.getvalue()
