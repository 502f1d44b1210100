"""Renders configuration hierarchies as JSON or YAML text.

Keys keep their insertion order in both formats so that output is stable
from one run to the next.
"""
import json
from typing import Any, Dict

import yaml

OUTPUT_FORMATS = ("json", "yaml")


def render(tree: Dict[str, Any], fmt: str = "json", indent: int = 2) -> str:
    """Serializes a hierarchy in the requested format.

    Args:
        tree (Dict[str, Any]): The nested mapping to render.
        fmt (str): "json" or "yaml".
        indent (int): Indentation width.

    Returns:
        str: The rendered document, without a trailing newline.

    Raises:
        ValueError: If `fmt` is not a supported format.
    """
    if fmt == "json":
        return json.dumps(tree, indent=indent, ensure_ascii=False)
    if fmt == "yaml":
        return yaml.safe_dump(
            tree, indent=indent, sort_keys=False, default_flow_style=False, allow_unicode=True
        ).rstrip("\n")
    raise ValueError(f"Unsupported output format: {fmt}")
