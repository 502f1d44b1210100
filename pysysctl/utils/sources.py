"""Reads structured documents (YAML, JSON, TOML) into plain dictionaries.

Schema definitions may be written in any of these formats. The format is
picked from the file suffix, and anything unrecognized is read as YAML, which
also accepts JSON.
"""
import json
from pathlib import Path
from typing import Any, Union

import yaml

try:
    import tomllib  # Available in Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for Python versions < 3.11

FORMAT_BY_SUFFIX = {
    ".yaml": "yaml",
    ".yml": "yaml",
    ".json": "json",
    ".toml": "toml",
}


class DocumentError(ValueError):
    """Raised when a document cannot be decoded in its format."""


def detect_format(path: Union[str, Path]) -> str:
    """Returns the document format implied by a file name's suffix."""
    return FORMAT_BY_SUFFIX.get(Path(path).suffix.lower(), "yaml")


def load_document_text(text: str, fmt: str = "yaml") -> Any:
    """Decodes document text in the given format.

    Args:
        text (str): The raw document text.
        fmt (str): One of "yaml", "json" or "toml".

    Returns:
        Any: The decoded document. An empty YAML document decodes to an empty
        dict.

    Raises:
        DocumentError: If the text is not valid in `fmt`, or `fmt` is unknown.
    """
    try:
        if fmt == "yaml":
            data = yaml.safe_load(text)
            return {} if data is None else data
        if fmt == "json":
            return json.loads(text)
        if fmt == "toml":
            return tomllib.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise DocumentError(f"invalid {fmt.upper()} document: {e}") from e
    raise DocumentError(f"unsupported document format: {fmt}")


def load_document(path: Union[str, Path]) -> Any:
    """Reads and decodes a document file.

    Raises:
        OSError: If the file cannot be read.
        DocumentError: If the contents cannot be decoded.
    """
    doc_path = Path(path)
    try:
        with doc_path.open(encoding="utf-8-sig") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise DocumentError(f"{doc_path} is not valid UTF-8: {e}") from e
    return load_document_text(text, detect_format(doc_path))

