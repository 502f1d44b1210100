"""Declarative type schemas for configuration stores.

A schema is loaded from a document with a top-level `schema` mapping::

    schema:
      net.ipv4.ip_forward:
        type: bool
        required: true
        description: Enable IPv4 forwarding
      vm.swappiness:
        type: int

Each field declares one of four primitive types. Loading stops at the first
bad entry. Once loaded, a `Schema` is read-only.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from ..utils.sources import DocumentError, load_document, load_document_text
from .errors import MalformedSchemaError, UnknownTypeError

logger = logging.getLogger(__name__)


class FieldType(Enum):
    """The primitive types a schema field can declare."""

    STRING = "string"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"

    @classmethod
    def from_token(cls, field: str, token: str) -> "FieldType":
        """Resolves a case-insensitive type token.

        Raises:
            UnknownTypeError: If the token names no known type.
        """
        try:
            return cls(token.strip().lower())
        except ValueError:
            raise UnknownTypeError(field, token) from None


@dataclass(frozen=True)
class SchemaField:
    """A single field declaration within a schema."""

    name: str
    type: FieldType
    required: bool = False
    description: Optional[str] = None


class Schema:
    """An ordered, immutable set of field declarations keyed by name."""

    def __init__(self, fields: List[SchemaField]) -> None:
        by_name: Dict[str, SchemaField] = {}
        for field in fields:
            if field.name in by_name:
                raise MalformedSchemaError(f"duplicate field '{field.name}'")
            by_name[field.name] = field
        self._fields = MappingProxyType(by_name)

    @classmethod
    def from_mapping(cls, source: Any) -> "Schema":
        return load_schema(source)

    @classmethod
    def from_text(cls, text: str, fmt: str = "yaml") -> "Schema":
        """Loads a schema from document text in the given format."""
        try:
            data = load_document_text(text, fmt)
        except DocumentError as e:
            raise MalformedSchemaError(str(e)) from e
        return load_schema(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Schema":
        """Loads a schema from a YAML, JSON or TOML file.

        Raises:
            OSError: If the file cannot be read.
            SchemaLoadError: If the document is not a valid schema.
        """
        logger.info(f"Loading schema from {path}")
        try:
            data = load_document(path)
        except DocumentError as e:
            raise MalformedSchemaError(str(e)) from e
        return load_schema(data)

    @property
    def fields(self) -> Mapping[str, SchemaField]:
        return self._fields

    def get(self, name: str) -> Optional[SchemaField]:
        return self._fields.get(name)

    def required_fields(self) -> List[SchemaField]:
        return [f for f in self._fields.values() if f.required]

    def __iter__(self) -> Iterator[SchemaField]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __repr__(self) -> str:
        return f"Schema({list(self._fields)})"


def _load_field(name: Any, entry: Any) -> SchemaField:
    if not isinstance(name, str) or not name.strip():
        raise MalformedSchemaError(f"field names must be non-empty strings, got {name!r}")
    if not isinstance(entry, dict):
        raise MalformedSchemaError(f"field '{name}' must be a mapping")
    if "type" not in entry:
        raise MalformedSchemaError(f"field '{name}' has no 'type'")

    token = entry["type"]
    if not isinstance(token, str):
        raise MalformedSchemaError(f"field '{name}' has a non-string 'type': {token!r}")

    required = entry.get("required", False)
    if not isinstance(required, bool):
        raise MalformedSchemaError(f"field '{name}' has a non-boolean 'required': {required!r}")

    description = entry.get("description")
    if description is not None and not isinstance(description, str):
        raise MalformedSchemaError(f"field '{name}' has a non-string 'description'")

    return SchemaField(
        name=name,
        type=FieldType.from_token(name, token),
        required=required,
        description=description,
    )


def load_schema(source: Any) -> Schema:
    """Builds a `Schema` from a decoded schema document.

    Args:
        source (Any): A mapping with a top-level `schema` mapping of field
            name to `{type, required, description}`.

    Returns:
        Schema: The fields in declaration order.

    Raises:
        MalformedSchemaError: If the document structure is invalid.
        UnknownTypeError: If a field declares an unrecognized type.
    """
    if not isinstance(source, dict):
        raise MalformedSchemaError("schema document must be a mapping")
    if "schema" not in source:
        raise MalformedSchemaError("missing top-level 'schema' mapping")
    entries = source["schema"]
    if not isinstance(entries, dict):
        raise MalformedSchemaError("top-level 'schema' must be a mapping")

    fields = [_load_field(name, entry) for name, entry in entries.items()]
    logger.debug(f"Loaded schema with {len(fields)} field(s).")
    return Schema(fields)
