"""pysysctl: a sysctl-style configuration parser.

This package parses `key = value` configuration text into an ordered store,
validates it against declarative type schemas, and renders it as nested
structured data.
"""

from .core.errors import (
    HierarchyError,
    MalformedSchemaError,
    MissingField,
    ParseError,
    SchemaLoadError,
    SysctlError,
    TypeMismatch,
    UnknownTypeError,
    ValidationError,
)
from .core.parser import parse, parse_file, parse_stream
from .core.schema import FieldType, Schema, SchemaField, load_schema
from .core.store import ConfigStore, flatten_hierarchy
from .core.validator import validate

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    "__version__",
    "__license__",
    "ConfigStore",
    "FieldType",
    "HierarchyError",
    "MalformedSchemaError",
    "MissingField",
    "ParseError",
    "Schema",
    "SchemaField",
    "SchemaLoadError",
    "SysctlError",
    "TypeMismatch",
    "UnknownTypeError",
    "ValidationError",
    "flatten_hierarchy",
    "load_schema",
    "parse",
    "parse_file",
    "parse_stream",
    "validate",
]
