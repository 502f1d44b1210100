"""Exception types and violation records for pysysctl.

Every failure raised by the parser, the hierarchy builder, the schema loader
and the schema validator derives from `SysctlError`, so callers that only
want to know whether a document is usable can catch a single type.
"""
from dataclasses import dataclass
from typing import List, Sequence


class SysctlError(Exception):
    """Base class for all pysysctl errors."""


class ParseError(SysctlError):
    """Raised when a line of configuration text cannot be parsed.

    Attributes:
        line_number (int): The 1-based line number of the offending line.
        message (str): A short description of what is wrong with the line.
    """

    def __init__(self, line_number: int, message: str) -> None:
        self.line_number = line_number
        self.message = message
        super().__init__(f"Parse error at line {line_number}: {message}")


class HierarchyError(SysctlError):
    """Raised when two keys collide while building the nested hierarchy.

    Attributes:
        key (str): The key whose insertion caused the collision.
        conflict (str): The previously inserted key it collides with.
    """

    def __init__(self, key: str, conflict: str) -> None:
        self.key = key
        self.conflict = conflict
        super().__init__(
            f"Key '{key}' conflicts with key '{conflict}': "
            f"a path cannot hold both a value and nested keys"
        )


class SchemaLoadError(SysctlError):
    """Raised when a schema definition cannot be loaded."""


class MalformedSchemaError(SchemaLoadError):
    """Raised when a schema definition has an invalid structure."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Malformed schema: {detail}")


class UnknownTypeError(SchemaLoadError):
    """Raised when a schema field declares an unrecognized type token."""

    def __init__(self, field: str, token: str) -> None:
        self.field = field
        self.token = token
        super().__init__(f"Unknown type '{token}' for field '{field}' in schema")


@dataclass(frozen=True)
class FieldError:
    """A single schema violation found for one field."""

    field: str

    def describe(self) -> str:
        return f"invalid value for key '{self.field}'"

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class MissingField(FieldError):
    """A required field that is absent from the store."""

    def describe(self) -> str:
        return f"required key '{self.field}' is missing"


@dataclass(frozen=True)
class TypeMismatch(FieldError):
    """A field whose value does not parse as its declared type."""

    expected: str
    got: str

    def describe(self) -> str:
        return f"key '{self.field}': expected {self.expected} value, got '{self.got}'"


class ValidationError(SysctlError):
    """Aggregate failure carrying every violation found in one validation pass.

    Attributes:
        errors (List[FieldError]): The violations, in discovery order. Never
            empty.
    """

    def __init__(self, errors: Sequence[FieldError]) -> None:
        if not errors:
            raise ValueError("ValidationError requires at least one violation")
        self.errors: List[FieldError] = list(errors)
        summary = "; ".join(str(e) for e in self.errors)
        super().__init__(f"{len(self.errors)} schema validation error(s): {summary}")
