"""Checks that stored values parse as their declared schema types.

Values in a store are always raw strings. Each field type has a parsing rule
that either yields the typed Python value or rejects the string:

-   `string` accepts anything.
-   `bool` accepts `true`/`1`/`on`/`yes` and `false`/`0`/`off`/`no`, in any
    letter case.
-   `int` accepts base-10 integers with an optional leading `-` that fit in a
    signed 64-bit integer.
-   `float` accepts decimal and exponential literals such as `1.5`, `-.5` or
    `2e-3`. Infinities and NaN are rejected.
"""
import re
from typing import Callable, Dict, Union

from ..core.base_validator import BaseValidator
from ..core.errors import TypeMismatch
from ..core.schema import FieldType

TypedValue = Union[str, bool, int, float]

TRUE_VALUES = frozenset({"true", "1", "on", "yes"})
FALSE_VALUES = frozenset({"false", "0", "off", "no"})

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INT_RE = re.compile(r"-?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_string(value: str) -> str:
    return value


def parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def parse_int(value: str) -> int:
    if not _INT_RE.fullmatch(value):
        raise ValueError(f"not a base-10 integer: {value!r}")
    number = int(value)
    if not INT64_MIN <= number <= INT64_MAX:
        raise ValueError(f"integer out of 64-bit range: {value!r}")
    return number


def parse_float(value: str) -> float:
    if not _FLOAT_RE.fullmatch(value):
        raise ValueError(f"not a floating point literal: {value!r}")
    return float(value)


# Every FieldType member has exactly one parsing rule.
PARSERS: Dict[FieldType, Callable[[str], TypedValue]] = {
    FieldType.STRING: parse_string,
    FieldType.BOOL: parse_bool,
    FieldType.INT: parse_int,
    FieldType.FLOAT: parse_float,
}


def coerce_value(value: str, field_type: FieldType) -> TypedValue:
    """Parses a raw string value as the given field type.

    Args:
        value (str): The raw value from the store.
        field_type (FieldType): The declared type.

    Returns:
        TypedValue: The parsed Python value.

    Raises:
        ValueError: If the value does not parse as `field_type`.
    """
    return PARSERS[field_type](value)


class TypeValidator(BaseValidator):
    """Reports each stored value that does not parse as its declared type.

    Fields declared in the schema but absent from the store are skipped, as
    are store keys the schema does not mention.
    """

    name = "Type"
    description = "Checks that values parse as their declared string, bool, int or float type."

    def _validate(self) -> None:
        for field in self.schema:
            value = self.store.get(field.name)
            if value is None:
                continue
            try:
                coerce_value(value, field.type)
            except ValueError:
                self.add_error(TypeMismatch(field.name, expected=field.type.value, got=value))
