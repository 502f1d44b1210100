"""Schema checks run by the validation engine.

Each module in this package contains a class that inherits from
`pysysctl.core.base_validator.BaseValidator`. `VALIDATORS` fixes the order in
which the engine runs them: missing required fields are reported before type
mismatches.
"""
from .required_validator import RequiredValidator
from .type_validator import TypeValidator, coerce_value

VALIDATORS = [RequiredValidator, TypeValidator]

__all__ = ["RequiredValidator", "TypeValidator", "VALIDATORS", "coerce_value"]
