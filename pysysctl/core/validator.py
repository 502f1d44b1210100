"""Runs the schema validation pipeline for pysysctl.

Validation checks a parsed store against a schema and collects every
violation before reporting:
1.  Required fields missing from the store, in schema order.
2.  Values that do not parse as their declared type, in schema order.

Keys present in the store but not declared in the schema are ignored.
"""

import logging
from typing import List

from .errors import FieldError, ValidationError
from .schema import Schema
from .store import ConfigStore
from .. import validators as validators_package

# Initialize a logger for this module.
logger = logging.getLogger(__name__)


def collect_errors(store: ConfigStore, schema: Schema) -> List[FieldError]:
    """Runs all schema checks and returns their combined findings.

    Args:
        store (ConfigStore): The parsed settings.
        schema (Schema): The field declarations to check against.

    Returns:
        List[FieldError]: Every violation found, possibly empty.
    """
    errors: List[FieldError] = []
    for validator_cls in validators_package.VALIDATORS:
        found = validator_cls(store, schema).validate()
        logger.debug(f"{validator_cls.name} check found {len(found)} violation(s).")
        errors.extend(found)
    return errors


def validate(store: ConfigStore, schema: Schema) -> None:
    """Validates a store against a schema.

    Args:
        store (ConfigStore): The parsed settings.
        schema (Schema): The field declarations to check against.

    Raises:
        ValidationError: If any violation was found. The error carries all of
            them, not just the first.
    """
    logger.info(f"Validating {len(store)} setting(s) against {len(schema)} schema field(s).")
    errors = collect_errors(store, schema)
    if errors:
        raise ValidationError(errors)
