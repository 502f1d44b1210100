"""Checks that every required schema field is present in the store."""
from ..core.base_validator import BaseValidator
from ..core.errors import MissingField


class RequiredValidator(BaseValidator):
    """Reports each required field that has no value in the store."""

    name = "Required"
    description = "Checks that all fields marked as required are present."

    def _validate(self) -> None:
        for field in self.schema.required_fields():
            if field.name not in self.store:
                self.add_error(MissingField(field.name))
