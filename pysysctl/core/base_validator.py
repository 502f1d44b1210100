"""
Base validator class that all schema checks inherit from.
"""

from abc import ABC, abstractmethod
from typing import List, TYPE_CHECKING

from .errors import FieldError

if TYPE_CHECKING:
    from .schema import Schema
    from .store import ConfigStore


class BaseValidator(ABC):
    """Abstract base class for all schema checks.

    A check inspects a store against a schema and records every violation it
    finds instead of stopping at the first one. The orchestrator in
    `pysysctl.core.validator` runs a fixed list of checks in order and
    concatenates their findings.

    Attributes:
        name (str): The display name of the check.
        description (str): A brief explanation of what the check enforces.
    """

    name: str = "UnnamedValidator"
    description: str = "No description provided"

    def __init__(self, store: "ConfigStore", schema: "Schema") -> None:
        """Initializes the check with the data it inspects.

        Args:
            store (ConfigStore): The parsed settings to check.
            schema (Schema): The field declarations to check them against.
        """
        self.store = store
        self.schema = schema
        self.errors: List[FieldError] = []

    def validate(self) -> List[FieldError]:
        """Runs the check and returns the violations it found, in order."""
        self._validate()
        return self.errors

    @abstractmethod
    def _validate(self) -> None:
        """Abstract method for implementing the core check logic.

        Subclasses must override this method and report findings through
        `add_error`.
        """
        raise NotImplementedError("Subclasses must implement _validate()")

    def add_error(self, error: FieldError) -> None:
        self.errors.append(error)
