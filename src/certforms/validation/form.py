"""FormValidator - named validators plus the current value of each field.

A form layer calls set_value() on every change and reads get_errors() /
get_warnings() to drive inline feedback. Fields without a registered
validator always pass; values without a field are simply carried along.
"""

import logging
from typing import Any, Iterable, Mapping, Optional, TYPE_CHECKING

from .exceptions import FormValidationError
from .types import ValidationResult
from .validator import Validator

if TYPE_CHECKING:
    from .catalog import ValidatorCatalog

logger = logging.getLogger(__name__)


class FormValidator:
    """Per-field and whole-form validation for one editing session."""

    def __init__(self) -> None:
        self._fields: dict[str, Validator] = {}
        self._values: dict[str, Any] = {}

    @classmethod
    def from_catalog(
        cls,
        names: Iterable[str],
        catalog: Optional["ValidatorCatalog"] = None,
    ) -> "FormValidator":
        """Register catalog validators under their own names.

        Raises UnknownValidatorError for a name the catalog does not have.
        """
        if catalog is None:
            from .catalog import get_catalog
            catalog = get_catalog()
        form = cls()
        for name in names:
            form.add_field(name, catalog[name])
        return form

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self._fields)

    def add_field(self, name: str, validator: Validator) -> "FormValidator":
        self._fields[name] = validator
        return self

    def set_value(self, name: str, value: Any) -> "FormValidator":
        self._values[name] = value
        return self

    def set_values(self, values: Mapping[str, Any]) -> "FormValidator":
        self._values.update(values)
        return self

    def get_value(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def reset(self) -> "FormValidator":
        """Clear all values. Registered validators stay."""
        self._values.clear()
        return self

    def validate_field(self, name: str) -> ValidationResult:
        """Validate one field's current value; unregistered fields pass."""
        validator = self._fields.get(name)
        if validator is None:
            return ValidationResult.ok()

        result = validator.validate(self._values.get(name))
        if not result.is_valid:
            logger.debug("Field %s: %d error(s)", name, len(result.errors))
        return result

    def validate_all(self) -> dict[str, ValidationResult]:
        """Validate every registered field."""
        return {name: self.validate_field(name) for name in self._fields}

    def is_valid(self) -> bool:
        return all(result.is_valid for result in self.validate_all().values())

    def get_errors(self) -> dict[str, list[str]]:
        """Error messages per field; fields without errors are left out."""
        return {
            name: list(result.errors)
            for name, result in self.validate_all().items()
            if result.errors
        }

    def get_warnings(self) -> dict[str, list[str]]:
        """Warning messages per field; fields without warnings are left out."""
        return {
            name: list(result.warnings)
            for name, result in self.validate_all().items()
            if result.warnings
        }

    def ensure_valid(self) -> dict[str, ValidationResult]:
        """Validate everything and raise FormValidationError on any error.

        Meant for the point where a form is submitted.
        """
        results = self.validate_all()
        errors = {
            name: list(result.errors)
            for name, result in results.items()
            if result.errors
        }
        if errors:
            raise FormValidationError(errors)
        return results
