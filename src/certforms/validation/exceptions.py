"""Validation exceptions.

Rule violations are reported as data in a ValidationResult. The exceptions
here cover configuration mistakes and the opt-in submit boundary.
"""

from typing import Mapping


class CertformsError(Exception):
    """Base class for certforms errors."""


class FrozenValidatorError(CertformsError):
    """Raised when a rule is added to a frozen validator."""


class UnknownValidatorError(CertformsError, KeyError):
    """Raised when the catalog has no validator under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"No validator named {self.name!r}"


class FormValidationError(CertformsError):
    """Raised by FormValidator.ensure_valid() when a form has errors."""

    def __init__(self, errors: Mapping[str, list[str]]):
        self.errors = {name: list(messages) for name, messages in errors.items()}
        count = sum(len(messages) for messages in self.errors.values())
        msg = f"Form validation failed with {count} error(s) in {len(self.errors)} field(s)"
        super().__init__(msg)

    def __str__(self) -> str:
        if not self.errors:
            return "FormValidationError(no errors)"
        lines = [f"FormValidationError({len(self.errors)} fields):"]
        for name, messages in self.errors.items():
            for message in messages:
                lines.append(f"  [{name}] {message}")
        return "\n".join(lines)
