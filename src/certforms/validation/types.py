"""Validation result shared by validators and forms."""

from pydantic import BaseModel, ConfigDict, computed_field


class ValidationResult(BaseModel):
    """Outcome of validating one value.

    Errors block submission, warnings never affect validity. Both keep the
    order in which their rules were registered.
    """

    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def is_valid(self) -> bool:
        return not self.errors

    @classmethod
    def ok(cls) -> "ValidationResult":
        """A passing result with no messages."""
        return cls()

    def __bool__(self) -> bool:
        return self.is_valid

    def __add__(self, other: "ValidationResult") -> "ValidationResult":
        """Merge two validation results."""
        return ValidationResult(
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings,
        )
