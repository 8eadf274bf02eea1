"""Validator - ordered error rules and warning rules for one value.

Usage:
    validator = (
        Validator.create()
        .add_rule(required())
        .add_rule(min_length(10))
        .add_warning(max_length(200, "Long titles get truncated"))
    )
    result = validator.validate("Too short")
    result.errors    # ("Must be at least 10 characters long",)

Every rule is evaluated; a failing rule does not stop the ones after it.
A validator with no error rules accepts anything, including None.
"""

import logging
from typing import Any

from .exceptions import FrozenValidatorError
from .rules import Rule
from .types import ValidationResult

logger = logging.getLogger(__name__)


class Validator:
    """Fluent builder and evaluator for one field's rules.

    Catalog validators are frozen after construction. Call copy() to get
    a mutable validator with the same rules.
    """

    def __init__(self) -> None:
        self._rules: list[Rule] = []
        self._warnings: list[Rule] = []
        self._frozen = False

    @classmethod
    def create(cls) -> "Validator":
        return cls()

    @property
    def rules(self) -> tuple[Rule, ...]:
        return tuple(self._rules)

    @property
    def warning_rules(self) -> tuple[Rule, ...]:
        return tuple(self._warnings)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add_rule(self, rule: Rule) -> "Validator":
        """Append an error rule."""
        self._ensure_mutable()
        self._rules.append(rule)
        return self

    def add_warning(self, rule: Rule) -> "Validator":
        """Append a warning rule. Warnings never affect validity."""
        self._ensure_mutable()
        self._warnings.append(rule)
        return self

    def freeze(self) -> "Validator":
        """Make the validator read-only."""
        self._frozen = True
        return self

    def copy(self) -> "Validator":
        """Return an unfrozen validator with the same rules."""
        clone = Validator()
        clone._rules = list(self._rules)
        clone._warnings = list(self._warnings)
        return clone

    def validate(self, value: Any) -> ValidationResult:
        """Evaluate all error rules, then all warning rules, in order."""
        failed = [rule for rule in self._rules if not rule.evaluate(value)]
        flagged = [rule for rule in self._warnings if not rule.evaluate(value)]

        if failed:
            logger.debug("Failed rules: %s", ", ".join(rule.name for rule in failed))

        return ValidationResult(
            errors=tuple(rule.message for rule in failed),
            warnings=tuple(rule.message for rule in flagged),
        )

    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise FrozenValidatorError(
                "Validator is frozen; use copy() to extend it"
            )

    def __repr__(self) -> str:
        names = ", ".join(rule.name for rule in self._rules)
        return f"Validator(rules=[{names}], warnings={len(self._warnings)}, frozen={self._frozen})"
