"""Rules and the factories that build them.

A Rule is plain data: a name, a failure message, a check function and the
parameters the check is called with. Factories only choose the check and
capture parameters, so two calls with the same arguments build equal rules.

Shape policy:
- Rules that expect a string, number, file or structure fail on anything else.
- no_unsafe_markup and no_injection_pattern pass any non-string value.

Factories:
- required, min_length, max_length, pattern, email, strong_password, thai_text
- numeric, positive_number, value_range, one_of
- file_size, file_min_size, file_type, image_file
- no_unsafe_markup, no_injection_pattern
- field_range, field_one_of, aspect_ratio (structured values)
- dates_ordered, max_date_span, date_within (dates)
- optional, coerce_to (wrap another rule)
"""

import logging
import math
import re
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from pydantic import BaseModel, ConfigDict

from certforms import sanitizer
from certforms.models.values import as_file_ref, as_model, get_field, is_structure
from .files import IMAGE_TYPES, format_file_size

logger = logging.getLogger(__name__)

# Exceptions a check may raise on odd input; each counts as a failed rule
_CHECK_ERRORS = (TypeError, ValueError, AttributeError, KeyError, ArithmeticError)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
STRONG_PASSWORD_PATTERN = re.compile(
    r"(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9])(?=.*[@$!%*?&])[A-Za-z0-9@$!%*?&]{8,}"
)
THAI_TEXT_PATTERN = re.compile(r"[\u0E00-\u0E7F\s0-9.,!?()-]+")

# Plain decimal or exponent notation; no underscores, inf or nan spellings
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

INJECTION_PATTERNS = (
    re.compile(
        r"\b(SELECT|INSERT|UPDATE|DELETE|DROP|CREATE|ALTER|EXEC|UNION|SCRIPT)\b",
        re.IGNORECASE,
    ),
    re.compile(r"(--|/\*|\*/|;|'|\"|`)"),
    re.compile(r"(\bOR\b|\bAND\b).*[=<>]", re.IGNORECASE),
)

_INVALID_DATE = object()


class Rule(BaseModel):
    """A named check plus the message reported when it fails."""

    name: str
    message: str
    check: Callable[..., bool]
    params: tuple[Any, ...] = ()

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def evaluate(self, value: Any) -> bool:
        """Return True when `value` satisfies the rule.

        Never raises on bad input: a check that blows up counts as a failure.
        """
        try:
            return bool(self.check(value, *self.params))
        except _CHECK_ERRORS as exc:
            logger.debug("Rule %s failed on %r: %s", self.name, value, exc)
            return False


# ============================================================================
# Coercion helpers
# ============================================================================

def to_number(value: Any) -> Optional[float]:
    """Coerce a number or numeric string to float, None when impossible."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not NUMBER_PATTERN.fullmatch(text):
            return None
        return float(text)
    return None


def to_date(value: Any) -> Optional[date]:
    """Coerce a date, datetime or ISO string to a date, None when impossible."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            return None
    return None


def _choice(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _is_real(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _field_date(value: Any, field: str) -> Any:
    raw = get_field(value, field, None)
    if raw is None or raw == "":
        return None
    parsed = to_date(raw)
    return _INVALID_DATE if parsed is None else parsed


# ============================================================================
# Checks (module level so equal parameters give equal rules)
# ============================================================================

def _check_required(value: Any) -> bool:
    return value is not None and value != ""


def _check_min_length(value: Any, n: int) -> bool:
    return isinstance(value, str) and len(value) >= n


def _check_max_length(value: Any, n: int) -> bool:
    return isinstance(value, str) and len(value) <= n


def _check_pattern(value: Any, regex: re.Pattern) -> bool:
    return isinstance(value, str) and regex.search(value) is not None


def _check_fullmatch(value: Any, regex: re.Pattern) -> bool:
    return isinstance(value, str) and regex.fullmatch(value) is not None


def _check_numeric(value: Any) -> bool:
    number = to_number(value)
    return number is not None and math.isfinite(number)


def _check_positive(value: Any) -> bool:
    number = to_number(value)
    return number is not None and number > 0


def _check_range(value: Any, low: float, high: float) -> bool:
    number = to_number(value)
    return number is not None and low <= number <= high


def _check_one_of(value: Any, choices: tuple) -> bool:
    return _choice(value) in choices


def _check_file_size(value: Any, max_bytes: int) -> bool:
    ref = as_file_ref(value)
    return ref is not None and ref.size <= max_bytes


def _check_file_min_size(value: Any, min_bytes: int) -> bool:
    ref = as_file_ref(value)
    return ref is not None and ref.size >= min_bytes


def _check_file_type(value: Any, allowed: tuple[str, ...]) -> bool:
    ref = as_file_ref(value)
    return ref is not None and ref.content_type in allowed


def _check_optional(value: Any, rule: "Rule") -> bool:
    return value is None or value == "" or rule.evaluate(value)


def _check_coerced(value: Any, model: type, rule: "Rule") -> bool:
    coerced = as_model(model, value)
    return rule.evaluate(value if coerced is None else coerced)


def _check_no_unsafe_markup(value: Any) -> bool:
    if not isinstance(value, str):
        return True
    return sanitizer.clean_markup(value) == value


def _check_no_injection(value: Any) -> bool:
    if not isinstance(value, str):
        return True
    return not any(pattern.search(value) for pattern in INJECTION_PATTERNS)


def _check_field_range(value: Any, field: str, low: float, high: float) -> bool:
    number = get_field(value, field)
    return _is_real(number) and low <= number <= high


def _check_field_one_of(value: Any, field: str, choices: tuple) -> bool:
    if not is_structure(value):
        return False
    current = get_field(value, field, None)
    if current is None or current == "":
        return True
    return _choice(current) in choices


def _check_aspect_ratio(value: Any, low: float, high: float) -> bool:
    width = get_field(value, "width")
    height = get_field(value, "height")
    if not (_is_real(width) and _is_real(height)) or height <= 0:
        return False
    return low <= width / height <= high


def _check_dates_ordered(value: Any, start: str, end: str) -> bool:
    if not is_structure(value):
        return False
    first = _field_date(value, start)
    last = _field_date(value, end)
    if first is _INVALID_DATE or last is _INVALID_DATE:
        return False
    if first is None or last is None:
        return True
    return first <= last


def _check_max_date_span(value: Any, start: str, end: str, days: int) -> bool:
    if not is_structure(value):
        return False
    first = _field_date(value, start)
    last = _field_date(value, end)
    if first is _INVALID_DATE or last is _INVALID_DATE:
        return False
    if first is None or last is None:
        return True
    return (last - first).days <= days


def _check_date_within(value: Any, days: int, today: date) -> bool:
    current = to_date(value)
    return current is not None and abs((current - today).days) <= days


# ============================================================================
# Factories
# ============================================================================

def required(message: str = "This field is required") -> Rule:
    """Present means not None and not "". 0 and False are present."""
    return Rule(name="required", message=message, check=_check_required)


def min_length(n: int, message: Optional[str] = None) -> Rule:
    if n < 0:
        raise ValueError(f"min_length must be non-negative, got {n}")
    return Rule(
        name="min_length",
        message=message or f"Must be at least {n} characters long",
        check=_check_min_length,
        params=(n,),
    )


def max_length(n: int, message: Optional[str] = None) -> Rule:
    if n < 0:
        raise ValueError(f"max_length must be non-negative, got {n}")
    return Rule(
        name="max_length",
        message=message or f"Must be at most {n} characters long",
        check=_check_max_length,
        params=(n,),
    )


def pattern(regex: str | re.Pattern, message: str) -> Rule:
    """Pass strings where `regex` matches anywhere; anchor it for a full match."""
    compiled = re.compile(regex) if isinstance(regex, str) else regex
    return Rule(name="pattern", message=message, check=_check_pattern, params=(compiled,))


def email(message: str = "Invalid email address") -> Rule:
    return Rule(name="email", message=message, check=_check_pattern, params=(EMAIL_PATTERN,))


def strong_password(
    message: str = (
        "Password must be at least 8 characters and include upper and lower case "
        "letters, a digit and one of @$!%*?&"
    ),
) -> Rule:
    return Rule(
        name="strong_password",
        message=message,
        check=_check_fullmatch,
        params=(STRONG_PASSWORD_PATTERN,),
    )


def thai_text(message: str = "Must be Thai text") -> Rule:
    return Rule(
        name="thai_text",
        message=message,
        check=_check_fullmatch,
        params=(THAI_TEXT_PATTERN,),
    )


def numeric(message: str = "Must be a number") -> Rule:
    return Rule(name="numeric", message=message, check=_check_numeric)


def positive_number(message: str = "Must be a positive number") -> Rule:
    return Rule(name="positive_number", message=message, check=_check_positive)


def value_range(low: float, high: float, message: Optional[str] = None) -> Rule:
    """Inclusive on both ends."""
    if low > high:
        raise ValueError(f"value_range bounds are reversed: {low} > {high}")
    return Rule(
        name="range",
        message=message or f"Must be between {low} and {high}",
        check=_check_range,
        params=(low, high),
    )


def one_of(choices: Iterable[Any], message: Optional[str] = None) -> Rule:
    allowed = tuple(_choice(choice) for choice in choices)
    return Rule(
        name="one_of",
        message=message or f"Must be one of: {', '.join(map(str, allowed))}",
        check=_check_one_of,
        params=(allowed,),
    )


def file_size(max_bytes: int, message: Optional[str] = None) -> Rule:
    return Rule(
        name="file_size",
        message=message or f"File size must not exceed {max_bytes / 1024 / 1024:.1f} MB",
        check=_check_file_size,
        params=(max_bytes,),
    )


def file_min_size(min_bytes: int, message: Optional[str] = None) -> Rule:
    return Rule(
        name="file_min_size",
        message=message or f"File must be at least {format_file_size(min_bytes)}",
        check=_check_file_min_size,
        params=(min_bytes,),
    )


def file_type(allowed: Iterable[str], message: Optional[str] = None) -> Rule:
    """Exact, case-sensitive match on the declared media type."""
    allowed_types = tuple(allowed)
    return Rule(
        name="file_type",
        message=message or f"Allowed file types: {', '.join(allowed_types)}",
        check=_check_file_type,
        params=(allowed_types,),
    )


def image_file(message: str = "File must be an image (PNG, JPG, JPEG, SVG)") -> Rule:
    return Rule(
        name="image_file",
        message=message,
        check=_check_file_type,
        params=(IMAGE_TYPES,),
    )


def no_unsafe_markup(message: str = "Unsafe content detected") -> Rule:
    """Fail when cleaning the markup would change the string at all.

    Any change counts, so `AT&T` fails too (bleach escapes the ampersand).
    """
    return Rule(name="no_unsafe_markup", message=message, check=_check_no_unsafe_markup)


def no_injection_pattern(message: str = "Unsafe pattern detected") -> Rule:
    return Rule(name="no_injection_pattern", message=message, check=_check_no_injection)


def field_range(field: str, low: float, high: float, message: Optional[str] = None) -> Rule:
    """A numeric field of a structured value lies within [low, high]."""
    if low > high:
        raise ValueError(f"field_range bounds are reversed: {low} > {high}")
    return Rule(
        name=f"{field}_range",
        message=message or f"{field} must be between {low} and {high}",
        check=_check_field_range,
        params=(field, low, high),
    )


def field_one_of(field: str, choices: Iterable[Any], message: Optional[str] = None) -> Rule:
    """An optional field of a structured value is empty or one of `choices`."""
    allowed = tuple(_choice(choice) for choice in choices)
    return Rule(
        name=f"{field}_one_of",
        message=message or f"{field} must be one of: {', '.join(map(str, allowed))}",
        check=_check_field_one_of,
        params=(field, allowed),
    )


def aspect_ratio(low: float, high: float, message: Optional[str] = None) -> Rule:
    """width / height of a structured value lies within [low, high]."""
    return Rule(
        name="aspect_ratio",
        message=message or f"Width to height ratio must be between {low} and {high}",
        check=_check_aspect_ratio,
        params=(low, high),
    )


def dates_ordered(
    start: str = "date_from",
    end: str = "date_to",
    message: str = "Start date must not be after end date",
) -> Rule:
    return Rule(
        name="dates_ordered",
        message=message,
        check=_check_dates_ordered,
        params=(start, end),
    )


def max_date_span(
    days: int,
    start: str = "date_from",
    end: str = "date_to",
    message: Optional[str] = None,
) -> Rule:
    return Rule(
        name="max_date_span",
        message=message or f"Date range must not exceed {days} days",
        check=_check_max_date_span,
        params=(start, end, days),
    )


def date_within(days: int, today: date, message: Optional[str] = None) -> Rule:
    """A date no more than `days` before or after `today`."""
    return Rule(
        name="date_within",
        message=message or f"Date must be within {days} days of {today.isoformat()}",
        check=_check_date_within,
        params=(days, today),
    )



def optional(rule: Rule) -> Rule:
    """Pass None and "", otherwise defer to `rule`.

    For fields that may be left empty but are constrained once filled in.
    """
    return Rule(
        name=f"optional_{rule.name}",
        message=rule.message,
        check=_check_optional,
        params=(rule,),
    )


def coerce_to(model: type[BaseModel], rule: Rule) -> Rule:
    """Validate mappings and objects as `model` before applying `rule`.

    Lets `rule` see field aliases resolved. Values that do not validate as
    `model` reach `rule` unchanged.
    """
    return Rule(
        name=rule.name,
        message=rule.message,
        check=_check_coerced,
        params=(model, rule),
    )


__all__ = [
    "Rule",
    "to_number",
    "to_date",
    "required",
    "min_length",
    "max_length",
    "pattern",
    "email",
    "strong_password",
    "thai_text",
    "numeric",
    "positive_number",
    "value_range",
    "one_of",
    "file_size",
    "file_min_size",
    "file_type",
    "image_file",
    "no_unsafe_markup",
    "no_injection_pattern",
    "field_range",
    "field_one_of",
    "aspect_ratio",
    "dates_ordered",
    "max_date_span",
    "date_within",
    "optional",
    "coerce_to",
]
