"""Certificate issuing validators.

Fields:
- student_id: 8 to 12 digits
- certificate_title: 5-200 characters, no markup or injection patterns
- activity_date: within a year of the reference date, either direction
"""

from datetime import date

from certforms.config import Settings
from . import rules
from .validator import Validator


def student_id(settings: Settings, today: date) -> Validator:
    return (
        Validator.create()
        .add_rule(rules.required("Please enter a student ID"))
        .add_rule(rules.pattern(r"^\d{8,12}$", "Student ID must be 8-12 digits"))
    )


def certificate_title(settings: Settings, today: date) -> Validator:
    return (
        Validator.create()
        .add_rule(rules.required("Please enter a certificate title"))
        .add_rule(rules.min_length(5, "Certificate title must be at least 5 characters long"))
        .add_rule(rules.max_length(200, "Certificate title must be at most 200 characters long"))
        .add_rule(rules.no_unsafe_markup())
        .add_rule(rules.no_injection_pattern())
    )


def activity_date(settings: Settings, today: date) -> Validator:
    days = settings.activity_date_window_days
    return (
        Validator.create()
        .add_rule(rules.required("Please enter the activity date"))
        .add_rule(rules.date_within(
            days, today,
            f"Activity date must be within {days} days of today",
        ))
    )


CERTIFICATE_VALIDATORS = {
    "student_id": student_id,
    "certificate_title": certificate_title,
    "activity_date": activity_date,
}


__all__ = ["CERTIFICATE_VALIDATORS", *CERTIFICATE_VALIDATORS]
