"""Account and password reset validators."""

from certforms.config import Settings
from . import rules
from .validator import Validator


def email(settings: Settings) -> Validator:
    return (
        Validator.create()
        .add_rule(rules.required("Please enter an email address"))
        .add_rule(rules.email())
    )


def new_password(settings: Settings) -> Validator:
    return (
        Validator.create()
        .add_rule(rules.required("Please enter a new password"))
        .add_rule(rules.strong_password())
        .add_warning(rules.min_length(12, "Passwords of 12 or more characters are safer"))
    )


ACCOUNT_VALIDATORS = {
    "email": email,
    "new_password": new_password,
}


__all__ = ["ACCOUNT_VALIDATORS", *ACCOUNT_VALIDATORS]
