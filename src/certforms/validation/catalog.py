"""Catalog of prebuilt, frozen validators for named business fields.

The catalog is built once from Settings and then only read. Every validator
in it is frozen; extend one with `catalog[name].copy().add_rule(...)`.

Usage:
    catalog = get_catalog()
    catalog["reject_reason"].validate("Too short")

    # Custom limits, e.g. in tests
    catalog = build_catalog(Settings(signature_max_bytes=1024), today=date(2024, 1, 1))
"""

import logging
from collections.abc import Mapping
from datetime import date
from functools import lru_cache
from types import MappingProxyType
from typing import Iterator, Optional

from certforms.config import Settings, get_settings
from .account import ACCOUNT_VALIDATORS
from .certificate import CERTIFICATE_VALIDATORS
from .exceptions import UnknownValidatorError
from .signer import SIGNER_VALIDATORS
from .validator import Validator

logger = logging.getLogger(__name__)


class ValidatorCatalog(Mapping):
    """Read-only mapping of field name to frozen Validator."""

    def __init__(self, validators: Mapping[str, Validator], reference_date: date):
        self._validators = MappingProxyType(
            {name: validator.freeze() for name, validator in validators.items()}
        )
        self.reference_date = reference_date

    def __getitem__(self, name: str) -> Validator:
        try:
            return self._validators[name]
        except KeyError:
            raise UnknownValidatorError(name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._validators)

    def __len__(self) -> int:
        return len(self._validators)

    def __repr__(self) -> str:
        return f"ValidatorCatalog({', '.join(self._validators)})"


def build_catalog(
    settings: Optional[Settings] = None,
    today: Optional[date] = None,
) -> ValidatorCatalog:
    """Build every catalog validator from `settings`.

    Args:
        settings: Business limits (default: get_settings())
        today: Reference date for date windows (default: date.today())

    Returns:
        A frozen ValidatorCatalog
    """
    settings = settings or get_settings()
    today = today or date.today()

    validators: dict[str, Validator] = {}
    for name, builder in SIGNER_VALIDATORS.items():
        validators[name] = builder(settings)
    for name, builder in CERTIFICATE_VALIDATORS.items():
        validators[name] = builder(settings, today)
    for name, builder in ACCOUNT_VALIDATORS.items():
        validators[name] = builder(settings)

    logger.info("Built validator catalog with %d entries", len(validators))
    return ValidatorCatalog(validators, reference_date=today)


def get_catalog() -> ValidatorCatalog:
    """Get the process-wide catalog for today.

    The catalog is cached per calendar day, so activity_date in a
    long-running process always checks against the current date. Pass an
    explicit catalog from build_catalog(today=...) to pin the date.
    """
    return _catalog_for(date.today())


@lru_cache(maxsize=1)
def _catalog_for(today: date) -> ValidatorCatalog:
    return build_catalog(today=today)
