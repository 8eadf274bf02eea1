"""certforms validation module.

Rule-based validation for flat form fields: single values, uploaded files
and small structured values such as a signature position.

Files:
- types.py: ValidationResult
- exceptions.py: configuration and submit-boundary exceptions
- rules.py: Rule and the rule factories
- validator.py: Validator (error rules + warning rules for one value)
- form.py: FormValidator (named validators + current values)
- files.py: media type constants and file helpers
- signer.py: signer workflow validators
- certificate.py: certificate issuing validators
- account.py: account and password reset validators
- catalog.py: frozen catalog of all prebuilt validators
"""

from .types import ValidationResult
from .exceptions import (
    CertformsError,
    FrozenValidatorError,
    UnknownValidatorError,
    FormValidationError,
)
from .rules import Rule
from . import rules
from .validator import Validator
from .form import FormValidator
from .catalog import ValidatorCatalog, build_catalog, get_catalog

# File helpers
from .files import (
    IMAGE_TYPES,
    DOCUMENT_TYPES,
    ATTACHMENT_TYPES,
    is_valid_image_type,
    is_valid_document_type,
    get_file_extension,
    format_file_size,
)

__all__ = [
    # Types and exceptions
    "ValidationResult",
    "CertformsError",
    "FrozenValidatorError",
    "UnknownValidatorError",
    "FormValidationError",
    # Rules and validators
    "Rule",
    "rules",
    "Validator",
    "FormValidator",
    # Catalog
    "ValidatorCatalog",
    "build_catalog",
    "get_catalog",
    # Files
    "IMAGE_TYPES",
    "DOCUMENT_TYPES",
    "ATTACHMENT_TYPES",
    "is_valid_image_type",
    "is_valid_document_type",
    "get_file_extension",
    "format_file_size",
]
