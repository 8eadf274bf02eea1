"""Signer workflow validators.

Fields:
- signature_file: required image, 1 KB to 5 MB; PNG recommended, warns past 2 MB
- signature_position: x, y in 0-100 %, width 50-500 px, height 20-250 px
- document_title: 5-200 characters, no markup or injection patterns
- reject_reason: 10-500 characters, no markup or injection patterns
- comments: optional, at most 1000 characters, no markup or injection patterns
- signing_notes: as comments, with a warning past 500 characters
- attachment_file: office document, PDF or image, at most 10 MB
- document_filter: ordered dates at most a year apart, known priority and status
"""

from certforms.config import Settings
from certforms.models.values import DocumentFilter, DocumentStatus, Priority
from . import rules
from .files import ATTACHMENT_TYPES, format_file_size
from .validator import Validator


def signature_file(settings: Settings) -> Validator:
    max_mb = settings.signature_max_bytes / 1024 / 1024
    warn_mb = settings.signature_warn_bytes / 1024 / 1024
    return (
        Validator.create()
        .add_rule(rules.required("Please select a signature file"))
        .add_rule(rules.image_file())
        .add_rule(rules.file_size(
            settings.signature_max_bytes,
            f"File size must not exceed {max_mb:g} MB",
        ))
        .add_rule(rules.file_min_size(
            settings.signature_min_bytes,
            f"File is too small (minimum {format_file_size(settings.signature_min_bytes)})",
        ))
        .add_warning(rules.optional(rules.file_size(
            settings.signature_warn_bytes,
            f"File is large (over {warn_mb:g} MB); a smaller image uploads faster",
        )))
        .add_warning(rules.file_type(
            ["image/png"],
            "PNG files are recommended for the sharpest signature",
        ))
    )


def signature_position(settings: Settings) -> Validator:
    return (
        Validator.create()
        .add_rule(rules.field_range("x", 0, 100, "Horizontal position must be between 0-100%"))
        .add_rule(rules.field_range("y", 0, 100, "Vertical position must be between 0-100%"))
        .add_rule(rules.field_range("width", 50, 500, "Width must be between 50-500 pixels"))
        .add_rule(rules.field_range("height", 20, 250, "Height must be between 20-250 pixels"))
        .add_warning(rules.aspect_ratio(
            1.5, 6,
            "Signature is usually wider than it is tall (width/height 1.5-6)",
        ))
    )


def _free_text(validator: Validator) -> Validator:
    return (
        validator
        .add_rule(rules.no_unsafe_markup())
        .add_rule(rules.no_injection_pattern())
    )


def document_title(settings: Settings) -> Validator:
    return _free_text(
        Validator.create()
        .add_rule(rules.required("Please enter a document title"))
        .add_rule(rules.min_length(5, "Document title must be at least 5 characters long"))
        .add_rule(rules.max_length(200, "Document title must be at most 200 characters long"))
    )


def reject_reason(settings: Settings) -> Validator:
    low = settings.reject_reason_min_length
    high = settings.reject_reason_max_length
    return _free_text(
        Validator.create()
        .add_rule(rules.required("Please give a reason for rejecting"))
        .add_rule(rules.min_length(low, f"Reason must be at least {low} characters long"))
        .add_rule(rules.max_length(high, f"Reason must be at most {high} characters long"))
    )


def comments(settings: Settings) -> Validator:
    limit = settings.comments_max_length
    return _free_text(
        Validator.create()
        .add_rule(rules.optional(
            rules.max_length(limit, f"Comments must be at most {limit} characters long")
        ))
    )


def signing_notes(settings: Settings) -> Validator:
    limit = settings.notes_warning_length
    return comments(settings).add_warning(rules.optional(
        rules.max_length(limit, f"Notes are very long (over {limit} characters)")
    ))


def attachment_file(settings: Settings) -> Validator:
    max_mb = settings.attachment_max_bytes / 1024 / 1024
    return (
        Validator.create()
        .add_rule(rules.file_type(
            ATTACHMENT_TYPES,
            "Allowed file types: PDF, DOC, DOCX, XLS, XLSX, JPG, PNG",
        ))
        .add_rule(rules.file_size(
            settings.attachment_max_bytes,
            f"File size must not exceed {max_mb:g} MB",
        ))
    )


def document_filter(settings: Settings) -> Validator:
    days = settings.document_filter_max_span_days
    checks = [
        rules.dates_ordered(
            "date_from", "date_to",
            "Start date must be on or before the end date",
        ),
        rules.max_date_span(
            days, "date_from", "date_to",
            f"Date range must not exceed 1 year ({days} days)",
        ),
        rules.field_one_of("priority", Priority, "Invalid priority"),
        rules.field_one_of("status", DocumentStatus, "Invalid status"),
    ]
    validator = Validator.create()
    for check in checks:
        # Mappings may use dateFrom / dateTo
        validator.add_rule(rules.coerce_to(DocumentFilter, check))
    return validator


SIGNER_VALIDATORS = {
    "signature_file": signature_file,
    "signature_position": signature_position,
    "document_title": document_title,
    "reject_reason": reject_reason,
    "comments": comments,
    "signing_notes": signing_notes,
    "attachment_file": attachment_file,
    "document_filter": document_filter,
}


__all__ = ["SIGNER_VALIDATORS", *SIGNER_VALIDATORS]
