"""File type constants and helpers for uploads."""

from typing import Any

from certforms.models.values import as_file_ref

IMAGE_TYPES = ("image/png", "image/jpeg", "image/jpg", "image/svg+xml")

DOCUMENT_TYPES = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
)

# Attachments accepted on a returned or signed document
ATTACHMENT_TYPES = DOCUMENT_TYPES + ("image/jpeg", "image/png")

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


def is_valid_image_type(file: Any) -> bool:
    ref = as_file_ref(file)
    return ref is not None and ref.content_type in IMAGE_TYPES


def is_valid_document_type(file: Any) -> bool:
    ref = as_file_ref(file)
    return ref is not None and ref.content_type in DOCUMENT_TYPES


def get_file_extension(filename: str) -> str:
    """Return the lower-cased extension after the last dot, or "" when none."""
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def format_file_size(size: int) -> str:
    """Format a byte count for display, e.g. 1536 -> "1.5 KB".

    Uses 1024 steps and at most two decimals, dropping trailing zeros.
    """
    if size <= 0:
        return "0 Bytes"
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[unit]}"
