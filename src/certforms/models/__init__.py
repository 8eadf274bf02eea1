"""Models package."""

from certforms.models.values import (
    DocumentStatus,
    Priority,
    FileRef,
    SignaturePosition,
    DocumentFilter,
    MISSING,
    get_field,
    is_structure,
    as_model,
    as_file_ref,
)

__all__ = [
    "DocumentStatus",
    "Priority",
    "FileRef",
    "SignaturePosition",
    "DocumentFilter",
    "MISSING",
    "get_field",
    "is_structure",
    "as_model",
    "as_file_ref",
]
