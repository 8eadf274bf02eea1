"""String sanitizers applied before storage or display.

These are plain functions with no state. They are independent of the
validators: a caller may sanitize before validating, after, or both.
Markup cleaning uses bleach; its output is HTML-escaped text, so `&`
comes back as `&amp;`.
"""

import re

import bleach

# Inline formatting kept by html()
HTML_ALLOWED_TAGS = frozenset({"b", "i", "u", "strong", "em", "p", "br"})

FILENAME_MAX_LENGTH = 255

_FILENAME_UNSAFE = re.compile(r"[^A-Za-z0-9._-]")

# Elements whose content is code, not text; an unclosed one runs to the end
_SCRIPT_ELEMENTS = re.compile(
    r"<(script|style)\b[^>]*>.*?(?:</\1\s*>|\Z)",
    re.IGNORECASE | re.DOTALL,
)

_STRING_UNSAFE = re.compile(r"[<>\"']")


def _drop_script_elements(value: str) -> str:
    # Repeat until stable so a split tag cannot reassemble itself
    while True:
        cleaned = _SCRIPT_ELEMENTS.sub("", value)
        if cleaned == value:
            return cleaned
        value = cleaned


def clean_markup(value: str) -> str:
    """Clean markup with bleach's default policy.

    Common safe inline and list tags survive, anything else is escaped.
    This is the cleaner the no_unsafe_markup rule compares against.
    """
    return bleach.clean(value)


def text(value: str) -> str:
    """Strip all markup and return plain text.

    Script and style elements are removed with their content.
    """
    return bleach.clean(_drop_script_elements(value), tags=set(), attributes={}, strip=True)


def html(value: str) -> str:
    """Keep only basic formatting tags and drop every attribute."""
    return bleach.clean(
        _drop_script_elements(value),
        tags=HTML_ALLOWED_TAGS,
        attributes={},
        strip=True,
    )


def filename(value: str) -> str:
    """Replace characters outside [A-Za-z0-9._-] with "_" and cap at 255."""
    return _FILENAME_UNSAFE.sub("_", value)[:FILENAME_MAX_LENGTH]


def sql_string(value: str) -> str:
    """Double single quotes and drop semicolons.

    Defense in depth only. Queries still need bound parameters.
    """
    return value.replace("'", "''").replace(";", "")


def string(value: str) -> str:
    """Remove angle brackets and quotes, then trim whitespace."""
    return _STRING_UNSAFE.sub("", value).strip()


def email(value: str) -> str:
    """Trim whitespace and lower-case an email address."""
    return value.strip().lower()


SANITIZERS = {
    "text": text,
    "string": string,
    "html": html,
    "filename": filename,
    "sql": sql_string,
    "email": email,
}


def sanitize(kind: str, value: str) -> str:
    """Apply the sanitizer registered under `kind`."""
    try:
        sanitizer = SANITIZERS[kind]
    except KeyError:
        raise ValueError(
            f"Unknown sanitizer {kind!r}, expected one of {', '.join(SANITIZERS)}"
        ) from None
    return sanitizer(value)
