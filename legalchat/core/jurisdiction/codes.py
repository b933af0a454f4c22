"""
Jurisdiction code validation.

Codes are two upper-case letters (ISO 3166-1 alpha-2 shape). Uploaded
documents carry their code in the filename: ``XX.docx``.

Dependencies: re (stdlib)
System role: Single source of truth for code and filename patterns
"""

import re

from legalchat.core.exceptions import FilenameValidationError, ValidationError

CODE_PATTERN = re.compile(r"^[A-Z]{2}$")
FILENAME_PATTERN = re.compile(r"^([A-Z]{2})\.docx$")
ALL_JURISDICTIONS = "ALL"


def is_jurisdiction_code(value: str | None) -> bool:
    """Whether value is exactly two upper-case ASCII letters."""
    return bool(value) and CODE_PATTERN.fullmatch(value) is not None


def jurisdiction_from_filename(filename: str) -> str:
    """
    Extract the jurisdiction code from an upload filename.

    Args:
        filename: Object name, e.g. ``DE.docx``

    Returns:
        str: The code, e.g. ``DE``

    Raises:
        FilenameValidationError: Name is not exactly ``XX.docx``
    """
    match = FILENAME_PATTERN.fullmatch(filename or "")
    if match is None:
        raise FilenameValidationError(filename)
    return match.group(1)


def normalize_cleanup_target(iso_code: str | None) -> str | None:
    """
    Validate a cleanup target.

    Args:
        iso_code: Raw value from the request (any case)

    Returns:
        str | None: Upper-cased code, or None for every jurisdiction

    Raises:
        ValidationError: Missing value or not a two-letter code
    """
    value = (iso_code or "").strip().upper()
    if not value:
        raise ValidationError("iso_code is required", field="iso_code")
    if value == ALL_JURISDICTIONS:
        return None
    if not is_jurisdiction_code(value):
        raise ValidationError(
            "iso_code must be a 2-letter country code (e.g., 'FR', 'DE')",
            field="iso_code",
        )
    return value
