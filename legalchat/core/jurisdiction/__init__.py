"""Jurisdiction code validation and extraction."""

from .codes import (
    ALL_JURISDICTIONS,
    is_jurisdiction_code,
    jurisdiction_from_filename,
    normalize_cleanup_target,
)
from .extractor import JurisdictionExtractor, parse_jurisdiction_codes, strip_code_fence

__all__ = [
    "ALL_JURISDICTIONS",
    "JurisdictionExtractor",
    "is_jurisdiction_code",
    "jurisdiction_from_filename",
    "normalize_cleanup_target",
    "parse_jurisdiction_codes",
    "strip_code_fence",
]
