"""Answer composition and country detection summary."""

from .composer import AnswerComposer, build_context
from .country_header import build_country_header, build_summary, iso_to_flag

__all__ = ["AnswerComposer", "build_context", "build_country_header", "build_summary", "iso_to_flag"]
