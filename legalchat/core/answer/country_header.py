"""
Country detection summary.

Renders the Markdown table shown above every answer and the compact
availability summary.

Dependencies: None (pure domain logic)
System role: Presentation-neutral summary of requested vs available jurisdictions
"""

REGIONAL_INDICATOR_A = 0x1F1E6
AVAILABLE_MARK = "✅"
MISSING_MARK = "❌"


def iso_to_flag(code: str) -> str:
    """
    Flag emoji for a two-letter code.

    Args:
        code: Jurisdiction code (any case)

    Returns:
        str: Pair of regional indicator symbols, or "" for malformed codes
    """
    if not code or len(code) != 2 or not code.isascii() or not code.isalpha():
        return ""
    return "".join(chr(REGIONAL_INDICATOR_A + ord(ch) - ord("A")) for ch in code.upper())


def _mark(code: str, found: set[str]) -> str:
    return AVAILABLE_MARK if code in found else MISSING_MARK


def build_country_header(requested: list[str], found: set[str]) -> str:
    """
    Markdown table of requested codes and their availability.

    Args:
        requested: Requested codes
        found: Codes with retrieved documents

    Returns:
        str: Header block ending with a horizontal rule, "" when nothing requested
    """
    if not requested:
        return ""
    lines = [
        "# Country Detection",
        "",
        "| Detected in Query | Document Available |",
        "|:-----------------:|:------------------:|",
    ]
    for code in sorted(requested):
        lines.append(f"| {iso_to_flag(code)} ({code}) | {_mark(code, found)} |")
    return "\n".join(lines) + "\n\n---\n\n"


def build_summary(requested: list[str], found: set[str]) -> str:
    """
    One-line availability summary, e.g. ``CH ✅, DE ❌``.

    Args:
        requested: Requested codes
        found: Codes with retrieved documents

    Returns:
        str: Comma-separated code/marker pairs sorted by code
    """
    return ", ".join(f"{code} {_mark(code, found)}" for code in sorted(requested))
