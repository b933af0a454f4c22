"""
Question answering API models.

Dependencies: pydantic
System role: Request/response schemas for /api/ask
"""

from pydantic import BaseModel, Field


class AskRequest(BaseModel):
    """Question body. The question may also arrive as a query parameter."""

    question: str | None = Field(default=None, description="Free-text legal question")


class CountryDetection(BaseModel):
    """Requested vs available jurisdictions."""

    iso_codes: list[str] = Field(default_factory=list, description="Requested codes, first-detected order")
    available: list[str] = Field(default_factory=list, description="Requested codes with retrieved documents, sorted")
    summary: str = Field(default="", description="e.g. 'CH ✅, DE ❌'")


class AskResponse(BaseModel):
    """Answer with country detection details."""

    country_header: str = Field(default="", description="Markdown detection table")
    refined_answer: str = Field(description="Markdown answer or explanatory message")
    country_detection: CountryDetection = Field(default_factory=CountryDetection)
