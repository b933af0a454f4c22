"""
Index cleanup API models.

Dependencies: pydantic
System role: Request/response schemas for /api/cleanup_index
"""

from pydantic import BaseModel, Field


class CleanupRequest(BaseModel):
    """Cleanup target."""

    iso_code: str | None = Field(default=None, description="Two-letter code or 'ALL'")


class CleanupResponse(BaseModel):
    """Cleanup outcome."""

    success: bool
    message: str
    deleted_count: int = 0
    failed_count: int = 0
    iso_code: str = ""
    warning: str | None = None
