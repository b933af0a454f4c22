"""
Document upload API models.

Dependencies: pydantic
System role: Request/response schemas for /api/upload_blob
"""

from pydantic import BaseModel, Field


class UploadBlobRequest(BaseModel):
    """Base64-encoded document upload."""

    filename: str | None = Field(default=None, description="XX.docx")
    file_data: str | None = Field(default=None, description="Base64 document content")
    container: str | None = Field(default=None, description="Target container (default upload container when omitted)")


class UploadBlobResponse(BaseModel):
    """Successful upload."""

    message: str
    iso_code: str


class UploadErrorResponse(BaseModel):
    """Rejected or failed upload."""

    success: bool = False
    message: str
