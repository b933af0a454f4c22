"""
HTTP request/response schemas.
"""

from .ask import AskRequest, AskResponse, CountryDetection
from .cleanup import CleanupRequest, CleanupResponse
from .diagnostic import DiagnosticReport
from .upload import UploadBlobRequest, UploadBlobResponse, UploadErrorResponse

__all__ = [
    "AskRequest",
    "AskResponse",
    "CleanupRequest",
    "CleanupResponse",
    "CountryDetection",
    "DiagnosticReport",
    "UploadBlobRequest",
    "UploadBlobResponse",
    "UploadErrorResponse",
]
