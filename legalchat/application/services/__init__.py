"""
Application services.

Exports: AskService, UploadService, CleanupService, DiagnosticService
"""

from .ask_service import NO_DOCUMENTS_MESSAGE, NO_JURISDICTION_MESSAGE, AskService
from .cleanup_service import CleanupService
from .diagnostic_service import DiagnosticService
from .upload_service import UploadService

__all__ = [
    "AskService",
    "CleanupService",
    "DiagnosticService",
    "NO_DOCUMENTS_MESSAGE",
    "NO_JURISDICTION_MESSAGE",
    "UploadService",
]
