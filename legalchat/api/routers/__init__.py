"""
API routers.

Exports all routers for assembly in the main application.
"""

from .ask import router as ask_router
from .cleanup import router as cleanup_router
from .diagnostic import router as diagnostic_router
from .upload import router as upload_router

__all__ = ["ask_router", "cleanup_router", "diagnostic_router", "upload_router"]
