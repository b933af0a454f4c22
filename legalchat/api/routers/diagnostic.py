"""
Diagnostic API endpoint.

Routes: GET|POST /diagnostic

Dependencies: legalchat.application.services, legalchat.models
System role: Read-only connectivity report
"""

from fastapi import APIRouter, Depends

from legalchat.api.deps import get_diagnostic_service
from legalchat.application.services import DiagnosticService
from legalchat.models.diagnostic import DiagnosticReport

router = APIRouter(tags=["diagnostic"])


@router.api_route("/diagnostic", methods=["GET", "POST"], response_model=DiagnosticReport)
async def diagnostic(service: DiagnosticService = Depends(get_diagnostic_service)) -> DiagnosticReport:
    """Report per-dependency reachability without mutating anything."""
    return await service.run()
