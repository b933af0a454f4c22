"""
Index cleanup service.

Removes one jurisdiction's entries, or every entry for ``ALL``. Partial
failures are reported, not raised.

Dependencies: legalchat.core.document_processing.tasks
System role: Orchestration behind POST /api/cleanup_index
"""

import logging

from legalchat.core.document_processing.tasks import IndexSyncTask
from legalchat.core.jurisdiction.codes import ALL_JURISDICTIONS, normalize_cleanup_target
from legalchat.models.cleanup import CleanupResponse

logger = logging.getLogger(__name__)


class CleanupService:
    """Selective or full index cleanup."""

    def __init__(self, index_sync: IndexSyncTask) -> None:
        self._index_sync = index_sync

    async def cleanup(self, iso_code: str | None) -> CleanupResponse:
        """
        Delete index entries.

        Args:
            iso_code: Two-letter code (any case) or 'ALL'

        Returns:
            CleanupResponse: Deleted/failed counts and message

        Raises:
            ValidationError: Missing or malformed code
            VectorStoreError: Index call failed after retries
        """
        target = normalize_cleanup_target(iso_code)
        label = f"documents for {target}" if target else "all documents"

        result = await self._index_sync.remove(target)

        logger.info(
            f"{__name__}:cleanup - Cleanup finished",
            extra={"iso_code": target or ALL_JURISDICTIONS, "deleted": result.succeeded, "failed": result.failed},
        )

        touched = result.succeeded + result.failed
        return CleanupResponse(
            success=True,
            message=f"Cleaned up {label}" if touched else f"No {label} found to clean up",
            deleted_count=result.succeeded,
            failed_count=result.failed,
            iso_code=target or ALL_JURISDICTIONS,
            warning="Some documents failed to delete" if result.failed > 0 else None,
        )
