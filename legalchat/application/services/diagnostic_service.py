"""
Diagnostic service.

Read-only connectivity report: which required variables are set, whether
the upload container exists, how many documents the index holds (overall
and per probe jurisdiction), and whether a live embedding call succeeds.
Each section catches its own failure and reports it; the report itself
never raises.

Dependencies: legalchat.configs, legalchat.boundary
System role: Orchestration behind GET|POST /api/diagnostic
"""

import logging
from typing import Any, Callable

from legalchat import __version__
from legalchat.configs.settings import Settings
from legalchat.models.diagnostic import (
    DiagnosticReport,
    ModelServiceStatus,
    RuntimeInfo,
    SearchStatus,
    StorageStatus,
)

logger = logging.getLogger(__name__)

EMBEDDING_PROBE_TEXT = "connectivity check"


class DiagnosticService:
    """Build the per-dependency reachability report."""

    def __init__(
        self,
        settings: Settings,
        blob_client_factory: Callable[[], Any],
        vector_index_factory: Callable[[], Any],
        embedding_client_factory: Callable[[], Any],
        worker_factory: Callable[[], Any] | None = None,
    ) -> None:
        """
        Initialize diagnostic service.

        Collaborators are passed as factories so that a missing setting shows
        up as a section error instead of preventing the report.

        Args:
            settings: Application settings
            blob_client_factory: Returns the blob storage client
            vector_index_factory: Returns the vector index
            embedding_client_factory: Returns the embedding client
            worker_factory: Returns the ingestion worker (optional)
        """
        self._settings = settings
        self._blob_client_factory = blob_client_factory
        self._vector_index_factory = vector_index_factory
        self._embedding_client_factory = embedding_client_factory
        self._worker_factory = worker_factory

    async def run(self) -> DiagnosticReport:
        """
        Produce the report.

        Returns:
            DiagnosticReport: Status of every dependency
        """
        report = DiagnosticReport(
            environment_variables=self._environment(),
            storage=await self._storage(),
            search=await self._search(),
            openai=await self._model_service(),
            runtime=self._runtime(),
        )
        logger.info(
            f"{__name__}:run - Diagnostic complete",
            extra={
                "storage": report.storage.status,
                "search": report.search.status,
                "openai": report.openai.status,
            },
        )
        return report

    def _environment(self) -> dict[str, bool]:
        groups = (self._settings.search, self._settings.model_service, self._settings.storage)
        missing = set(self._settings.missing_env_vars(*groups))
        presence: dict[str, bool] = {}
        for group in groups:
            prefix = group.model_config.get("env_prefix", "")
            for name in group.required_fields:
                env_name = f"{prefix}{name}".upper()
                presence[env_name] = env_name not in missing
        return presence

    async def _storage(self) -> StorageStatus:
        container = self._settings.storage.container
        status = StorageStatus(container=container)
        try:
            blobs = self._blob_client_factory()
            status.container_exists = await blobs.container_exists(container)
            if status.container_exists:
                status.recent_blobs = await blobs.list_blobs(
                    container, limit=self._settings.diagnostic.recent_blob_limit
                )
            status.status = "ok"
        except Exception as e:
            logger.warning(f"{__name__}:_storage - {type(e).__name__}: {e}")
            status.status = "error"
            status.error = str(e)
        return status

    async def _search(self) -> SearchStatus:
        status = SearchStatus(
            index_name=self._settings.search.index_name,
            store_type=self._settings.search.store_type,
        )
        try:
            index = self._vector_index_factory()
            status.document_count = await index.count()
            for code in self._settings.diagnostic.iso_codes:
                status.per_iso_counts[code] = await index.count(code)
            status.status = "ok"
        except Exception as e:
            logger.warning(f"{__name__}:_search - {type(e).__name__}: {e}")
            status.status = "error"
            status.error = str(e)
        return status

    async def _model_service(self) -> ModelServiceStatus:
        model_settings = self._settings.model_service
        status = ModelServiceStatus(
            endpoint_set=bool(model_settings.endpoint),
            api_key_set=bool(model_settings.api_key),
            embed_deployment=model_settings.embed_deployment,
            caption_enabled=model_settings.captioning_enabled,
        )
        try:
            client = self._embedding_client_factory()
            vector = await client.embed(EMBEDDING_PROBE_TEXT)
            status.embedding_dimension = len(vector)
            status.status = "ok"
        except Exception as e:
            logger.warning(f"{__name__}:_model_service - {type(e).__name__}: {e}")
            status.status = "error"
            status.error = str(e)
        return status

    def _runtime(self) -> RuntimeInfo:
        info = RuntimeInfo(
            app_name=self._settings.app_name,
            version=__version__,
            environment=self._settings.environment,
        )
        if self._worker_factory is not None:
            worker = self._worker_factory()
            if worker is not None:
                info.ingestion_worker_running = worker.running
                info.pending_ingestions = worker.pending
                info.ingestions_processed = worker.processed
                info.ingestions_failed = worker.failures
                info.recent_ingestions = [result.filename for result in worker.recent]
        return info
