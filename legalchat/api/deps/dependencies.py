"""
Dependency injection container.

ServiceCache owns the process-wide collaborators (HTTP pool, retry policy,
model clients, vector index, blob storage, pipeline, ingestion worker) and
builds them lazily on first use, checking required settings first.
Factory functions below expose them to FastAPI.

Dependencies: legalchat.configs, legalchat.application, legalchat.boundary, legalchat.core
System role: DI container for service injection
"""

import logging

from legalchat.configs import Settings, get_settings

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._reset()

    def _reset(self) -> None:
        self._http_client = None
        self._retry_policy = None
        self._chat_client = None
        self._caption_client = None
        self._embedding_client = None
        self._vector_index = None
        self._blob_client = None
        self._document_pipeline = None
        self._ingestion_worker = None

    @property
    def settings(self) -> Settings:
        """Get settings (process singleton unless injected)."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def http_client(self):
        """Get shared pooled HTTP client."""
        if self._http_client is None:
            from legalchat.boundary.http import build_http_client

            self._http_client = build_http_client(self.settings.http)
        return self._http_client

    @property
    def retry_policy(self):
        """Get shared retry policy."""
        if self._retry_policy is None:
            from legalchat.boundary.http import RetryPolicy

            self._retry_policy = RetryPolicy.from_settings(self.settings.retry)
        return self._retry_policy

    @property
    def chat_client(self):
        """Get cached chat client."""
        if self._chat_client is None:
            from legalchat.boundary.llm import ChatClient, build_chat_model

            self.settings.require(self.settings.model_service)
            model = build_chat_model(self.settings.model_service, self.http_client)
            self._chat_client = ChatClient(model, self.retry_policy, name="chat")
        return self._chat_client

    @property
    def caption_client(self):
        """Get cached vision client, or None when captioning is disabled."""
        model_settings = self.settings.model_service
        if self._caption_client is None and model_settings.captioning_enabled:
            from legalchat.boundary.llm import ChatClient, build_chat_model

            self.settings.require(model_settings)
            model = build_chat_model(model_settings, self.http_client, deployment=model_settings.caption_deployment)
            self._caption_client = ChatClient(model, self.retry_policy, name="caption")
        return self._caption_client

    @property
    def embedding_client(self):
        """Get cached embedding client."""
        if self._embedding_client is None:
            from legalchat.boundary.llm import EmbeddingClient, build_embedding_model

            self.settings.require(self.settings.model_service)
            model = build_embedding_model(self.settings.model_service, self.http_client)
            self._embedding_client = EmbeddingClient(
                model,
                self.retry_policy,
                dimension=self.settings.model_service.embedding_dimension,
            )
        return self._embedding_client

    @property
    def vector_index(self):
        """Get cached vector index."""
        if self._vector_index is None:
            from legalchat.boundary.vdb import get_vector_index

            self._vector_index = get_vector_index(self.settings.search, self.http_client, self.retry_policy)
        return self._vector_index

    @property
    def blob_client(self):
        """Get cached blob storage client."""
        if self._blob_client is None:
            from legalchat.boundary.storage import BlobStorageClient

            self.settings.require(self.settings.storage)
            self._blob_client = BlobStorageClient.from_settings(self.settings.storage, self.retry_policy)
        return self._blob_client

    @property
    def document_pipeline(self):
        """Get cached document pipeline."""
        if self._document_pipeline is None:
            from legalchat.core.document_processing import DocumentPipeline

            self._document_pipeline = DocumentPipeline(
                embedding_client=self.embedding_client,
                vector_index=self.vector_index,
                blob_client=self.blob_client,
                caption_client=self.caption_client,
                image_container=self.settings.storage.container,
                image_prefix=self.settings.storage.image_prefix,
            )
        return self._document_pipeline

    @property
    def ingestion_worker(self):
        """Get cached ingestion worker (not started)."""
        if self._ingestion_worker is None:
            from legalchat.core.document_processing import IngestionWorker
            from legalchat.core.document_processing.configs import get_pipeline_settings

            self._ingestion_worker = IngestionWorker(
                self.document_pipeline,
                queue_size=get_pipeline_settings().queue_size,
            )
        return self._ingestion_worker

    @property
    def active_ingestion_worker(self):
        """Worker if one has been built, without building it."""
        return self._ingestion_worker

    async def aclose(self) -> None:
        """Stop the worker, close the HTTP pool and clear all cached instances."""
        if self._ingestion_worker is not None:
            await self._ingestion_worker.stop()
        if self._vector_index is not None:
            await self._vector_index.close()
        if self._http_client is not None:
            await self._http_client.aclose()
        self._reset()


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_ask_service():
    """
    Get question answering service.

    Returns:
        AskService: Extractor, retriever and composer over shared clients

    Raises:
        ConfigurationError: Required model or search settings missing
    """
    from legalchat.application.services import AskService
    from legalchat.core.answer import AnswerComposer
    from legalchat.core.jurisdiction import JurisdictionExtractor
    from legalchat.core.retrieval import BalancedRetriever

    cache = get_service_cache()
    return AskService(
        extractor=JurisdictionExtractor(cache.chat_client),
        retriever=BalancedRetriever(cache.embedding_client, cache.vector_index, cache.settings.retrieval),
        composer=AnswerComposer(cache.chat_client),
        top_k=cache.settings.retrieval.top_k,
    )


def get_upload_service():
    """
    Get upload service.

    The ingestion worker is attached when DOC_PIPELINE_ENQUEUE_ON_UPLOAD is set.

    Returns:
        UploadService: Blob storage plus optional ingestion queue
    """
    from legalchat.application.services import UploadService
    from legalchat.core.document_processing.configs import get_pipeline_settings

    cache = get_service_cache()
    worker = cache.ingestion_worker if get_pipeline_settings().enqueue_on_upload else None
    return UploadService(
        blob_client=cache.blob_client,
        default_container=cache.settings.storage.container,
        worker=worker,
    )


def get_cleanup_service():
    """
    Get cleanup service.

    Returns:
        CleanupService: Index cleanup over the shared vector index
    """
    from legalchat.application.services import CleanupService
    from legalchat.core.document_processing.tasks import IndexSyncTask

    cache = get_service_cache()
    return CleanupService(IndexSyncTask(cache.vector_index))


def get_diagnostic_service():
    """
    Get diagnostic service.

    Returns:
        DiagnosticService: Report builder with lazy collaborator factories
    """
    from legalchat.application.services import DiagnosticService

    cache = get_service_cache()
    return DiagnosticService(
        settings=cache.settings,
        blob_client_factory=lambda: cache.blob_client,
        vector_index_factory=lambda: cache.vector_index,
        embedding_client_factory=lambda: cache.embedding_client,
        worker_factory=lambda: cache.active_ingestion_worker,
    )


def get_ask_service_factory():
    """
    Get a deferred AskService constructor.

    GET /api/ask?ping=1 must answer without building model or index clients,
    so the router resolves the service only after the ping check.

    Returns:
        Callable[[], AskService]: Builds the ask service on call
    """
    return get_ask_service
