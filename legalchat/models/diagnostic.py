"""
Diagnostic report models.

Dependencies: pydantic
System role: Response schema for /api/diagnostic
"""

from pydantic import BaseModel, Field


class StorageStatus(BaseModel):
    status: str = "unknown"
    container: str = ""
    container_exists: bool | None = None
    recent_blobs: list[str] = Field(default_factory=list)
    error: str | None = None


class SearchStatus(BaseModel):
    status: str = "unknown"
    index_name: str = ""
    store_type: str = ""
    document_count: int | None = None
    per_iso_counts: dict[str, int] = Field(default_factory=dict)
    error: str | None = None


class ModelServiceStatus(BaseModel):
    status: str = "unknown"
    endpoint_set: bool = False
    api_key_set: bool = False
    embed_deployment: str = ""
    caption_enabled: bool = False
    embedding_dimension: int | None = None
    error: str | None = None


class RuntimeInfo(BaseModel):
    app_name: str
    version: str
    environment: str
    ingestion_worker_running: bool = False
    pending_ingestions: int = 0
    ingestions_processed: int = 0
    ingestions_failed: int = 0
    recent_ingestions: list[str] = Field(default_factory=list)


class DiagnosticReport(BaseModel):
    """Per-dependency reachability report."""

    environment_variables: dict[str, bool] = Field(default_factory=dict)
    storage: StorageStatus
    search: SearchStatus
    openai: ModelServiceStatus
    runtime: RuntimeInfo
