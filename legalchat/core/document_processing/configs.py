"""
Configuration settings for document processing pipeline.

Provides environment-based configuration for chunking, embedding and the
ingestion queue.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DocumentPipelineSettings(BaseSettings):
    """Settings for document ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="DOC_PIPELINE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    max_chunk_chars: int = Field(
        default=2000,
        description="Size bound for text chunks in characters",
    )

    # Embedding settings
    embedding_concurrency: int = Field(
        default=4,
        description="Concurrent per-chunk embedding calls",
    )

    # Ingestion trigger settings
    enqueue_on_upload: bool = Field(
        default=True,
        description="Queue an ingestion run after every successful upload",
    )
    queue_size: int = Field(
        default=100,
        description="Maximum pending ingestion events",
    )


@lru_cache
def get_pipeline_settings() -> DocumentPipelineSettings:
    """
    Get cached pipeline settings instance.

    Returns:
        DocumentPipelineSettings: Singleton settings loaded from environment
    """
    return DocumentPipelineSettings()
