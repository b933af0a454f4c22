"""
Pipeline result model for document processing.

Represents the outcome of processing a document through the pipeline.

Dependencies: pydantic
System role: Return type for DocumentPipeline.process()
"""

from pydantic import BaseModel, Field


class PipelineResult(BaseModel):
    """Result of document processing pipeline execution."""

    iso_code: str = Field(description="Jurisdiction the document was indexed under")
    filename: str = Field(description="Source document name")
    chunk_count: int = Field(description="Number of chunks generated")
    image_count: int = Field(default=0, description="Images extracted from the document")
    degraded_embeddings: int = Field(default=0, description="Chunks indexed with a zero vector")
    deleted_count: int = Field(default=0, description="Prior documents removed for the jurisdiction")
    delete_failed_count: int = Field(default=0, description="Prior documents the index failed to remove")
    uploaded_count: int = Field(default=0, description="Documents accepted by the index")
    upload_failed_count: int = Field(default=0, description="Documents rejected by the index")
    processing_time_ms: float = Field(description="Total processing time in milliseconds")

    @property
    def succeeded(self) -> bool:
        return self.upload_failed_count == 0
