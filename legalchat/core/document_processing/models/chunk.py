"""
Chunk domain model for document processing pipeline.

Represents one retrieval unit: a bounded run of paragraphs, a single table,
or a single image.

Dependencies: pydantic
System role: Data structure for document chunks in ingestion pipeline
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """Immutable chunk produced by the chunking task."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Chunk text content")
    chunk_type: Literal["text", "table", "image"] = Field(default="text")
    table_md: str | None = Field(default=None, description="Markdown for table chunks")
    image_figure_id: str | None = Field(default=None, description="figure_<hash> for image chunks")
    image_ocr_text: str | None = Field(default=None, description="Legible text extracted from the image")
    image_url: str | None = Field(default=None, description="Stored image location")
