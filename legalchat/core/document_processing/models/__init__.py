"""
Models for document processing pipeline.

Exports: TextElement, TableElement, ImageElement, ParsedDocument, Chunk,
PipelineResult, IngestionEvent
"""

from .chunk import Chunk
from .element import BodyElement, ImageElement, ParsedDocument, TableElement, TextElement
from .ingestion_event import IngestionEvent
from .pipeline_result import PipelineResult

__all__ = [
    "BodyElement",
    "Chunk",
    "ImageElement",
    "IngestionEvent",
    "ParsedDocument",
    "PipelineResult",
    "TableElement",
    "TextElement",
]
