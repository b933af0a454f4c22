"""
Task modules for document processing pipeline.

Exports: ParsingTask, CaptioningTask, ChunkingTask, EmbeddingTask, IndexSyncTask
"""

from .captioning_task import CaptioningTask, CaptionResult, parse_caption
from .chunking_task import ChunkingTask
from .embedding_task import EmbeddingOutcome, EmbeddingTask
from .index_sync_task import IndexSyncResult, IndexSyncTask, build_index_documents
from .parsing_task import ParsingTask, render_table

__all__ = [
    "CaptionResult",
    "CaptioningTask",
    "ChunkingTask",
    "EmbeddingOutcome",
    "EmbeddingTask",
    "IndexSyncResult",
    "IndexSyncTask",
    "ParsingTask",
    "build_index_documents",
    "parse_caption",
    "render_table",
]
