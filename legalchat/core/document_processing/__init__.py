"""
Document ingestion pipeline.

Parse -> caption -> chunk -> embed -> index sync, plus the queue worker and
the storage-event handler that trigger it.
"""

from .entrypoint import DocumentPipeline
from .models import IngestionEvent, PipelineResult
from .worker import IngestionWorker

__all__ = ["DocumentPipeline", "IngestionEvent", "IngestionWorker", "PipelineResult"]
