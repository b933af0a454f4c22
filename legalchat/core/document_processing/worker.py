"""
In-process ingestion worker.

Consumes IngestionEvents from an asyncio queue, one at a time, so that two
ingestions never interleave their delete/upload steps inside this process.
A failed event is logged and the worker moves on.

Dependencies: asyncio
System role: Queue-driven ingestion trigger for uploads received by the API
"""

import asyncio
import logging
from collections import deque
from contextlib import suppress

from .entrypoint import DocumentPipeline
from .models import IngestionEvent, PipelineResult

logger = logging.getLogger(__name__)


class IngestionWorker:
    """Single-consumer queue in front of the document pipeline."""

    def __init__(
        self,
        pipeline: DocumentPipeline,
        queue_size: int = 100,
        recent_limit: int = 20,
    ) -> None:
        """
        Initialize worker.

        Args:
            pipeline: Document pipeline
            queue_size: Maximum pending events
            recent_limit: Number of latest results kept in memory
        """
        self._pipeline = pipeline
        self._queue: asyncio.Queue[IngestionEvent] = asyncio.Queue(maxsize=queue_size)
        self._task: asyncio.Task | None = None
        self.recent: deque[PipelineResult] = deque(maxlen=recent_limit)
        self.processed: int = 0
        self.failures: int = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def start(self) -> None:
        """Start consuming (idempotent)."""
        if not self.running:
            self._task = asyncio.create_task(self._run(), name="ingestion-worker")
            logger.info(f"{__name__}:start - Ingestion worker started")

    async def stop(self) -> None:
        """Cancel the consumer task."""
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info(f"{__name__}:stop - Ingestion worker stopped")

    async def enqueue(self, event: IngestionEvent) -> None:
        """
        Queue an event.

        Args:
            event: Container and filename to ingest
        """
        await self._queue.put(event)
        logger.info(
            f"{__name__}:enqueue - Ingestion queued",
            extra={"container": event.container, "doc_filename": event.filename, "pending": self.pending},
        )

    async def join(self) -> None:
        """Wait until every queued event has been handled."""
        await self._queue.join()

    async def _run(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                result = await self._pipeline.process_event(event)
                self.processed += 1
                self.recent.append(result)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self.failures += 1
                logger.exception(
                    f"{__name__}:_run - Ingestion failed",
                    extra={
                        "container": event.container,
                        "doc_filename": event.filename,
                        "error_type": type(e).__name__,
                    },
                )
            finally:
                self._queue.task_done()
