"""
Queue-message handler for storage-triggered document processing.

Processes documents uploaded to the object store through the ingestion
pipeline: S3 ObjectCreated notification -> SQS -> this handler. Only keys
whose basename is ``XX.docx`` are processed; other objects (extracted
images, stray files) are skipped. Re-delivery of the same message is safe:
ids are deterministic and sync deletes before uploading.

Environment variables: the same SEARCH_*, OPENAI_* and STORAGE_* settings
as the API service, plus LOG_LEVEL.

Dependencies: asyncio, legalchat.api.deps, entrypoint
System role: Serverless entry point for event-driven ingestion
"""

import asyncio
import json
import logging
import os
from typing import Any, Dict
from urllib.parse import unquote_plus

from dotenv import load_dotenv

from legalchat.core.exceptions import FilenameValidationError
from legalchat.core.jurisdiction.codes import jurisdiction_from_filename

from .models import IngestionEvent

# Load environment variables from .env if present
load_dotenv()

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv("LOG_LEVEL", "INFO"))


class MessageParseError(Exception):
    """Raised when a queue message cannot be parsed."""

    pass


def parse_s3_event_record(record: Dict[str, Any]) -> list[IngestionEvent]:
    """
    Parse the S3 notification carried by one SQS record.

    S3 sends event notifications to SQS with this structure:
    {
        "Records": [{
            "eventSource": "aws:s3",
            "s3": {
                "bucket": {"name": "legaldocsrag"},
                "object": {"key": "DE.docx", "size": 1024}
            }
        }]
    }

    Args:
        record: SQS record containing S3 event

    Returns:
        list[IngestionEvent]: One event per object in the notification

    Raises:
        MessageParseError: Invalid S3 event format or missing fields
    """
    try:
        message_body = record.get("body")
        if not message_body:
            raise ValueError("Empty message body")

        s3_event = json.loads(message_body)
        s3_records = s3_event.get("Records", [s3_event]) if isinstance(s3_event, dict) else []
        if not s3_records:
            raise ValueError("No S3 records in event")

        events = []
        for s3_record in s3_records:
            if s3_record.get("eventSource") != "aws:s3":
                raise ValueError(f"Invalid event source: {s3_record.get('eventSource')}")
            s3_info = s3_record.get("s3", {})
            bucket = s3_info.get("bucket", {}).get("name", "")
            key = unquote_plus(s3_info.get("object", {}).get("key", ""))
            if not bucket or not key:
                raise ValueError("Missing bucket name or object key")
            events.append(IngestionEvent(container=bucket, filename=key))
        return events

    except json.JSONDecodeError as e:
        logger.error("%s:parse_s3_event_record - JSONDecodeError: %s", __name__, e)
        raise MessageParseError(f"Invalid JSON in message body: {e}") from e
    except ValueError as e:
        logger.error("%s:parse_s3_event_record - ValueError: %s", __name__, e)
        raise MessageParseError(f"Invalid S3 event format: {e}") from e


async def _process_records(records: list[Dict[str, Any]], cache=None) -> list[Dict[str, Any]]:
    """Run the pipeline for every document referenced by the records."""
    from legalchat.api.deps.dependencies import ServiceCache

    owns_cache = cache is None
    cache = cache or ServiceCache()
    results: list[Dict[str, Any]] = []
    try:
        for record in records:
            message_id = record.get("messageId")
            try:
                events = parse_s3_event_record(record)
            except MessageParseError as e:
                results.append(
                    {
                        "messageId": message_id,
                        "status": "failed",
                        "error": "Invalid message format",
                        "details": str(e),
                    }
                )
                continue

            for event in events:
                try:
                    jurisdiction_from_filename(os.path.basename(event.filename))
                except FilenameValidationError:
                    logger.info(
                        "%s:handler - Skipping non-document object",
                        __name__,
                        extra={"key": event.filename},
                    )
                    results.append({"messageId": message_id, "status": "skipped", "key": event.filename})
                    continue

                try:
                    pipeline_result = await cache.document_pipeline.process_event(event)
                except Exception as e:
                    logger.error(
                        "%s:handler - %s: %s",
                        __name__,
                        type(e).__name__,
                        e,
                        extra={"key": event.filename},
                    )
                    results.append(
                        {
                            "messageId": message_id,
                            "status": "failed",
                            "error": "Document processing failed",
                            "details": str(e),
                        }
                    )
                    continue

                results.append(
                    {
                        "messageId": message_id,
                        "status": "success" if pipeline_result.succeeded else "partial",
                        "iso_code": pipeline_result.iso_code,
                        "chunk_count": pipeline_result.chunk_count,
                        "upload_failed_count": pipeline_result.upload_failed_count,
                        "processing_time_ms": pipeline_result.processing_time_ms,
                    }
                )
    finally:
        if owns_cache:
            await cache.aclose()
    return results


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Entry point for SQS-delivered storage notifications.

    Records are processed sequentially. A bad record does not stop the batch.

    Args:
        event: SQS event with Records array
        context: Runtime context object

    Returns:
        Dict with statusCode (200 all succeeded, 206 partial failure) and results
    """
    records = event.get("Records", [])
    logger.info("handler - Received SQS event", extra={"record_count": len(records)})

    results = asyncio.run(_process_records(records))

    failed_count = sum(1 for r in results if r["status"] in ("failed", "partial"))
    status_code = 200 if failed_count == 0 else 206
    logger.info(
        "%s:handler - Processing complete",
        __name__,
        extra={"success_count": len(results) - failed_count, "failed_count": failed_count},
    )
    return {
        "statusCode": status_code,
        "body": json.dumps({"processed": len(results), "failed": failed_count, "results": results}),
    }
