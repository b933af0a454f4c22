"""
Ingestion event schema.

Payload queued when a document lands in storage: the container and object
name. Processing the same event twice is safe because index ids are
deterministic and sync deletes before uploading.

Dependencies: pydantic
System role: Data validation and contract definition for ingestion triggers
"""

from pydantic import BaseModel, ConfigDict, Field


class IngestionEvent(BaseModel):
    """Document uploaded to a container."""

    container: str = Field(..., description="Container (bucket) holding the document")
    filename: str = Field(..., description="Object name, e.g. DE.docx")

    model_config = ConfigDict(
        json_schema_extra={"example": {"container": "legaldocsrag", "filename": "DE.docx"}}
    )
