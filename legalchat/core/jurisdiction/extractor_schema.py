"""
Structured output schema for jurisdiction detection.

The model replies with a JSON array of ``{"detected_phrase", "code"}``
objects. The reply is untrusted input: it is validated into these types and
anything that does not fit is discarded.

Dependencies: pydantic
System role: Typed contract for the extractor's model output
"""

from pydantic import BaseModel, ConfigDict, TypeAdapter


class DetectedJurisdiction(BaseModel):
    """One country reference found in the question."""

    model_config = ConfigDict(extra="ignore")

    detected_phrase: str | None = None
    code: str | None = None


DETECTIONS_ADAPTER = TypeAdapter(list[DetectedJurisdiction])
