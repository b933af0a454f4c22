"""
Jurisdiction code extractor.

Delegates code identification to a chat model under a fixed extraction
contract, then parses the reply into an ordered, de-duplicated list of
upper-case two-letter codes. A malformed reply degrades to "no
jurisdiction"; a failed model call propagates.

Dependencies: pydantic, langchain_core, legalchat.boundary.llm
System role: First stage of question answering
"""

import json
import logging
import re

from pydantic import ValidationError as PydanticValidationError

from legalchat.boundary.llm.chat_client import ChatClient
from legalchat.core.jurisdiction.codes import is_jurisdiction_code
from legalchat.core.jurisdiction.extractor_prompt import JURISDICTION_PROMPT
from legalchat.core.jurisdiction.extractor_schema import DETECTIONS_ADAPTER

logger = logging.getLogger(__name__)

OPENING_FENCE = re.compile(r"^```[A-Za-z0-9_-]*\s*")


def strip_code_fence(raw: str) -> str:
    """
    Remove markdown code-fence wrapping from a model reply.

    Args:
        raw: Reply text, possibly wrapped in ```json ... ``` (any language tag)

    Returns:
        str: Inner text, stripped
    """
    cleaned = OPENING_FENCE.sub("", raw.strip())
    if cleaned.endswith("```"):
        cleaned = cleaned[: -len("```")]
    return cleaned.strip()


def parse_jurisdiction_codes(raw: str) -> list[str]:
    """
    Parse a detection reply into codes.

    Codes are upper-cased, anything not shaped like an alpha-2 code is
    dropped, and duplicates are removed keeping first-seen order.

    Args:
        raw: Model reply text

    Returns:
        list[str]: Ordered unique codes; empty on any parse failure
    """
    try:
        detections = DETECTIONS_ADAPTER.validate_json(strip_code_fence(raw))
    except (PydanticValidationError, json.JSONDecodeError, ValueError) as e:
        logger.warning(
            f"{__name__}:parse_jurisdiction_codes - Unparseable detection reply",
            extra={"error": str(e), "raw_preview": raw[:200]},
        )
        return []

    codes: list[str] = []
    for detection in detections:
        code = (detection.code or "").strip().upper()
        if not is_jurisdiction_code(code):
            if code:
                logger.debug(f"{__name__}:parse_jurisdiction_codes - Dropping code {code!r}")
            continue
        if code not in codes:
            codes.append(code)
    return codes


class JurisdictionExtractor:
    """Extract jurisdiction codes from a free-text question."""

    def __init__(self, chat_client: ChatClient) -> None:
        """
        Initialize extractor.

        Args:
            chat_client: Chat client (temperature 0)
        """
        self._chat = chat_client

    async def extract(self, question: str) -> list[str]:
        """
        Detect jurisdictions referenced by the question.

        Args:
            question: User question

        Returns:
            list[str]: Ordered, de-duplicated codes (possibly empty)

        Raises:
            ChatCompletionError: Model call failed after retries
        """
        messages = JURISDICTION_PROMPT.format_messages(question=question)
        reply = await self._chat.complete(messages)
        codes = parse_jurisdiction_codes(reply)
        logger.info(
            f"{__name__}:extract - Detected jurisdictions",
            extra={"iso_codes": codes},
        )
        return codes
