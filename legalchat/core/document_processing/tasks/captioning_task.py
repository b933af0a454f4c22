"""
Image captioning and OCR task.

For each image, one vision model call returns a caption and any legible
text as JSON. Failures fall back to a placeholder caption; the image is
never dropped. Image bytes are stored under ``<prefix>/<ISO>/`` and the URL
recorded on the element. Skipped entirely when no vision deployment is
configured.

Dependencies: langchain_core, pydantic, legalchat.boundary, legalchat.core.jurisdiction
System role: Optional enrichment between parsing and chunking
"""

import base64
import logging

from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError

from legalchat.boundary.llm.chat_client import ChatClient
from legalchat.boundary.storage.blob_client import BlobStorageClient
from legalchat.core.exceptions import BlobStorageError, ChatCompletionError
from legalchat.core.jurisdiction.extractor import strip_code_fence

from ..models import ImageElement

logger = logging.getLogger(__name__)

CAPTION_SYSTEM_PROMPT = "You caption legal document images and extract exact text."
CAPTION_USER_PROMPT = (
    "Provide a concise caption for this legal document image, and extract any legible text "
    "exactly as OCR. Return JSON with keys 'caption' and 'image_text'."
)


class CaptionResult(BaseModel):
    """Vision model reply."""

    model_config = ConfigDict(extra="ignore")

    caption: str = ""
    image_text: str = ""


def parse_caption(raw: str) -> CaptionResult:
    """
    Parse a caption reply; code fences are dropped and non-JSON replies
    become the caption itself.

    Args:
        raw: Model reply text

    Returns:
        CaptionResult: Caption and OCR text
    """
    cleaned = strip_code_fence(raw)
    try:
        return CaptionResult.model_validate_json(cleaned)
    except PydanticValidationError:
        return CaptionResult(caption=cleaned)


class CaptioningTask:
    """Caption, OCR and store document images."""

    def __init__(
        self,
        chat_client: ChatClient | None,
        blob_client: BlobStorageClient | None,
        container: str,
        image_prefix: str = "images",
    ) -> None:
        """
        Initialize captioning task.

        Args:
            chat_client: Vision-capable chat client; None disables the task
            blob_client: Storage for image bytes; None skips storage
            container: Container receiving images
            image_prefix: Key prefix for images
        """
        self._chat = chat_client
        self._blobs = blob_client
        self._container = container
        self._prefix = image_prefix.strip("/")

    @property
    def enabled(self) -> bool:
        return self._chat is not None

    async def run(self, images: list[ImageElement], iso_code: str) -> list[ImageElement]:
        """
        Caption and store every image.

        Args:
            images: Parsed images
            iso_code: Jurisdiction for the storage location

        Returns:
            list[ImageElement]: Same elements with caption, OCR text and URL set
        """
        if not self.enabled or not images:
            return images

        logger.info(
            f"{__name__}:run - Captioning images",
            extra={"iso_code": iso_code, "images": len(images)},
        )
        for image in images:
            result = await self._caption(image)
            image.caption = result.caption or image.placeholder
            image.ocr_text = result.image_text or None
            image.url = await self._store(image, iso_code)
        return images

    async def _caption(self, image: ImageElement) -> CaptionResult:
        data_uri = f"data:{image.content_type};base64,{base64.b64encode(image.data).decode('ascii')}"
        messages = [
            SystemMessage(content=CAPTION_SYSTEM_PROMPT),
            HumanMessage(
                content=[
                    {"type": "text", "text": CAPTION_USER_PROMPT},
                    {"type": "image_url", "image_url": {"url": data_uri}},
                ]
            ),
        ]
        try:
            reply = await self._chat.complete(messages, response_format={"type": "json_object"})
        except ChatCompletionError as e:
            logger.warning(
                f"{__name__}:_caption - Caption/OCR failed, using placeholder",
                extra={"image": image.file_name, "error": str(e)},
            )
            return CaptionResult(caption=image.placeholder)
        return parse_caption(reply)

    async def _store(self, image: ImageElement, iso_code: str) -> str | None:
        if self._blobs is None:
            return None
        key = f"{self._prefix}/{iso_code}/{image.file_name}"
        try:
            return await self._blobs.upload(self._container, key, image.data, image.content_type)
        except BlobStorageError as e:
            logger.warning(
                f"{__name__}:_store - Image upload failed",
                extra={"key": key, "error": str(e)},
            )
            return None
