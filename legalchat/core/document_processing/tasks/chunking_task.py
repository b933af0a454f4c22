"""
Chunk segmentation task.

Consecutive paragraphs are joined (blank-line separated) until adding the
next one would push the chunk past the size bound. A table closes the open
text chunk and becomes a chunk of its own. Images follow as one chunk each,
content = caption then OCR text.

Dependencies: None (pure domain logic)
System role: Second stage of document ingestion pipeline
"""

from ..models import Chunk, ImageElement, ParsedDocument

PARAGRAPH_SEPARATOR = "\n\n"


class ChunkingTask:
    """Split parsed elements into bounded text, table and image chunks."""

    def __init__(self, max_chars: int = 2000) -> None:
        """
        Initialize chunking task.

        Args:
            max_chars: Size bound for text chunks

        Raises:
            ValueError: When max_chars is not positive
        """
        if max_chars <= 0:
            raise ValueError("max_chars must be positive")
        self._max_chars = max_chars

    def chunk(self, document: ParsedDocument) -> list[Chunk]:
        """
        Segment a parsed document.

        Args:
            document: Parser output

        Returns:
            list[Chunk]: Text/table chunks in body order, then image chunks
        """
        chunks: list[Chunk] = []
        buffer: list[str] = []
        buffer_len = 0

        def flush() -> None:
            nonlocal buffer, buffer_len
            if buffer:
                chunks.append(Chunk(content=PARAGRAPH_SEPARATOR.join(buffer), chunk_type="text"))
            buffer, buffer_len = [], 0

        for element in document.elements:
            if element.kind == "table":
                flush()
                chunks.append(
                    Chunk(content=element.markdown, chunk_type="table", table_md=element.markdown)
                )
                continue

            added = len(element.text) + (len(PARAGRAPH_SEPARATOR) if buffer else 0)
            if buffer and buffer_len + added > self._max_chars:
                flush()
                added = len(element.text)
            buffer.append(element.text)
            buffer_len += added

        flush()
        chunks.extend(self._image_chunk(image) for image in document.images)
        return chunks

    @staticmethod
    def _image_chunk(image: ImageElement) -> Chunk:
        parts = [text for text in (image.caption, image.ocr_text) if text and text.strip()]
        content = PARAGRAPH_SEPARATOR.join(parts) if parts else image.placeholder
        return Chunk(
            content=content,
            chunk_type="image",
            image_figure_id=image.figure_id,
            image_ocr_text=image.ocr_text,
            image_url=image.url,
        )
