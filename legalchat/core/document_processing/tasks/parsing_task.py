"""
Document parsing task using python-docx.

Walks the document body in order, emitting a text element per non-empty
paragraph and a Markdown table element per table. Embedded images are
collected separately and identified by a hash of their bytes.

Dependencies: python-docx, hashlib
System role: First stage of document ingestion pipeline
"""

import hashlib
import io
import logging

from docx import Document
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.table import Table
from docx.text.paragraph import Paragraph

from legalchat.core.exceptions import ParsingError

from ..models import ImageElement, ParsedDocument, TableElement, TextElement

logger = logging.getLogger(__name__)


def _clean_cell(text: str) -> str:
    return " ".join(text.split()).replace("|", "\\|")


def render_table(rows: list[list[str]]) -> TableElement | None:
    """
    Render table rows as Markdown.

    The first row is the header. Body rows are padded with empty cells or
    truncated to the header's column count.

    Args:
        rows: Cell texts per row

    Returns:
        TableElement | None: Table element, or None for a table without columns
    """
    if not rows or not rows[0]:
        return None

    header = [_clean_cell(cell) for cell in rows[0]]
    width = len(header)
    body = []
    for row in rows[1:]:
        cells = [_clean_cell(cell) for cell in row][:width]
        cells.extend([""] * (width - len(cells)))
        body.append(cells)

    lines = [
        "| " + " | ".join(header) + " |",
        "| " + " | ".join(["---"] * width) + " |",
    ]
    lines.extend("| " + " | ".join(cells) + " |" for cells in body)

    flat_cells = [cell for cells in body for cell in cells]
    digest_input = ",".join(header) + "|".join(flat_cells)
    table_id = hashlib.md5(digest_input.encode("utf-8")).hexdigest()[:8]
    return TableElement(markdown="\n".join(lines), table_id=table_id)


class ParsingTask:
    """Parse .docx documents into body elements and images."""

    def parse(self, data: bytes, filename: str) -> ParsedDocument:
        """
        Parse a document.

        Args:
            data: Raw .docx bytes
            filename: Document name (for errors and logs)

        Returns:
            ParsedDocument: Elements in body order plus images

        Raises:
            ParsingError: Corrupt document or no extractable content
        """
        try:
            document = Document(io.BytesIO(data))
        except Exception as e:
            raise ParsingError(
                f"Failed to open document: {e}", filename=filename, file_type="docx"
            ) from e

        try:
            elements = self._body_elements(document)
            images = self._images(document)
        except Exception as e:
            raise ParsingError(
                f"Failed to parse document: {e}", filename=filename, file_type="docx"
            ) from e

        parsed = ParsedDocument(filename=filename, elements=elements, images=images)
        if parsed.is_empty:
            raise ParsingError("Document contains no extractable content", filename=filename)

        logger.info(
            f"{__name__}:parse - Parsed document",
            extra={
                "doc_filename": filename,
                "paragraphs": sum(1 for e in elements if e.kind == "text"),
                "tables": sum(1 for e in elements if e.kind == "table"),
                "images": len(images),
            },
        )
        return parsed

    def _body_elements(self, document) -> list[TextElement | TableElement]:
        elements: list[TextElement | TableElement] = []
        for block in document.iter_inner_content():
            if isinstance(block, Paragraph):
                text = block.text.strip()
                if text:
                    elements.append(TextElement(text=text))
            elif isinstance(block, Table):
                rows = [[cell.text for cell in row.cells] for row in block.rows]
                table = render_table(rows)
                if table is not None:
                    elements.append(table)
        return elements

    def _images(self, document) -> list[ImageElement]:
        images: dict[str, ImageElement] = {}
        for rel in document.part.rels.values():
            if rel.reltype != RT.IMAGE or rel.is_external:
                continue
            part = rel.target_part
            blob = part.blob
            image_hash = hashlib.md5(blob).hexdigest()[:8]
            # Identical bytes referenced twice are stored once
            if image_hash in images:
                continue
            images[image_hash] = ImageElement(
                data=blob,
                content_type=part.content_type,
                extension=part.partname.ext or "bin",
                image_hash=image_hash,
            )
        return list(images.values())
