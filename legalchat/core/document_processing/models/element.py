"""
Document element models.

A parsed document is a sequence of text and table elements in body order
plus a separate list of embedded images. Elements live only for one
ingestion run.

Dependencies: pydantic
System role: Normalized parser output consumed by captioning and chunking
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class TextElement(BaseModel):
    """Non-empty paragraph."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str


class TableElement(BaseModel):
    """Table rendered to Markdown."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["table"] = "table"
    markdown: str
    table_id: str = Field(description="Hash of header and cell content")


class ImageElement(BaseModel):
    """
    Embedded image.

    caption, ocr_text and url are filled in by the captioning step.
    """

    kind: Literal["image"] = "image"
    data: bytes = Field(repr=False)
    content_type: str = "image/jpeg"
    extension: str = "jpg"
    image_hash: str = Field(description="First 8 hex chars of the content MD5")
    caption: str | None = None
    ocr_text: str | None = None
    url: str | None = None

    @property
    def file_name(self) -> str:
        return f"image_{self.image_hash}.{self.extension}"

    @property
    def figure_id(self) -> str:
        return f"figure_{self.image_hash}"

    @property
    def placeholder(self) -> str:
        """Content used when no caption or OCR text is available."""
        return f"Image: {self.file_name}"


BodyElement = TextElement | TableElement


class ParsedDocument(BaseModel):
    """Parser output for one document."""

    filename: str
    elements: list[BodyElement] = Field(default_factory=list)
    images: list[ImageElement] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.elements and not self.images
