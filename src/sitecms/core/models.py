"""Intermediate data models for the document ingestion pipeline"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, model_validator


class SourceKind(str, Enum):
    """Declared kind of an uploaded document buffer."""
    word = "word"
    pdf = "pdf"
    text = "text"
    markdown = "markdown"


class BlockTypeEnum(str, Enum):
    """Restrict parsed content blocks to a predefined set of elements"""
    heading = "heading"
    paragraph = "paragraph"
    list = "list"
    image = "image"
    table = "table"


class ContentBlock(BaseModel):
    """A single typed content block from an uploaded document."""
    type: BlockTypeEnum
    content: str = ""               # text, image source, or raw table markup
    level: Optional[int] = None     # heading level (1-6); None for non-headings
    items: Optional[list[str]] = None
    ordered: bool = False

    @model_validator(mode="after")
    def _check_payload(self) -> "ContentBlock":
        if self.type == BlockTypeEnum.heading:
            if self.level is None or not 1 <= self.level <= 6:
                raise ValueError("heading blocks need a level between 1 and 6")
        elif self.level is not None:
            raise ValueError("level is only valid on heading blocks")

        if self.type == BlockTypeEnum.list:
            if not self.items:
                raise ValueError("list blocks need at least one item")
        elif self.items is not None:
            raise ValueError("items are only valid on list blocks")
        return self


class ParsedDocument(BaseModel):
    """Terminal artifact of ingestion; handed to the caller, never persisted as-is."""
    title: str
    content: str
    excerpt: str = ""
    images: list[str] = []
    blocks: list[ContentBlock] = []
