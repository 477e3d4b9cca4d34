"""Visual block model and the in-memory editing session behind the drag-and-drop editor"""

import itertools
import time
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel


class VisualBlockType(str, Enum):
    """Layout archetypes available in the visual editor"""
    left_image_right_text = "left-image-right-text"
    right_image_left_text = "right-image-left-text"
    full_width_image = "full-width-image"
    full_width_text = "full-width-text"
    image_caption = "image-caption"
    video_embed = "video-embed"
    table = "table"
    chart = "chart"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class TableData(_CamelModel):
    headers: list[str]
    rows: list[list[str]]   # row length is not enforced against headers


class ChartData(_CamelModel):
    type: Literal["pie", "bar", "line"] = "bar"
    labels: list[str] = []
    data: list[float] = []
    title: str = ""


class BlockContent(_CamelModel):
    """Styling and text fields shared by every archetype."""
    title: str = ""
    text: str = ""
    image_url: str = ""
    width: int = Field(default=100, ge=0, le=100, description="Container width in percent")
    alignment: Literal["left", "center", "right"] = "center"
    has_border: bool = False
    has_shadow: bool = False
    font_size: Literal["sm", "base", "lg", "xl"] = "base"
    font_weight: Literal["normal", "medium", "semibold", "bold"] = "normal"
    text_color: str = "#000000"


class CaptionedContent(BlockContent):
    caption: str = ""


class VideoContent(BlockContent):
    video_url: str = ""


class TableContent(BlockContent):
    table_data: TableData


class ChartContent(BlockContent):
    chart_data: ChartData


class _Block(_CamelModel):
    id: str


class LeftImageRightTextBlock(_Block):
    type: Literal["left-image-right-text"] = "left-image-right-text"
    content: BlockContent


class RightImageLeftTextBlock(_Block):
    type: Literal["right-image-left-text"] = "right-image-left-text"
    content: BlockContent


class FullWidthImageBlock(_Block):
    type: Literal["full-width-image"] = "full-width-image"
    content: CaptionedContent


class FullWidthTextBlock(_Block):
    type: Literal["full-width-text"] = "full-width-text"
    content: BlockContent


class ImageCaptionBlock(_Block):
    type: Literal["image-caption"] = "image-caption"
    content: CaptionedContent


class VideoEmbedBlock(_Block):
    type: Literal["video-embed"] = "video-embed"
    content: VideoContent


class TableBlock(_Block):
    type: Literal["table"] = "table"
    content: TableContent


class ChartBlock(_Block):
    type: Literal["chart"] = "chart"
    content: ChartContent


VisualBlock = Annotated[
    Union[
        LeftImageRightTextBlock, RightImageLeftTextBlock, FullWidthImageBlock, FullWidthTextBlock,
        ImageCaptionBlock, VideoEmbedBlock, TableBlock, ChartBlock,
    ],
    Field(discriminator="type"),
]

VISUAL_BLOCK_ADAPTER = TypeAdapter(VisualBlock)


class BlogStructure(_CamelModel):
    """The whole authoring session, persisted as one JSON document."""
    title: str = ""
    featured_image: str = ""
    author: str = ""
    date: str = ""
    blocks: list[VisualBlock] = []


BLOCK_DEFAULTS: dict[VisualBlockType, dict] = {
    VisualBlockType.left_image_right_text: {
        "text": "Add your text content here...",
        "imageUrl": "https://via.placeholder.com/400x300",
    },
    VisualBlockType.right_image_left_text: {
        "text": "Add your text content here...",
        "imageUrl": "https://via.placeholder.com/400x300",
    },
    VisualBlockType.full_width_image: {
        "imageUrl": "https://via.placeholder.com/800x400",
        "caption": "Image caption",
    },
    VisualBlockType.full_width_text: {
        "text": "Add your full-width text content here...",
        "fontSize": "lg",
    },
    VisualBlockType.image_caption: {
        "imageUrl": "https://via.placeholder.com/600x400",
        "caption": "Image caption",
    },
    VisualBlockType.video_embed: {
        "videoUrl": "https://www.youtube.com/embed/dQw4w9WgXcQ",
    },
    VisualBlockType.table: {
        "tableData": {
            "headers": ["Header 1", "Header 2", "Header 3"],
            "rows": [
                ["Row 1 Col 1", "Row 1 Col 2", "Row 1 Col 3"],
                ["Row 2 Col 1", "Row 2 Col 2", "Row 2 Col 3"],
            ],
        },
    },
    VisualBlockType.chart: {
        "chartData": {"type": "bar", "labels": ["Jan", "Feb", "Mar"], "data": [30, 45, 60], "title": "Sample Chart"},
    },
}

_ids = itertools.count(1)


def new_block_id() -> str:
    """Process-unique id; the counter keeps ids distinct within one millisecond."""
    return f"block-{int(time.time() * 1000)}-{next(_ids)}"


def create_block(block_type: VisualBlockType | str) -> VisualBlock:
    """Return a new block of the given type with archetype defaults and a fresh id."""
    block_type = VisualBlockType(block_type)
    return VISUAL_BLOCK_ADAPTER.validate_python({
        "id": new_block_id(),
        "type": block_type.value,
        "content": dict(BLOCK_DEFAULTS[block_type]),
    })


class BlogEditor:
    """Ordered block sequence for one authoring session.

    Array position is the render order; reorder() is the only way to change it.
    Nothing is persisted until the caller serialises the structure with to_json().
    """

    def __init__(self, structure: Optional[BlogStructure] = None):
        self.structure = structure or BlogStructure()

    @classmethod
    def from_json(cls, payload: str | dict) -> "BlogEditor":
        if isinstance(payload, str):
            return cls(BlogStructure.model_validate_json(payload))
        return cls(BlogStructure.model_validate(payload))

    def to_json(self) -> str:
        return self.structure.model_dump_json(by_alias=True)

    def to_dict(self) -> dict:
        return self.structure.model_dump(mode="json", by_alias=True)

    def get_blocks(self) -> list[VisualBlock]:
        return list(self.structure.blocks)

    def create_block(self, block_type: VisualBlockType | str) -> VisualBlock:
        return create_block(block_type)

    def add_block(self, block_type: VisualBlockType | str) -> VisualBlock:
        """Append a new block to the end of the sequence."""
        block = create_block(block_type)
        self.structure.blocks.append(block)
        return block

    def reorder(self, from_index: int, to_index: int) -> None:
        """Move the block at from_index so that it ends up at to_index."""
        blocks = self.structure.blocks
        if not (0 <= from_index < len(blocks) and 0 <= to_index < len(blocks)):
            raise IndexError(f"reorder {from_index} -> {to_index} out of range for {len(blocks)} blocks")
        block = blocks.pop(from_index)
        blocks.insert(to_index, block)

    def _index(self, block_id: str) -> Optional[int]:
        return next((i for i, b in enumerate(self.structure.blocks) if b.id == block_id), None)

    def update_block(self, block_id: str, **changes) -> Optional[VisualBlock]:
        """Merge changes into a block's content; None when the id is unknown.

        Changes accept field names or their camelCase aliases. Fields that are
        not valid for the block's archetype raise ValueError.
        """
        i = self._index(block_id)
        if i is None:
            return None
        block = self.structure.blocks[i]
        content_cls = type(block.content)
        fields = content_cls.model_fields
        aliased = {(fields[k].alias if k in fields else k): v for k, v in changes.items()}
        merged = {**block.content.model_dump(by_alias=True), **aliased}
        try:
            content = content_cls.model_validate(merged)
        except ValidationError as e:
            raise ValueError(f"Invalid content for {block.type} block: {e}") from e
        updated = block.model_copy(update={"content": content})
        self.structure.blocks[i] = updated
        return updated

    def delete_block(self, block_id: str) -> bool:
        """Remove the block with block_id; returns False when it was not present."""
        i = self._index(block_id)
        if i is None:
            return False
        del self.structure.blocks[i]
        return True
