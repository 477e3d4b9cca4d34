"""Line heuristics that turn extracted plain text into typed blocks"""

import re

from sitecms.core.models import BlockTypeEnum, ContentBlock


LIST_MARKER_RE = re.compile(r'^(?:[•\-]|\d+\.)')
LIST_STRIP_RE = re.compile(r'^(?:[•\-]|\d+\.)\s*')


def _is_heading(line: str, max_length: int) -> bool:
    """Short lines without a closing period read as section headings."""
    return len(line) < max_length and not line.endswith('.')


def text_to_blocks(text: str, heading_max_length: int = 100) -> tuple[str | None, list[ContentBlock]]:
    """Classify non-blank lines into blocks; returns (title, blocks).

    The first non-blank line is the title and a level-1 heading. Each later
    line is tested in order: heading heuristic, list marker, paragraph. List
    lines are not grouped, each one becomes its own single-item list.
    """
    lines = [line.strip() for line in text.split('\n') if line.strip()]
    if not lines:
        return None, []

    title = lines[0]
    blocks = [ContentBlock(type=BlockTypeEnum.heading, level=1, content=title)]

    for line in lines[1:]:
        if _is_heading(line, heading_max_length):
            blocks.append(ContentBlock(type=BlockTypeEnum.heading, level=2, content=line))
        elif LIST_MARKER_RE.match(line):
            item = LIST_STRIP_RE.sub('', line, count=1)
            blocks.append(ContentBlock(type=BlockTypeEnum.list, content='ul', items=[item]))
        else:
            blocks.append(ContentBlock(type=BlockTypeEnum.paragraph, content=line))

    return title, blocks
