"""Markup builders: parsed blocks to rich HTML, excerpts, and print-ready blog pages"""

from datetime import datetime
from html import escape

from sitecms.core.models import BlockTypeEnum, ContentBlock


IMAGE_CONTAINER = (
    '<div class="image-container" style="text-align: {align};">'
    '<img src="{src}" alt="Document image" style="max-width: 100%; height: auto;" />'
    '</div>'
)

PRINT_TEMPLATE = """\
<html>
  <head>
    <title>{title}</title>
    <style>
      body {{ font-family: Arial, sans-serif; padding: 20px; }}
      h1 {{ color: #333; }}
      .meta {{ color: #666; margin-bottom: 20px; }}
      .content {{ line-height: 1.6; }}
    </style>
  </head>
  <body>
    <h1>{title}</h1>
    <div class="meta">
      <p>Category: {category}</p>
      <p>Published: {published}</p>
    </div>
    <div class="content">
      {content}
    </div>
  </body>
</html>
"""


def _list_html(block: ContentBlock) -> str:
    tag = 'ol' if block.ordered else 'ul'
    items = ''.join(f'<li>{escape(item)}</li>' for item in block.items or [])
    return f'<{tag}>{items}</{tag}>'


def blocks_to_html(blocks: list[ContentBlock]) -> str:
    """Concatenate blocks into one markup string in their original order.

    Image containers alternate left/right alignment, starting with left.
    Table blocks already hold markup and are emitted verbatim.
    """
    parts = []
    align = 'left'
    for block in blocks:
        if block.type == BlockTypeEnum.heading:
            parts.append(f'<h{block.level}>{escape(block.content)}</h{block.level}>')
        elif block.type == BlockTypeEnum.paragraph:
            parts.append(f'<p>{escape(block.content)}</p>')
        elif block.type == BlockTypeEnum.list:
            parts.append(_list_html(block))
        elif block.type == BlockTypeEnum.image:
            parts.append(IMAGE_CONTAINER.format(align=align, src=escape(block.content, quote=True)))
            align = 'right' if align == 'left' else 'left'
        elif block.type == BlockTypeEnum.table:
            parts.append(block.content)
    return ''.join(parts)


def truncate(text: str, limit: int = 160) -> str:
    """Return text unchanged if it fits in limit, else cut and suffix '...'."""
    return text if len(text) <= limit else text[:limit - 3] + '...'


def generate_excerpt(blocks: list[ContentBlock], limit: int = 160) -> str:
    """First paragraph's text truncated to limit; empty when there are no paragraphs."""
    first = next((b for b in blocks if b.type == BlockTypeEnum.paragraph), None)
    return truncate(first.content, limit) if first else ''


def build_print_html(blog) -> str:
    """Standalone HTML page for a blog post, suitable for print-to-PDF."""
    created = blog.created_at or datetime.now()
    return PRINT_TEMPLATE.format(
        title=escape(blog.title),
        category=escape(blog.category or ''),
        published=created.strftime('%Y-%m-%d'),
        content=(blog.content or '').replace('\n', '<br>'),
    )
