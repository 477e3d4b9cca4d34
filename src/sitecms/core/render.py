"""Pure renderers: visual editor blocks and page sections to HTML strings"""

from html import escape
from typing import Callable

from sitecms.core.editor import BlockContent, BlogStructure, VisualBlockType
from sitecms.core.section_data import parse_section_data
from sitecms.crud.models import ContentSection


def _classes(*names: str) -> str:
    return ' '.join(n for n in names if n)


def _image(content: BlockContent, base: str = 'image') -> str:
    """Image element with width and the independent border/shadow flags applied."""
    cls = _classes(base, content.has_border and 'border', content.has_shadow and 'shadow')
    return (
        f'<img src="{escape(content.image_url)}" alt="{escape(content.title)}" '
        f'class="{cls}" style="width: {content.width}%;" />'
    )


def _text(content: BlockContent) -> str:
    cls = _classes(f'text-{content.font_size}', f'font-{content.font_weight}')
    title = f'<h3>{escape(content.title)}</h3>' if content.title else ''
    return (
        f'{title}<div class="{cls}" style="color: {escape(content.text_color)};">'
        f'{escape(content.text)}</div>'
    )


def _caption(content) -> str:
    caption = getattr(content, 'caption', '')
    return f'<p class="caption">{escape(caption)}</p>' if caption else ''


def _paired(content: BlockContent, image_first: bool) -> str:
    image = f'<div class="block-image">{_image(content)}</div>'
    text = f'<div class="block-text text-{content.alignment}">{_text(content)}</div>'
    inner = image + text if image_first else text + image
    return f'<div class="block block-paired">{inner}</div>'


def _left_image(block) -> str:
    return _paired(block.content, image_first=True)


def _right_image(block) -> str:
    return _paired(block.content, image_first=False)


def _full_image(block) -> str:
    c = block.content
    return f'<div class="block text-{c.alignment}">{_image(c, "image full-width")}{_caption(c)}</div>'


def _full_text(block) -> str:
    c = block.content
    return f'<div class="block text-{c.alignment}">{_text(c)}</div>'


def _image_caption(block) -> str:
    c = block.content
    return f'<figure class="block text-{c.alignment}">{_image(c)}{_caption(c)}</figure>'


def _video(block) -> str:
    c = block.content
    return (
        f'<div class="block text-{c.alignment}"><div class="aspect-video" style="width: {c.width}%;">'
        f'<iframe src="{escape(c.video_url)}" allowfullscreen></iframe></div></div>'
    )


def _table(block) -> str:
    data = block.content.table_data
    head = ''.join(f'<th>{escape(h)}</th>' for h in data.headers)
    body = ''.join(
        '<tr>' + ''.join(f'<td>{escape(cell)}</td>' for cell in row) + '</tr>'
        for row in data.rows
    )
    return f'<div class="block"><table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table></div>'


def _chart(block) -> str:
    # placeholder only: surfaces title, type, and labels
    chart = block.content.chart_data
    return (
        f'<div class="block chart-placeholder"><h3>{escape(chart.title)}</h3>'
        f'<p>Chart Preview: {escape(chart.type)} chart</p>'
        f'<p>Data: {escape(", ".join(chart.labels))}</p></div>'
    )


BLOCK_RENDERERS: dict[str, Callable] = {
    VisualBlockType.left_image_right_text.value: _left_image,
    VisualBlockType.right_image_left_text.value: _right_image,
    VisualBlockType.full_width_image.value: _full_image,
    VisualBlockType.full_width_text.value: _full_text,
    VisualBlockType.image_caption.value: _image_caption,
    VisualBlockType.video_embed.value: _video,
    VisualBlockType.table.value: _table,
    VisualBlockType.chart.value: _chart,
}


def render_visual_block(block) -> str:
    """Render one visual block; unknown types fall back to the full-width text layout."""
    return BLOCK_RENDERERS.get(block.type, _full_text)(block)


def render_structure(structure: BlogStructure) -> str:
    """Render a whole visual editor document in block order."""
    parts = [f'<h1>{escape(structure.title)}</h1>'] if structure.title else []
    if structure.featured_image:
        parts.append(f'<img src="{escape(structure.featured_image)}" alt="{escape(structure.title)}" class="featured" />')
    byline = ' | '.join(escape(v) for v in (structure.author, structure.date) if v)
    if byline:
        parts.append(f'<p class="byline">{byline}</p>')
    parts.extend(render_visual_block(b) for b in structure.blocks)
    return ''.join(parts)


# --- page sections ---

def _section_image(section: ContentSection) -> str:
    if not section.image_url:
        return ''
    return f'<img src="{escape(section.image_url)}" alt="{escape(section.title or "")}" />'


def _buttons(data) -> str:
    if not data.buttons:
        return ''
    links = ''.join(
        f'<a href="{escape(b.link)}"><button class="btn-{escape(b.style)}">{escape(b.text)}</button></a>'
        for b in data.buttons
    )
    return f'<div class="buttons">{links}</div>'


def _hero(section, data) -> str:
    return (
        f'<section class="hero"><h1>{escape(section.title)}</h1><p>{escape(section.content)}</p>'
        f'{_buttons(data)}{_section_image(section)}</section>'
    )


def _feature(section, data) -> str:
    cards = ''.join(
        f'<div class="card"><h3>{escape(f.title)}</h3><p>{escape(f.description)}</p></div>'
        for f in data.features
    )
    grid = f'<div class="features">{cards}</div>' if cards else ''
    return (
        f'<section class="feature"><h2>{escape(section.title)}</h2><p>{escape(section.content)}</p>'
        f'{_section_image(section)}{grid}</section>'
    )


def _stats(section, data) -> str:
    stats = ''.join(
        f'<div class="stat"><div class="stat-number">{escape(s.number)}</div>'
        f'<div class="stat-label">{escape(s.label)}</div></div>'
        for s in data.stats
    )
    grid = f'<div class="stats">{stats}</div>' if stats else ''
    return f'<section class="stats"><h2>{escape(section.title)}</h2><p>{escape(section.content)}</p>{grid}</section>'


def _cta(section, data) -> str:
    return (
        f'<section class="cta"><h2>{escape(section.title)}</h2><p>{escape(section.content)}</p>'
        f'{_buttons(data)}{_section_image(section)}</section>'
    )


def _product(section, data) -> str:
    items = ''.join(f'<li>{escape(t)}</li>' for t in data.feature_titles())
    features = f'<ul>{items}</ul>' if items else ''
    return (
        f'<div class="card {escape(section.section_type)}"><h3>{escape(section.title)}</h3>'
        f'<p>{escape(section.content)}</p>{_section_image(section)}{features}</div>'
    )


def _image_section(section, data) -> str:
    title = f'<h3>{escape(section.title)}</h3>' if section.title else ''
    content = f'<p>{escape(section.content)}</p>' if section.content else ''
    return f'<div class="image-section">{_section_image(section)}{title}{content}</div>'


def _text_section(section, data) -> str:
    title = f'<h3>{escape(section.title)}</h3>' if section.title else ''
    body = ''
    if section.content:
        paragraphs = ''.join(f'<p>{escape(p)}</p>' for p in section.content.split('\n'))
        body = f'<div class="text-body">{paragraphs}</div>'
    return f'<div class="text-section">{title}{body}{_section_image(section)}</div>'


SECTION_RENDERERS: dict[str, Callable] = {
    'hero': _hero,
    'feature': _feature,
    'stats': _stats,
    'cta': _cta,
    'product': _product,
    'solution': _product,
    'image': _image_section,
    'text': _text_section,
}


def render_section(section: ContentSection) -> str:
    """Render a page section by type; unmatched types use the text layout."""
    data = parse_section_data(section.section_type, section.data)
    return SECTION_RENDERERS.get(section.section_type, _text_section)(section, data)


def render_page(sections: list[ContentSection]) -> str:
    return '\n'.join(render_section(s) for s in sections)
