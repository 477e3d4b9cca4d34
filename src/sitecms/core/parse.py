"""Document conversion: word/PDF/markdown/text buffers into a ParsedDocument"""

import asyncio
import io
import logging
from pathlib import Path

import mammoth
from markdown_it import MarkdownIt
from pypdf import PdfReader

from sitecms.config import Settings
from sitecms.core.export import blocks_to_html, generate_excerpt
from sitecms.core.extract.blocks import find_title, html_to_blocks, make_soup
from sitecms.core.extract.text import text_to_blocks
from sitecms.core.models import BlockTypeEnum, ContentBlock, ParsedDocument, SourceKind
from sitecms.exceptions import DocumentParseError


logger = logging.getLogger(__name__)

SUFFIX_KINDS = {
    '.docx': SourceKind.word,
    '.pdf': SourceKind.pdf,
    '.md': SourceKind.markdown,
    '.mdx': SourceKind.markdown,
    '.markdown': SourceKind.markdown,
}


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def _convert_word(data: bytes) -> str:
    """Convert a .docx buffer to HTML with mammoth."""
    result = mammoth.convert_to_html(io.BytesIO(data))
    for message in result.messages:
        logger.debug("mammoth: %s", message)
    return result.value


def _extract_pdf_text(data: bytes) -> str:
    """Join the extracted text of every page, one page per chunk."""
    reader = PdfReader(io.BytesIO(data))
    return '\n'.join(page.extract_text() or '' for page in reader.pages)


def _finish(title: str, blocks: list[ContentBlock], settings: Settings) -> ParsedDocument:
    return ParsedDocument(
        title=title,
        content=blocks_to_html(blocks),
        excerpt=generate_excerpt(blocks, settings.excerpt_length),
        images=[b.content for b in blocks if b.type == BlockTypeEnum.image],
        blocks=blocks,
    )


def parse_html_content(html: str, settings: Settings = None) -> ParsedDocument:
    """Walk converted HTML into blocks, then build markup, excerpt, and image list."""
    settings = settings or Settings()
    soup = make_soup(html)
    title = find_title(soup, settings.default_title)
    return _finish(title, html_to_blocks(soup), settings)


def parse_text_content(text: str, settings: Settings = None) -> ParsedDocument:
    """Apply the line heuristics to plain text and build the parsed result."""
    settings = settings or Settings()
    title, blocks = text_to_blocks(text, settings.heading_max_length)
    return _finish(title or settings.default_title, blocks, settings)


def parse_document(data: bytes, kind: SourceKind, settings: Settings = None) -> ParsedDocument:
    """Parse a document buffer of the declared kind.

    Any failure is raised as a single DocumentParseError naming the kind.
    """
    settings = settings or Settings()
    kind = SourceKind(kind)
    try:
        if kind == SourceKind.word:
            return parse_html_content(_convert_word(data), settings)
        if kind == SourceKind.markdown:
            html = _make_parser(settings.parser_config).render(data.decode('utf-8'))
            return parse_html_content(html, settings)
        if kind == SourceKind.pdf:
            return parse_text_content(_extract_pdf_text(data), settings)
        return parse_text_content(data.decode('utf-8', errors='replace'), settings)
    except Exception as e:
        logger.exception("Error parsing %s document", kind.value)
        raise DocumentParseError(kind.value) from e


async def aparse_document(data: bytes, kind: SourceKind, settings: Settings = None) -> ParsedDocument:
    """Run parse_document in a worker thread so an event loop can await it."""
    return await asyncio.to_thread(parse_document, data, kind, settings)


def kind_for_path(path: Path) -> SourceKind:
    """Infer the source kind from a file suffix; unknown suffixes are plain text."""
    return SUFFIX_KINDS.get(path.suffix.lower(), SourceKind.text)


def parse_file(path: Path, kind: SourceKind = None, settings: Settings = None) -> ParsedDocument:
    """Read a file from disk and parse it, inferring the kind when not given."""
    return parse_document(path.read_bytes(), kind or kind_for_path(path), settings)
