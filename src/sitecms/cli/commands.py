"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional
from uuid import UUID

import typer
from sqlmodel import SQLModel

from sitecms.config import Settings, load_config
from sitecms.core.admin import Admin
from sitecms.core.export import build_print_html
from sitecms.core.models import SourceKind
from sitecms.core.parse import parse_file
from sitecms.core.render import render_page
from sitecms.core.sections import ContentSectionResolver
from sitecms.crud.blogs import filter_blogs, get_by_slug, status_counts
from sitecms.crud.database import Backend
from sitecms.crud.models import BlogStatusEnum, SectionTypeEnum
from sitecms.exceptions import DocumentParseError, PersistenceError


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _backend(settings: Settings) -> Backend:
    return Backend(settings.db_url).open()


def _parse(path: Path, kind: Optional[SourceKind], settings: Settings):
    try:
        return parse_file(path, kind, settings)
    except OSError as e:
        _fail(f"Cannot read {path}", e)
    except DocumentParseError as e:
        _fail(str(e), e.__cause__)


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize database schema. Use --reset to clear existing data."""
    settings = _settings()
    backend = Backend(settings.db_url)
    if reset:
        backend.open()
        SQLModel.metadata.drop_all(backend.engine)
        typer.echo("Existing data cleared.")
    backend.open()
    backend.close()
    typer.echo(f"Database initialized at: {settings.db_url}")


def parse_cmd(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, help="Document to parse")],
    kind: Annotated[Optional[SourceKind], typer.Option("--kind", help="Override kind inferred from suffix")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the full parsed document as JSON")] = False,
    ):
    """Parse a document and print its title, excerpt, images, and block summary."""
    settings = _settings()
    parsed = _parse(path, kind, settings)
    if as_json:
        typer.echo(parsed.model_dump_json(indent=2))
        return
    typer.echo(f"Title:   {parsed.title}")
    typer.echo(f"Excerpt: {parsed.excerpt}")
    typer.echo(f"Images:  {len(parsed.images)}")
    for block in parsed.blocks:
        label = f"{block.type.value}{block.level or ''}"
        typer.echo(f"  {label:<10} {(block.content if block.items is None else ', '.join(block.items))[:60]}")


def import_cmd(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, help="Document to import as a blog")],
    kind: Annotated[Optional[SourceKind], typer.Option("--kind", help="Override kind inferred from suffix")] = None,
    category: Annotated[str, typer.Option("--category", help="Blog category")] = "general",
    status: Annotated[BlogStatusEnum, typer.Option("--status", help="Blog status")] = BlogStatusEnum.draft,
    ):
    """Parse a document and save it as a blog post."""
    settings = _settings()
    parsed = _parse(path, kind, settings)
    backend = _backend(settings)
    try:
        blog = Admin(backend).import_document(parsed, category, status)
    except PersistenceError as e:
        _fail(str(e))
    finally:
        backend.close()
    typer.echo(f"Imported '{blog.title}' as {blog.status.value} ({blog.slug})")


def blogs_cmd(
    status: Annotated[str, typer.Option("--status", help="draft, published, archived, or all")] = "all",
    category: Annotated[str, typer.Option("--category", help="Category name or all")] = "all",
    search: Annotated[str, typer.Option("--search", help="Search title, content, and excerpt")] = "",
    ):
    """List blogs, newest first, with optional filters."""
    settings = _settings()
    backend = _backend(settings)
    try:
        blogs = Admin(backend).list_blogs()
    except PersistenceError as e:
        _fail(str(e))
    finally:
        backend.close()
    counts = status_counts(blogs)
    for blog in filter_blogs(blogs, search, status, category):
        typer.echo(f"  [{blog.status.value}] {blog.slug}  {blog.title}")
    typer.echo(
        f"{counts['all']} blog(s) - {counts['published']} published, "
        f"{counts['draft']} draft, {counts['archived']} archived"
    )


def export_cmd(
    slug: Annotated[str, typer.Argument(help="Slug of the blog to export")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    ):
    """Write a print-ready HTML page for a blog."""
    settings = _settings(overrides={"output_dir": out})
    backend = _backend(settings)
    try:
        with backend.session() as session:
            blog = get_by_slug(session, slug)
    finally:
        backend.close()
    if blog is None:
        _fail(f"No blog with slug '{slug}'")
    output_dir = Path(settings.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    dest = output_dir / f"{blog.slug}.html"
    dest.write_text(build_print_html(blog), encoding="utf-8")
    typer.echo(f"  {blog.slug} -> {dest}")


def sections_cmd(
    page: Annotated[Optional[str], typer.Option("--page", help="Only sections for this page path")] = None,
    show_all: Annotated[bool, typer.Option("--all", help="Include hidden sections")] = False,
    ):
    """List content sections in display order."""
    settings = _settings()
    backend = _backend(settings)
    try:
        if show_all:
            sections = Admin(backend).list_sections()
        else:
            resolver = ContentSectionResolver(backend, page)
            sections = resolver.fetch_sections()
            if resolver.error:
                _fail("Failed to fetch content sections", RuntimeError(resolver.error))
    except PersistenceError as e:
        _fail(str(e))
    finally:
        backend.close()
    if not sections:
        typer.echo("No content sections found.")
        raise typer.Exit(1)
    for s in sections:
        flag = "" if s.visible else " (hidden)"
        typer.echo(f"  {s.page_path} #{s.display_order} [{s.section_type}] {s.section_key}{flag}  {s.id}")


def section_add_cmd(
    key: Annotated[str, typer.Argument(help="Unique section key")],
    section_type: Annotated[SectionTypeEnum, typer.Option("--type", help="Section type")] = SectionTypeEnum.text,
    page: Annotated[str, typer.Option("--page", help="Page path")] = "/",
    title: Annotated[str, typer.Option("--title")] = "",
    content: Annotated[str, typer.Option("--content")] = "",
    image_url: Annotated[str, typer.Option("--image-url")] = "",
    data: Annotated[str, typer.Option("--data", help="JSON object with type-specific extras")] = "{}",
    order: Annotated[int, typer.Option("--order", help="Display order within the page")] = 0,
    hidden: Annotated[bool, typer.Option("--hidden", help="Create the section hidden")] = False,
    ):
    """Create a content section."""
    settings = _settings()
    backend = _backend(settings)
    try:
        section = Admin(backend).save_section({
            "section_key": key, "section_type": section_type.value, "page_path": page,
            "title": title, "content": content, "image_url": image_url, "data": data,
            "display_order": order, "visible": not hidden,
        })
    except PersistenceError as e:
        _fail(str(e))
    finally:
        backend.close()
    typer.echo(f"Created section {section.section_key} ({section.id})")


def section_delete_cmd(
    section_id: Annotated[str, typer.Argument(help="Id of the section to delete")],
    ):
    """Delete a content section by id."""
    settings = _settings()
    try:
        uid = UUID(section_id)
    except ValueError:
        _fail(f"Invalid section id: {section_id}")
    backend = _backend(settings)
    try:
        deleted = Admin(backend).delete_section(uid)
    except PersistenceError as e:
        _fail(str(e))
    finally:
        backend.close()
    if not deleted:
        _fail(f"No section with id {section_id}")
    typer.echo(f"Deleted section {section_id}")


def render_page_cmd(
    page: Annotated[str, typer.Argument(help="Page path, e.g. /products")],
    out: Annotated[Optional[Path], typer.Option("--out", help="Write HTML here instead of stdout")] = None,
    ):
    """Render the visible sections of a page to HTML."""
    settings = _settings()
    backend = _backend(settings)
    try:
        resolver = ContentSectionResolver(backend, page)
        resolver.fetch_sections()
    finally:
        backend.close()
    if resolver.error:
        _fail("Failed to fetch content sections", RuntimeError(resolver.error))
    html = render_page(resolver.sections)
    if out is None:
        typer.echo(html)
        return
    out.write_text(html, encoding="utf-8")
    typer.echo(f"Rendered {len(resolver.sections)} section(s) to {out}")
