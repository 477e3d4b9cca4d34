"""Blog persistence and listing helpers: upsert, autosave, document import, and filters"""

from collections import Counter
from datetime import datetime
from uuid import UUID

from sqlmodel import Session, select

from sitecms.core.editor import BlogEditor
from sitecms.core.export import truncate
from sitecms.core.models import ParsedDocument
from sitecms.core.render import render_structure
from sitecms.core.utils.slug import slugify
from sitecms.crud.models import Blog, BlogStatusEnum


BLOG_FIELDS = (
    "title", "slug", "content", "excerpt", "category", "status",
    "featured", "featured_image_url", "blog_structure",
)


def get_blog(session: Session, blog_id: UUID) -> Blog | None:
    return session.get(Blog, blog_id)


def get_by_slug(session: Session, slug: str) -> Blog | None:
    """Return the Blog with the given slug, or None if not found."""
    return session.exec(select(Blog).where(Blog.slug == slug)).first()


def get_all_blogs(session: Session) -> list[Blog]:
    """Return every blog, newest first."""
    return list(session.exec(select(Blog).order_by(Blog.created_at.desc())).all())


def get_published_blogs(session: Session) -> list[Blog]:
    """Return published blogs, newest first."""
    query = select(Blog).where(Blog.status == BlogStatusEnum.published).order_by(Blog.created_at.desc())
    return list(session.exec(query).all())


def save_blog(session: Session, data: dict, blog_id: UUID | None = None) -> tuple[Blog, str]:
    """Insert a new blog or update blog_id; slug defaults to slugify(title).

    Returns (blog, status) where status is 'created' or 'updated'.
    Flushes but does not commit; the caller controls the transaction.
    """
    values = {k: v for k, v in data.items() if k in BLOG_FIELDS}
    title = (values.get("title") or "").strip()
    if not title:
        raise ValueError("Title is required")
    values["title"] = title
    values["slug"] = values.get("slug") or slugify(title)
    if "status" in values:
        values["status"] = BlogStatusEnum(values["status"])

    if blog_id is not None:
        blog = session.get(Blog, blog_id)
        if blog is None:
            raise ValueError(f"Blog {blog_id} not found")
        for name, value in values.items():
            setattr(blog, name, value)
        blog.updated_at = datetime.now()
        session.add(blog)
        session.flush()
        return blog, 'updated'

    blog = Blog(**values)
    session.add(blog)
    session.flush()
    return blog, 'created'


def autosave_content(session: Session, blog_id: UUID, content: str) -> Blog | None:
    """Update only the content column; None when the blog no longer exists."""
    blog = session.get(Blog, blog_id)
    if blog is None:
        return None
    blog.content = content
    blog.updated_at = datetime.now()
    session.add(blog)
    session.flush()
    return blog


def delete_blog(session: Session, blog_id: UUID) -> bool:
    blog = session.get(Blog, blog_id)
    if blog is None:
        return False
    session.delete(blog)
    session.flush()
    return True


def import_document(
    session: Session,
    parsed: ParsedDocument,
    category: str = "general",
    status: BlogStatusEnum = BlogStatusEnum.draft,
    ) -> tuple[Blog, str]:
    """Create a blog from an uploaded document; the first image becomes the featured image."""
    return save_blog(session, {
        "title": parsed.title,
        "content": parsed.content,
        "excerpt": parsed.excerpt,
        "category": category,
        "status": status,
        "featured_image_url": parsed.images[0] if parsed.images else "",
    })


def save_structure(
    session: Session,
    editor: BlogEditor,
    blog_id: UUID | None = None,
    excerpt_length: int = 160,
    **fields,
    ) -> tuple[Blog, str]:
    """Persist a visual editor session alongside the flat legacy fields."""
    structure = editor.structure
    first_text = next((b.content.text for b in structure.blocks if b.content.text), "")
    data = {
        "title": structure.title,
        "content": render_structure(structure),
        "excerpt": truncate(first_text, excerpt_length),
        "featured_image_url": structure.featured_image,
        "blog_structure": editor.to_dict(),
        **fields,
    }
    return save_blog(session, data, blog_id)


def filter_blogs(
    blogs: list[Blog],
    search: str = "",
    status: str = "all",
    category: str = "all",
    ) -> list[Blog]:
    """Case-insensitive search over title/content/excerpt plus status and category filters."""
    result = blogs
    if search:
        term = search.lower()
        result = [
            b for b in result
            if term in b.title.lower() or term in (b.content or "").lower() or term in (b.excerpt or "").lower()
        ]
    if status != "all":
        result = [b for b in result if b.status == status]
    if category != "all":
        result = [b for b in result if b.category == category]
    return result


def status_counts(blogs: list[Blog]) -> dict[str, int]:
    """Return counts per status plus an 'all' total."""
    counts = Counter(BlogStatusEnum(b.status).value for b in blogs)
    return {"all": len(blogs), **{s.value: counts.get(s.value, 0) for s in BlogStatusEnum}}


def list_categories(blogs: list[Blog]) -> list[str]:
    """Distinct categories in first-seen order."""
    return list(dict.fromkeys(b.category for b in blogs))


def featured_blogs(blogs: list[Blog], limit: int = 6) -> list[Blog]:
    return [b for b in blogs if b.featured][:limit]
