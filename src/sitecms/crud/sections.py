"""Content section persistence: page queries, admin listing, upsert, and delete"""

from datetime import datetime
from uuid import UUID

from sqlmodel import Session, select

from sitecms.core.section_data import load_json_object
from sitecms.crud.models import ContentSection, SectionTypeEnum


SECTION_FIELDS = (
    "section_key", "title", "content", "image_url", "data",
    "section_type", "page_path", "display_order", "visible",
)


def get_visible_sections(session: Session, page_path: str | None = None) -> list[ContentSection]:
    """Return visible sections, optionally for one page, by ascending display_order.

    Ties keep insertion order (created_at).
    """
    query = select(ContentSection).where(ContentSection.visible == True)  # noqa: E712
    if page_path:
        query = query.where(ContentSection.page_path == page_path)
    query = query.order_by(ContentSection.display_order.asc(), ContentSection.created_at.asc())
    return list(session.exec(query).all())


def get_all_sections(session: Session) -> list[ContentSection]:
    """Admin listing: every section, hidden included, grouped by page then display_order."""
    query = select(ContentSection).order_by(
        ContentSection.page_path.asc(), ContentSection.display_order.asc(), ContentSection.created_at.asc()
    )
    return list(session.exec(query).all())


def get_section(session: Session, section_id: UUID) -> ContentSection | None:
    return session.get(ContentSection, section_id)


def get_by_key(session: Session, section_key: str) -> ContentSection | None:
    return session.exec(select(ContentSection).where(ContentSection.section_key == section_key)).first()


def _clean(data: dict) -> dict:
    """Keep known fields, decode the data bag, and validate section_type."""
    values = {k: v for k, v in data.items() if k in SECTION_FIELDS}
    if not values.get("section_key"):
        raise ValueError("section_key is required")
    if "data" in values:
        values["data"] = load_json_object(values["data"])
    if "section_type" in values:
        values["section_type"] = SectionTypeEnum(values["section_type"]).value
    return values


def save_section(session: Session, data: dict, section_id: UUID | None = None) -> tuple[ContentSection, str]:
    """Insert a new section or update section_id in place.

    Returns (section, status) where status is 'created' or 'updated'.
    Flushes but does not commit; the caller controls the transaction.
    Raises ValueError for a missing section_key, unknown section_type, or id.
    """
    values = _clean(data)

    if section_id is not None:
        section = session.get(ContentSection, section_id)
        if section is None:
            raise ValueError(f"Content section {section_id} not found")
        for name, value in values.items():
            setattr(section, name, value)
        section.updated_at = datetime.now()
        session.add(section)
        session.flush()
        return section, 'updated'

    section = ContentSection(**values)
    session.add(section)
    session.flush()
    return section, 'created'


def delete_section(session: Session, section_id: UUID) -> bool:
    """Hard-delete a section; returns False when it does not exist."""
    section = session.get(ContentSection, section_id)
    if section is None:
        return False
    session.delete(section)
    session.flush()
    return True
