"""Unit tests for crud/sections.py"""

from uuid import uuid4

import pytest

from sitecms.crud.models import ContentSection
from sitecms.crud.sections import (
    delete_section, get_all_sections, get_by_key, get_section, get_visible_sections, save_section,
)


@pytest.fixture(name="pages")
def pages_fixture(session):
    """Sections across two pages, one hidden, inserted out of display order."""
    rows = [
        ContentSection(section_key="home-stats", page_path="/", display_order=2),
        ContentSection(section_key="home-hero", page_path="/", display_order=0),
        ContentSection(section_key="products-grid", page_path="/products", display_order=1),
        ContentSection(section_key="products-hero", page_path="/products", display_order=0),
        ContentSection(section_key="products-draft", page_path="/products", display_order=5, visible=False),
    ]
    session.add_all(rows)
    session.flush()
    return rows


def test_visible_sections_for_page(session, pages):
    """Only visible sections of the requested page, in display_order."""
    keys = [s.section_key for s in get_visible_sections(session, "/products")]
    assert keys == ["products-hero", "products-grid"]


def test_visible_sections_all_pages(session, pages):
    """Without a page_path every visible section is returned."""
    sections = get_visible_sections(session)
    assert len(sections) == 4
    assert all(s.visible for s in sections)
    orders = [s.display_order for s in sections]
    assert orders == sorted(orders)


def test_visible_sections_empty_page(session, pages):
    """An unknown page yields an empty list."""
    assert get_visible_sections(session, "/nowhere") == []


def test_all_sections_include_hidden(session, pages):
    """The admin listing includes hidden sections grouped by page."""
    sections = get_all_sections(session)
    assert len(sections) == 5
    assert [s.page_path for s in sections] == ["/", "/", "/products", "/products", "/products"]


def test_get_section_and_key(session, section):
    """Lookups by id and by key return the same row."""
    assert get_section(session, section.id) is section
    assert get_by_key(session, "home-hero") is section
    assert get_by_key(session, "missing") is None


def test_save_section_creates(session):
    """A save without id inserts and decodes JSON-string data."""
    section, status = save_section(session, {
        "section_key": "about-text",
        "section_type": "text",
        "page_path": "/about",
        "data": '{"note": 1}',
        "unknown_field": "ignored",
    })
    assert status == "created"
    assert section.id is not None
    assert section.data == {"note": 1}


def test_save_section_updates(session, section):
    """A save with id updates the row in place."""
    before = section.updated_at
    updated, status = save_section(session, {"section_key": "home-hero", "title": "Hello"}, section.id)
    assert status == "updated"
    assert updated.id == section.id
    assert updated.title == "Hello"
    assert updated.updated_at >= before


def test_save_section_requires_key(session):
    """A section without a key is rejected."""
    with pytest.raises(ValueError, match="section_key"):
        save_section(session, {"title": "No key"})


def test_save_section_rejects_unknown_type(session):
    """section_type must be one of the renderer archetypes."""
    with pytest.raises(ValueError):
        save_section(session, {"section_key": "x", "section_type": "carousel"})


def test_save_section_unknown_id(session):
    """Updating a missing id is an error."""
    with pytest.raises(ValueError, match="not found"):
        save_section(session, {"section_key": "x"}, uuid4())


def test_delete_section(session, section):
    """delete_section removes the row and reports whether it existed."""
    assert delete_section(session, section.id) is True
    assert get_section(session, section.id) is None
    assert delete_section(session, section.id) is False
