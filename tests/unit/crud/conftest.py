"""Shared fixtures for crud unit tests"""

import pytest
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from sitecms.crud.database import Backend
from sitecms.crud.models import Blog, ContentSection


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s


@pytest.fixture(name="section")
def section_fixture(session):
    """A minimal ContentSection persisted to the session."""
    s = ContentSection(section_key="home-hero", section_type="hero", title="Welcome", page_path="/")
    session.add(s)
    session.flush()
    return s


@pytest.fixture(name="blog")
def blog_fixture(session):
    """A minimal Blog persisted to the session."""
    b = Blog(title="Hello World", slug="hello-world", content="<p>Hi</p>")
    session.add(b)
    session.flush()
    return b


@pytest.fixture(name="backend")
def backend_fixture():
    """Open Backend on a private in-memory SQLite database."""
    backend = Backend("sqlite://").open()
    yield backend
    backend.close()
