"""Database table definitions for page content sections and blog posts"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, DateTime, Text
from sqlmodel import Field, SQLModel


class SectionTypeEnum(str, Enum):
    """Page section archetypes understood by the section renderer"""
    hero = "hero"
    feature = "feature"
    stats = "stats"
    cta = "cta"
    product = "product"
    solution = "solution"
    image = "image"
    text = "text"


class BlogStatusEnum(str, Enum):
    draft = "draft"
    published = "published"
    archived = "archived"


class ContentSection(SQLModel, table=True):
    """A database-backed, page-scoped unit used to compose marketing pages"""
    __tablename__ = "content_sections"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    section_key: str = Field(..., index=True, unique=True, nullable=False)
    title: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    content: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    image_url: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    data: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    section_type: str = Field(default=SectionTypeEnum.text.value, nullable=False, description="Renderer archetype")
    page_path: str = Field(default="/", index=True, nullable=False)
    display_order: int = Field(default=0, nullable=False, description="Order within a page_path; not global")
    visible: bool = Field(default=True, nullable=False)
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))


class Blog(SQLModel, table=True):
    """A blog post; blog_structure holds the visual editor document when authored visually"""
    __tablename__ = "blogs"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(..., sa_column=Column(Text, nullable=False))
    slug: str = Field(..., index=True, unique=True, nullable=False)
    content: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    excerpt: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    category: str = Field(default="general", nullable=False)
    status: BlogStatusEnum = Field(default=BlogStatusEnum.draft, nullable=False)
    featured: bool = Field(default=False, nullable=False)
    featured_image_url: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    blog_structure: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
