"""Admin write operations: CRUD in a Backend session with change notification"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from sitecms.core.editor import BlogEditor
from sitecms.core.models import ParsedDocument
from sitecms.crud import blogs, sections
from sitecms.crud.database import Backend
from sitecms.crud.events import ChangeAction
from sitecms.crud.models import Blog, BlogStatusEnum, ContentSection
from sitecms.exceptions import PersistenceError


logger = logging.getLogger(__name__)

_ACTIONS = {"created": ChangeAction.insert, "updated": ChangeAction.update}


class Admin:
    """Write side of the CMS.

    Failures are logged and raised as PersistenceError carrying a user-facing
    message; the transaction is rolled back and no change event is published.
    """

    def __init__(self, backend: Backend):
        self.backend = backend

    def _run(self, what: str, fn):
        try:
            with self.backend.session() as session:
                return fn(session)
        except IntegrityError as e:
            logger.error("Failed to %s: %s", what, e.orig)
            raise PersistenceError(f"Failed to {what}: duplicate key") from e
        except (SQLAlchemyError, ValueError) as e:
            logger.error("Failed to %s: %s", what, e)
            raise PersistenceError(f"Failed to {what}: {e}") from e

    # --- content sections ---

    def list_sections(self) -> list[ContentSection]:
        return self._run("fetch content sections", sections.get_all_sections)

    def save_section(self, data: dict, section_id: UUID | None = None) -> ContentSection:
        def op(session):
            section, status = sections.save_section(session, data, section_id)
            self.backend.record(ContentSection.__tablename__, _ACTIONS[status], section.id)
            return section
        return self._run("save content section", op)

    def delete_section(self, section_id: UUID) -> bool:
        def op(session):
            deleted = sections.delete_section(session, section_id)
            if deleted:
                self.backend.record(ContentSection.__tablename__, ChangeAction.delete, section_id)
            return deleted
        return self._run("delete content section", op)

    # --- blogs ---

    def list_blogs(self) -> list[Blog]:
        return self._run("fetch blogs", blogs.get_all_blogs)

    def _save(self, what: str, save):
        def op(session):
            blog, status = save(session)
            self.backend.record(Blog.__tablename__, _ACTIONS[status], blog.id)
            return blog
        return self._run(what, op)

    def save_blog(self, data: dict, blog_id: UUID | None = None) -> Blog:
        return self._save("save blog", lambda s: blogs.save_blog(s, data, blog_id))

    def import_document(
        self,
        parsed: ParsedDocument,
        category: str = "general",
        status: BlogStatusEnum = BlogStatusEnum.draft,
        ) -> Blog:
        return self._save("import document", lambda s: blogs.import_document(s, parsed, category, status))

    def save_structure(self, editor: BlogEditor, blog_id: UUID | None = None, **fields) -> Blog:
        return self._save("save blog", lambda s: blogs.save_structure(s, editor, blog_id, **fields))

    def autosave(self, blog_id: UUID, content: str) -> Blog | None:
        def op(session):
            blog = blogs.autosave_content(session, blog_id, content)
            if blog is not None:
                self.backend.record(Blog.__tablename__, ChangeAction.update, blog_id)
            return blog
        return self._run("auto-save blog", op)

    def delete_blog(self, blog_id: UUID) -> bool:
        def op(session):
            deleted = blogs.delete_blog(session, blog_id)
            if deleted:
                self.backend.record(Blog.__tablename__, ChangeAction.delete, blog_id)
            return deleted
        return self._run("delete blog", op)
