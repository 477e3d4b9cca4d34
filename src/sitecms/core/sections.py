"""Page-scoped view over content sections, refreshed on change notifications"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from sitecms.crud.database import Backend
from sitecms.crud.models import ContentSection
from sitecms.crud.sections import get_visible_sections


logger = logging.getLogger(__name__)

TABLE = ContentSection.__tablename__


class ContentSectionResolver:
    """Visible sections for one page (or every page when page_path is empty).

    Every fetch replaces the whole in-memory set. A failed fetch records
    `error` and keeps the previously loaded sections.
    """

    def __init__(self, backend: Backend, page_path: Optional[str] = None):
        self.backend = backend
        self.page_path = page_path or None
        self.sections: list[ContentSection] = []
        self.loading = False
        self.error: Optional[str] = None

    def fetch_sections(self) -> list[ContentSection]:
        self.loading = True
        try:
            with self.backend.session() as session:
                sections = get_visible_sections(session, self.page_path)
        except (SQLAlchemyError, RuntimeError) as e:
            logger.error("Failed to fetch content sections for %s: %s", self.page_path or "all pages", e)
            self.error = str(e)
        else:
            self.sections = sections
            self.error = None
            logger.debug("Fetched %d section(s) for %s", len(sections), self.page_path or "all pages")
        finally:
            self.loading = False
        return self.sections

    refetch = fetch_sections

    def get_sections_by_type(self, section_type: str) -> list[ContentSection]:
        return [s for s in self.sections if s.section_type == section_type]

    def get_section_by_key(self, key: str) -> Optional[ContentSection]:
        return next((s for s in self.sections if s.section_key == key), None)

    async def watch(self) -> None:
        """Refetch on every content_sections change until the feed closes.

        Cancelling the task releases the subscription.
        """
        async with self.backend.feed.subscribe(TABLE) as events:
            async for event in events:
                logger.debug("%s on %s, refetching", event.action.value, event.table)
                self.fetch_sections()
