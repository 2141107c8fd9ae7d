"""Editable page copy and community marketing content."""
from __future__ import annotations

from typing import Any, Dict, List, Union

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.db import upsert
from core.exceptions import ValidationError
from core.logging_config import get_logger
from core.models import Community, PageContent
from core.utils import utcnow

LOGGER = get_logger(__name__)

CONTENT_KEY_FIELDS = ("page_name", "section_name", "content_key")


class PageContentService:
    """Page copy keyed by (page_name, section_name, content_key)."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_page_content(self, page_name: str) -> List[PageContent]:
        stmt = (
            select(PageContent)
            .where(PageContent.page_name == page_name)
            .order_by(PageContent.section_name, PageContent.content_key)
            .execution_options(populate_existing=True)
        )
        return list(self.session.scalars(stmt))

    def upsert_page_content(
        self, items: Union[Dict[str, Any], List[Dict[str, Any]]]
    ) -> List[PageContent]:
        """
        Insert or replace content items.

        Each item replaces the row with the same (page, section, key)
        triple. The whole batch is validated before anything is written.

        Returns:
            The stored rows in the order given.
        """
        if isinstance(items, dict):
            items = [items]

        errors = []
        for index, item in enumerate(items):
            for field in CONTENT_KEY_FIELDS:
                if not item.get(field):
                    errors.append({"index": index, "field": field, "message": "is required"})
        if errors:
            raise ValidationError("Invalid page content", errors=errors)

        keys = []
        for item in items:
            values = {
                "page_name": item["page_name"],
                "section_name": item["section_name"],
                "content_key": item["content_key"],
                "content_value": item.get("content_value") or "",
                "content_type": item.get("content_type") or "text",
                "updated_at": utcnow(),
            }
            update_columns = ["content_value", "updated_at"]
            if item.get("content_type"):
                update_columns.append("content_type")

            upsert(
                self.session,
                PageContent,
                values,
                conflict_columns=CONTENT_KEY_FIELDS,
                update_columns=update_columns,
            )
            keys.append(tuple(values[f] for f in CONTENT_KEY_FIELDS))

        LOGGER.info(f"Upserted {len(keys)} page content item(s)")

        return [self._load(*key) for key in keys]

    def _load(self, page_name: str, section_name: str, content_key: str) -> PageContent:
        stmt = (
            select(PageContent)
            .where(
                PageContent.page_name == page_name,
                PageContent.section_name == section_name,
                PageContent.content_key == content_key,
            )
            .execution_options(populate_existing=True)
        )
        return self.session.scalars(stmt).one()


class CommunityService:
    """Read-only community listings."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_communities(self) -> List[Community]:
        return list(self.session.scalars(select(Community).order_by(Community.id)))
