"""Tests for page content upserts and communities."""
from __future__ import annotations

import pytest
from sqlalchemy import select

from core.exceptions import ValidationError
from core.models import Community, PageContent
from domain.content import CommunityService, PageContentService

HERO_TITLE = {"page_name": "home", "section_name": "hero", "content_key": "title"}


class TestPageContent:

    def test_upsert_same_triple_keeps_one_row(self, db_session):
        service = PageContentService(db_session)

        service.upsert_page_content({**HERO_TITLE, "content_value": "A"})
        (row,) = service.upsert_page_content({**HERO_TITLE, "content_value": "B"})

        rows = db_session.scalars(select(PageContent).where(PageContent.page_name == "home")).all()
        assert len(rows) == 1
        assert row.content_value == "B"
        assert rows[0].id == row.id

    def test_upsert_list_returns_rows_in_given_order(self, db_session):
        rows = PageContentService(db_session).upsert_page_content([
            {**HERO_TITLE, "content_key": "subtitle", "content_value": "Sub"},
            {**HERO_TITLE, "content_value": "Title", "content_type": "html"},
        ])

        assert [(r.content_key, r.content_value, r.content_type) for r in rows] == [
            ("subtitle", "Sub", "text"),
            ("title", "Title", "html"),
        ]

    def test_content_type_kept_when_not_sent(self, db_session):
        service = PageContentService(db_session)
        service.upsert_page_content({**HERO_TITLE, "content_value": "<b>A</b>", "content_type": "html"})

        (row,) = service.upsert_page_content({**HERO_TITLE, "content_value": "<b>B</b>"})

        assert row.content_type == "html"

    def test_get_page_content_is_ordered_and_scoped(self, db_session):
        service = PageContentService(db_session)
        service.upsert_page_content([
            {"page_name": "home", "section_name": "intro", "content_key": "b", "content_value": "2"},
            {"page_name": "home", "section_name": "hero", "content_key": "z", "content_value": "1"},
            {"page_name": "home", "section_name": "intro", "content_key": "a", "content_value": "3"},
            {"page_name": "about", "section_name": "hero", "content_key": "a", "content_value": "x"},
        ])

        keys = [(r.section_name, r.content_key) for r in service.get_page_content("home")]

        assert keys == [("hero", "z"), ("intro", "a"), ("intro", "b")]

    def test_invalid_batch_writes_nothing(self, db_session):
        with pytest.raises(ValidationError) as exc_info:
            PageContentService(db_session).upsert_page_content([
                {**HERO_TITLE, "content_value": "ok"},
                {"page_name": "home", "section_name": "", "content_key": "x"},
            ])

        assert exc_info.value.errors == [{"index": 1, "field": "section_name", "message": "is required"}]
        assert PageContentService(db_session).get_page_content("home") == []


def test_list_communities(db_session):
    db_session.add_all([
        Community(name="Malibu", location="Los Angeles County, CA"),
        Community(name="Bel Air", location="Los Angeles, CA"),
    ])
    db_session.flush()

    assert [c.name for c in CommunityService(db_session).list_communities()] == ["Malibu", "Bel Air"]
