"""Tests for the database engine and the dialect upsert helper."""
from __future__ import annotations

import pytest
from sqlalchemy import select, text

from core.db import engine, upsert
from core.exceptions import UpstreamError
from core.models import PageContent

KEY = ("page_name", "section_name", "content_key")


def _row(**overrides):
    values = {
        "page_name": "about",
        "section_name": "intro",
        "content_key": "body",
        "content_value": "Hello",
        "content_type": "text",
    }
    values.update(overrides)
    return values


def _stored(db_session):
    return db_session.scalars(
        select(PageContent).execution_options(populate_existing=True)
    ).all()


def test_insert_if_absent_keeps_existing_row(db_session):
    upsert(db_session, PageContent, _row(), conflict_columns=KEY)
    upsert(db_session, PageContent, _row(content_value="Ignored"), conflict_columns=KEY)

    rows = _stored(db_session)
    assert [r.content_value for r in rows] == ["Hello"]


def test_update_columns_overwrite_on_conflict(db_session):
    upsert(db_session, PageContent, _row(), conflict_columns=KEY)
    upsert(
        db_session,
        PageContent,
        _row(content_value="Updated", content_type="html"),
        conflict_columns=KEY,
        update_columns=["content_value"],
    )

    (row,) = _stored(db_session)
    assert row.content_value == "Updated"
    assert row.content_type == "text"


def test_rejected_write_raises_upstream_error(db_session):
    # content_value is NOT NULL
    with pytest.raises(UpstreamError):
        upsert(db_session, PageContent, _row(content_value=None), conflict_columns=KEY)


def test_application_engine_enforces_foreign_keys():
    with engine.connect() as conn:
        assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
