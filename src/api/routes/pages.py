"""Editable page copy routes."""
from __future__ import annotations

from typing import List, Union

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.deps import get_db, get_readonly_db
from api.schemas import PageContentIn, PageContentOut
from domain.content import PageContentService

router = APIRouter()


@router.get("/{page_name}/content", response_model=List[PageContentOut])
def get_page_content(page_name: str, db: Session = Depends(get_readonly_db)):
    return PageContentService(db).get_page_content(page_name)


@router.api_route("/content", methods=["PUT", "POST"], response_model=List[PageContentOut])
def upsert_page_content(
    payload: Union[List[PageContentIn], PageContentIn],
    db: Session = Depends(get_db),
):
    """Insert or replace one item or a list of items keyed by (page, section, key)."""
    items = payload if isinstance(payload, list) else [payload]
    return PageContentService(db).upsert_page_content(
        [item.model_dump(exclude_unset=True) for item in items]
    )
