"""
Messaging routes.

Conversations are derived per request from the principal's messages;
nothing about them is stored.
"""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from api.deps import get_db, get_principal
from api.schemas import ConversationOut, MessageCreate, MessageOut
from core.models import User
from domain.messaging import MessageService

router = APIRouter()


@router.get("/conversations", response_model=List[ConversationOut])
def list_conversations(
    principal: User = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """One entry per counterpart with the latest message, newest first."""
    return [
        ConversationOut.model_validate(summary)
        for summary in MessageService(db).conversations_for(principal.id)
    ]


@router.get("/{counterpart_id}", response_model=List[MessageOut])
def get_messages(
    counterpart_id: int,
    principal: User = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """Full history between the principal and one counterpart, oldest first."""
    return MessageService(db).messages_between(principal.id, counterpart_id)


@router.post("", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def send_message(
    payload: MessageCreate,
    principal: User = Depends(get_principal),
    db: Session = Depends(get_db),
):
    return MessageService(db).send_message(principal.id, payload.receiver_id, payload.content)


@router.patch("/{message_id}/read", response_model=MessageOut)
def mark_message_read(message_id: int, db: Session = Depends(get_db)):
    return MessageService(db).mark_as_read(message_id)
