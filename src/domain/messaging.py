"""
Messaging domain service.

Messages are directed (sender -> receiver) and immutable apart from the
``read`` flag. A conversation is not stored; it is assembled on read by
grouping a user's messages on the counterpart.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from sqlalchemy import or_, and_, select
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, ValidationError
from core.logging_config import get_logger
from core.models import Message, User
from core.utils import ensure_aware
from services.activity_log import ActivityService

LOGGER = get_logger(__name__)


@dataclass
class ConversationSummary:
    """One entry of a user's inbox: the counterpart and the latest message."""
    user: User
    last_message: Message


def _recency_key(message: Message):
    return (ensure_aware(message.created_at), message.id)


class MessageService:
    """Service for messages between users."""

    def __init__(self, session: Session, activities: Optional[ActivityService] = None) -> None:
        self.session = session
        self.activities = activities or ActivityService(session)

    def get_message(self, message_id: int) -> Message:
        message = self.session.get(Message, message_id)
        if message is None:
            raise NotFoundError("Message", message_id)
        return message

    def conversations_for(self, user_id: int) -> List[ConversationSummary]:
        """
        Build the inbox for ``user_id``.

        The latest message of each counterpart is picked by
        (created_at, id), so of two messages with equal timestamps the
        later-inserted one wins. Conversations are ordered newest first;
        equal timestamps fall back to message id ascending. Counterparts
        that no longer exist are skipped.
        """
        stmt = select(Message).where(
            or_(Message.sender_id == user_id, Message.receiver_id == user_id)
        )
        latest: Dict[int, Message] = {}
        for message in self.session.scalars(stmt):
            other_id = message.receiver_id if message.sender_id == user_id else message.sender_id
            current = latest.get(other_id)
            if current is None or _recency_key(message) > _recency_key(current):
                latest[other_id] = message

        ordered = sorted(latest.items(), key=lambda item: item[1].id)
        ordered.sort(key=lambda item: ensure_aware(item[1].created_at), reverse=True)

        summaries = []
        for other_id, message in ordered:
            other = self.session.get(User, other_id)
            if other is None:
                LOGGER.debug(f"Skipping conversation with missing user {other_id}")
                continue
            summaries.append(ConversationSummary(user=other, last_message=message))
        return summaries

    def messages_between(self, user_id: int, other_id: int) -> List[Message]:
        """Both directions of a conversation, oldest first."""
        if self.session.get(User, other_id) is None:
            raise NotFoundError("User", other_id)

        stmt = (
            select(Message)
            .where(
                or_(
                    and_(Message.sender_id == user_id, Message.receiver_id == other_id),
                    and_(Message.sender_id == other_id, Message.receiver_id == user_id),
                )
            )
            .order_by(Message.created_at, Message.id)
        )
        return list(self.session.scalars(stmt))

    def send_message(self, sender_id: int, receiver_id: int, content: str) -> Message:
        """Send a message from the acting user and log it to the sender's feed."""
        if not content or not content.strip():
            raise ValidationError(
                "Message content is required",
                errors=[{"field": "content", "message": "is required"}],
            )
        if self.session.get(User, receiver_id) is None:
            raise NotFoundError("User", receiver_id)

        message = Message(sender_id=sender_id, receiver_id=receiver_id, content=content)
        self.session.add(message)
        self.session.flush()

        LOGGER.info(
            f"Message {message.id} sent from user {sender_id} to user {receiver_id}",
            extra={"user_id": sender_id},
        )
        self.activities.log_message_sent(sender_id, message)
        return message

    def mark_as_read(self, message_id: int) -> Message:
        message = self.get_message(message_id)
        if not message.read:
            message.read = True
            self.session.flush()
        return message
