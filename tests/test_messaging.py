"""Tests for message sending and conversation assembly."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from conftest import make_user
from core.exceptions import NotFoundError, ValidationError
from core.models import Activity, Message
from domain.messaging import MessageService

BASE = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def _message(db_session, sender, receiver, content, minutes):
    message = Message(
        sender_id=sender.id,
        receiver_id=receiver.id,
        content=content,
        created_at=BASE + timedelta(minutes=minutes),
    )
    db_session.add(message)
    db_session.flush()
    return message


@pytest.fixture
def people(db_session, realtor):
    return {
        "me": realtor,
        "bob": make_user(db_session, "bob"),
        "carol": make_user(db_session, "carol"),
        "dave": make_user(db_session, "dave"),
    }


class TestConversations:

    def test_groups_by_counterpart_with_latest_message(self, db_session, people):
        me, bob, carol = people["me"], people["bob"], people["carol"]
        _message(db_session, me, bob, "hi bob", 0)
        latest_bob = _message(db_session, bob, me, "hello back", 5)
        latest_carol = _message(db_session, carol, me, "question", 3)

        conversations = MessageService(db_session).conversations_for(me.id)

        assert [(c.user.id, c.last_message.id) for c in conversations] == [
            (bob.id, latest_bob.id),
            (carol.id, latest_carol.id),
        ]

    def test_equal_timestamps_pick_highest_id_in_group(self, db_session, people):
        me, bob = people["me"], people["bob"]
        _message(db_session, me, bob, "first", 1)
        second = _message(db_session, bob, me, "second", 1)

        (conversation,) = MessageService(db_session).conversations_for(me.id)

        assert conversation.last_message.id == second.id

    def test_groups_with_equal_timestamps_order_by_message_id(self, db_session, people):
        me, bob, carol, dave = people["me"], people["bob"], people["carol"], people["dave"]
        first = _message(db_session, carol, me, "c", 2)
        second = _message(db_session, bob, me, "b", 2)
        _message(db_session, dave, me, "d", 1)

        conversations = MessageService(db_session).conversations_for(me.id)

        assert [c.last_message.id for c in conversations][:2] == [first.id, second.id]
        assert conversations[-1].user.id == dave.id

    def test_messages_of_other_users_are_not_included(self, db_session, people):
        _message(db_session, people["bob"], people["carol"], "not mine", 0)

        assert MessageService(db_session).conversations_for(people["me"].id) == []


class TestMessagesBetween:

    def test_history_is_bidirectional_and_oldest_first(self, db_session, people):
        me, bob, carol = people["me"], people["bob"], people["carol"]
        later = _message(db_session, me, bob, "later", 10)
        earlier = _message(db_session, bob, me, "earlier", 1)
        _message(db_session, carol, me, "other thread", 5)

        history = MessageService(db_session).messages_between(me.id, bob.id)

        assert [m.id for m in history] == [earlier.id, later.id]

    def test_unknown_counterpart(self, db_session, people):
        with pytest.raises(NotFoundError):
            MessageService(db_session).messages_between(people["me"].id, 9999)


class TestSendAndRead:

    def test_send_logs_truncated_activity(self, db_session, people):
        content = "x" * 80
        message = MessageService(db_session).send_message(people["me"].id, people["bob"].id, content)

        assert message.read is False
        activity = db_session.query(Activity).filter_by(user_id=people["me"].id).one()
        assert activity.type == "message"
        assert activity.description == "x" * 50 + "..."

    def test_send_to_unknown_user(self, db_session, people):
        with pytest.raises(NotFoundError):
            MessageService(db_session).send_message(people["me"].id, 9999, "hello")

    def test_send_blank_content(self, db_session, people):
        with pytest.raises(ValidationError):
            MessageService(db_session).send_message(people["me"].id, people["bob"].id, "   ")

    def test_mark_as_read(self, db_session, people):
        message = _message(db_session, people["bob"], people["me"], "unread", 0)

        assert MessageService(db_session).mark_as_read(message.id).read is True

    def test_mark_unknown_message(self, db_session):
        with pytest.raises(NotFoundError):
            MessageService(db_session).mark_as_read(9999)
