import uuid
from datetime import datetime, timedelta, timezone

from kowalski.conversation import Conversation, Message


def test_conversation_creation():
    model = "test-model"
    conversation = Conversation(model)
    assert conversation.model == model
    assert conversation.messages == []


def test_add_message():
    conversation = Conversation("test-model")
    conversation.add_message("user", "Hello")
    assert len(conversation.messages) == 1
    assert conversation.messages[0].role == "user"
    assert conversation.messages[0].content == "Hello"


def test_messages_keep_order():
    conversation = Conversation("test-model")
    conversation.add_message("system", "Be brief")
    conversation.add_message("user", "Hi")
    conversation.add_message("assistant", "Hello")
    assert conversation.messages == [
        Message("system", "Be brief"),
        Message("user", "Hi"),
        Message("assistant", "Hello"),
    ]


def test_ids_are_unique_uuids():
    first = Conversation("m")
    second = Conversation("m")
    assert first.id != second.id
    assert str(uuid.UUID(first.id)) == first.id
    assert uuid.UUID(first.id).version == 4


def test_created_at_is_recent_utc():
    before = datetime.now(timezone.utc)
    conversation = Conversation("m")
    after = datetime.now(timezone.utc)
    assert conversation.created_at.tzinfo is not None
    assert conversation.created_at.utcoffset() == timedelta(0)
    assert before <= conversation.created_at <= after


def test_conversations_do_not_share_messages():
    first = Conversation("m")
    second = Conversation("m")
    first.add_message("user", "only here")
    assert second.messages == []
    assert len(first.messages) == 1