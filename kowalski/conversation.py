"""Conversation history kept for a chat with a model."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Message:
    """One message in a conversation."""

    role: str
    content: str


@dataclass
class Conversation:
    """A sequence of messages exchanged with a given model."""

    model: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    messages: list[Message] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def add_message(self, role: str, content: str) -> None:
        """Append a message with the given role and content."""
        self.messages.append(Message(role=role, content=content))