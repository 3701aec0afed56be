"""Wire types for the chat endpoint of the model server."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from kowalski.agent.errors import AgentJsonError
from kowalski.conversation import Message


@dataclass
class ChatMessage:
    """A message as sent to and received from the chat endpoint."""

    role: str
    content: str

    @classmethod
    def from_message(cls, message: Message) -> ChatMessage:
        """Copy a conversation message."""
        return cls(role=message.role, content=message.content)


@dataclass
class ChatRequest:
    """The body of a chat request."""

    model: str
    messages: list[ChatMessage] = field(default_factory=list)
    stream: bool = True
    temperature: float = 0.7
    max_tokens: int = 2048

    def to_dict(self) -> dict[str, Any]:
        """Return the request as a JSON-ready dictionary."""
        return {
            "model": self.model,
            "messages": [
                {"role": message.role, "content": message.content}
                for message in self.messages
            ],
            "stream": self.stream,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }


@dataclass
class StreamResponse:
    """One piece of a streamed chat answer."""

    done: bool
    message: ChatMessage

    @classmethod
    def from_json(cls, text: str) -> StreamResponse:
        """Parse one line of the chat stream; raise AgentJsonError if it is malformed."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise AgentJsonError(exc) from exc
        if not isinstance(data, dict):
            raise AgentJsonError("expected a JSON object")
        done = data.get("done")
        if not isinstance(done, bool):
            raise AgentJsonError("missing or invalid field `done`")
        message = data.get("message")
        if not (
            isinstance(message, dict)
            and isinstance(message.get("role"), str)
            and isinstance(message.get("content"), str)
        ):
            raise AgentJsonError("missing or invalid field `message`")
        return cls(done=done, message=ChatMessage(message["role"], message["content"]))