"""Errors raised by agents."""

from __future__ import annotations


class AgentError(Exception):
    """Base class for agent failures."""

    prefix = "Agent error"

    def __init__(self, detail: object = "") -> None:
        self.detail = str(detail)
        super().__init__(self.detail)

    def __str__(self) -> str:
        return f"{self.prefix}: {self.detail}"


class AgentRequestError(AgentError):
    """The HTTP request could not be made."""

    prefix = "Request error"


class AgentJsonError(AgentError):
    """A JSON document could not be understood."""

    prefix = "JSON error"


class AgentServerError(AgentError):
    """The model server reported an error, or the request could not be served."""

    prefix = "Server error"


class AgentConfigError(AgentError):
    """The configuration is unusable."""

    prefix = "Config error"


class AgentIOError(AgentError):
    """Reading or writing a file failed."""

    prefix = "IO error"


class AgentToolError(AgentError):
    """A tool used by the agent failed."""

    prefix = "Tool error"


class SerializationError(AgentError):
    """Data could not be serialized or deserialized."""

    prefix = "Serialization error"


class ConversationNotFoundError(AgentError):
    """No conversation has the given id."""

    prefix = "Conversation not found"