"""A plain chat agent for general conversation."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from kowalski.agent.base import BaseAgent, ChatStream
from kowalski.agent.errors import AgentRequestError, ConversationNotFoundError
from kowalski.config import Config
from kowalski.role.role import Role

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful AI assistant. Provide clear, concise, and accurate responses."
)


class GeneralAgent(BaseAgent):
    """Sends each question with a single system prompt, without specialised tools."""

    def __init__(self, config: Config, client: httpx.AsyncClient | None = None) -> None:
        super().__init__(
            config,
            "GeneralAgent",
            "A general-purpose chat agent for basic interactions",
            client,
        )
        self.base_system_prompt = DEFAULT_SYSTEM_PROMPT

    def with_system_prompt(self, prompt: str) -> GeneralAgent:
        """Use a custom system prompt for every request."""
        self.base_system_prompt = prompt
        return self

    def build_request(self, model: str, content: str) -> dict[str, Any]:
        """Return the chat request body: the system prompt and the user's input only."""
        chat = self.config.chat
        return {
            "model": model,
            "messages": [
                {"role": "system", "content": self.base_system_prompt},
                {"role": "user", "content": content},
            ],
            "stream": chat.stream,
            "temperature": chat.temperature,
            "max_tokens": chat.max_tokens,
        }

    async def chat_with_history(
        self, conversation_id: str, content: str, role: Role | None = None
    ) -> ChatStream:
        """Record the role prompts and the input, then stream the model's answer."""
        if role is not None:
            self.add_message(conversation_id, "system", role.prompt())
            if role.audience is not None:
                self.add_message(conversation_id, "system", role.audience.prompt())
            if role.preset is not None:
                self.add_message(conversation_id, "system", role.preset.prompt())

        self.add_message(conversation_id, "user", content)

        conversation = self.get_conversation(conversation_id)
        if conversation is None:
            raise ConversationNotFoundError(conversation_id)

        payload = self.build_request(conversation.model, content)
        logger.debug("Chat request: %r", payload)
        url = f"{self.config.ollama.base_url}/api/chat"
        try:
            request = self.client.build_request("POST", url, json=payload)
            response = await self.client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise AgentRequestError(exc) from exc
        logger.debug("Chat response: %r", response)
        return ChatStream(response)