"""Conversation handling and chat streaming shared by all agents."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx

from kowalski.agent.errors import AgentServerError
from kowalski.agent.types import ChatMessage, ChatRequest, StreamResponse
from kowalski.config import Config
from kowalski.conversation import Conversation
from kowalski.role.role import Role

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2048


class ChatStream:
    """A streamed answer from the chat endpoint."""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response

    async def chunks(self) -> AsyncIterator[bytes]:
        """Yield each non-empty line of the streamed body as bytes."""
        async for line in self.response.aiter_lines():
            if line.strip():
                yield line.encode("utf-8")

    async def aclose(self) -> None:
        """Release the underlying connection."""
        await self.response.aclose()

    async def __aenter__(self) -> ChatStream:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


class BaseAgent:
    """Keeps conversations and talks to the model server's chat endpoint."""

    def __init__(
        self,
        config: Config,
        name: str,
        description: str,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self.name = name
        self.description = description
        self.conversations: dict[str, Conversation] = {}
        self._owns_client = client is None
        self.client = client if client is not None else httpx.AsyncClient(
            limits=httpx.Limits(max_keepalive_connections=0), timeout=None
        )

    async def __aenter__(self) -> BaseAgent:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def start_conversation(self, model: str) -> str:
        """Start a conversation with a model and return its id."""
        conversation = Conversation(model=model)
        self.conversations[conversation.id] = conversation
        return conversation.id

    def get_conversation(self, conversation_id: str) -> Conversation | None:
        """Return the conversation with this id, if any."""
        return self.conversations.get(conversation_id)

    def list_conversations(self) -> list[Conversation]:
        """Return all conversations."""
        return list(self.conversations.values())

    def delete_conversation(self, conversation_id: str) -> bool:
        """Delete a conversation; return whether it existed."""
        return self.conversations.pop(conversation_id, None) is not None

    def add_message(self, conversation_id: str, role: str, content: str) -> None:
        """Append a message to a conversation; unknown ids are ignored."""
        conversation = self.conversations.get(conversation_id)
        if conversation is not None:
            conversation.add_message(role, content)

    async def prepare_content(self, content: str) -> str:
        """Turn the user's input into the text sent to the model."""
        return content

    async def chat_with_history(
        self, conversation_id: str, content: str, role: Role | None = None
    ) -> ChatStream:
        """Add the role prompts and the user's input, then stream the model's answer."""
        conversation = self.conversations.get(conversation_id)
        if conversation is None:
            raise AgentServerError("Conversation not found")

        if role is not None:
            for prompt in role.system_prompts():
                conversation.add_message("system", prompt)

        processed = await self.prepare_content(content)
        conversation.add_message("user", processed)

        chat = self.config.chat
        request = ChatRequest(
            model=conversation.model,
            messages=[ChatMessage.from_message(m) for m in conversation.messages],
            stream=True,
            temperature=chat.temperature if chat.temperature is not None else DEFAULT_TEMPERATURE,
            max_tokens=chat.max_tokens if chat.max_tokens is not None else DEFAULT_MAX_TOKENS,
        )
        return await self._open_stream(request.to_dict())

    async def _open_stream(self, payload: dict) -> ChatStream:
        url = f"{self.config.ollama.base_url}/api/chat"
        try:
            request = self.client.build_request("POST", url, json=payload)
            response = await self.client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise AgentServerError(exc) from exc
        if not response.is_success:
            try:
                body = (await response.aread()).decode("utf-8", errors="replace")
            except httpx.HTTPError as exc:
                body = str(exc)
            finally:
                await response.aclose()
            raise AgentServerError(body)
        return ChatStream(response)

    def process_stream_response(
        self, conversation_id: str, chunk: bytes | str
    ) -> str | None:
        """Return the text of one streamed piece, or None once the answer is done."""
        if isinstance(chunk, bytes):
            try:
                text = chunk.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise AgentServerError(f"Invalid UTF-8: {exc}") from exc
        else:
            text = chunk
        response = StreamResponse.from_json(text)
        if response.done:
            return None
        return response.message.content

    async def aclose(self) -> None:
        """Close the HTTP client if this agent created it."""
        if self._owns_client:
            await self.client.aclose()