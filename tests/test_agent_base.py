import json

import httpx
import pytest
import respx

from kowalski.agent.base import BaseAgent
from kowalski.agent.errors import AgentJsonError, AgentServerError
from kowalski.config import ChatConfig, Config
from kowalski.conversation import Message
from kowalski.role.audience import Audience
from kowalski.role.preset import Preset
from kowalski.role.role import Role

CHAT_URL = f"{Config().ollama.base_url}/api/chat"


def make_agent(config=None):
    return BaseAgent(config or Config(), "Test Agent", "An agent under test")


def stream_body(*pieces, done=True):
    lines = [
        json.dumps({"done": False, "message": {"role": "assistant", "content": p}})
        for p in pieces
    ]
    if done:
        lines.append(json.dumps({"done": True, "message": {"role": "assistant", "content": ""}}))
    return ("\n".join(lines) + "\n").encode()


def test_start_conversation_registers_it():
    agent = make_agent()
    conversation_id = agent.start_conversation("llama2")
    conversation = agent.get_conversation(conversation_id)
    assert conversation.model == "llama2"
    assert conversation.id == conversation_id
    assert agent.list_conversations() == [conversation]


def test_each_conversation_gets_its_own_id():
    agent = make_agent()
    ids = {agent.start_conversation("llama2") for _ in range(3)}
    assert len(ids) == 3
    assert len(agent.list_conversations()) == 3


def test_delete_conversation():
    agent = make_agent()
    conversation_id = agent.start_conversation("llama2")
    assert agent.delete_conversation(conversation_id) is True
    assert agent.delete_conversation(conversation_id) is False
    assert agent.get_conversation(conversation_id) is None


def test_add_message():
    agent = make_agent()
    conversation_id = agent.start_conversation("llama2")
    agent.add_message(conversation_id, "user", "Hello")
    agent.add_message("missing", "user", "ignored")
    assert agent.get_conversation(conversation_id).messages == [Message("user", "Hello")]
    assert len(agent.list_conversations()) == 1


@pytest.mark.asyncio
async def test_prepare_content_is_identity():
    agent = make_agent()
    assert await agent.prepare_content("plain text") == "plain text"


def test_process_stream_response():
    agent = make_agent()
    content_line = b'{"done": false, "message": {"role": "assistant", "content": "Hi"}}'
    done_line = '{"done": true, "message": {"role": "assistant", "content": ""}}'
    assert agent.process_stream_response("id", content_line) == "Hi"
    assert agent.process_stream_response("id", done_line) is None


def test_process_stream_response_invalid_utf8():
    agent = make_agent()
    with pytest.raises(AgentServerError) as info:
        agent.process_stream_response("id", b"\xff\xfe")
    assert "Invalid UTF-8" in str(info.value)


def test_process_stream_response_invalid_json():
    agent = make_agent()
    with pytest.raises(AgentJsonError):
        agent.process_stream_response("id", b"{broken")


@pytest.mark.asyncio
async def test_chat_with_unknown_conversation():
    agent = make_agent()
    with pytest.raises(AgentServerError) as info:
        await agent.chat_with_history("missing", "Hello", None)
    assert str(info.value) == "Server error: Conversation not found"
    await agent.aclose()


@pytest.mark.asyncio
async def test_chat_with_history_streams_answer():
    agent = make_agent()
    conversation_id = agent.start_conversation("llama2")
    role = Role.translator(Audience.SCIENTIST, Preset.QUESTIONS)
    with respx.mock() as router:
        route = router.post(CHAT_URL).mock(
            return_value=httpx.Response(200, content=stream_body("Hel", "lo"))
        )
        stream = await agent.chat_with_history(conversation_id, "Hello", role)
        async with stream:
            texts = [
                agent.process_stream_response(conversation_id, chunk)
                async for chunk in stream.chunks()
            ]
    await agent.aclose()

    assert texts == ["Hel", "lo", None]
    payload = json.loads(route.calls.last.request.content)
    expected = [{"role": "system", "content": p} for p in role.system_prompts()]
    expected.append({"role": "user", "content": "Hello"})
    assert payload["model"] == "llama2"
    assert payload["messages"] == expected
    assert payload["stream"] is True
    assert payload["temperature"] == Config().chat.temperature
    assert payload["max_tokens"] == Config().chat.max_tokens
    assert agent.get_conversation(conversation_id).messages[-1] == Message("user", "Hello")


@pytest.mark.asyncio
async def test_chat_uses_fallback_parameters():
    config = Config(chat=ChatConfig(temperature=None, max_tokens=None))
    agent = make_agent(config)
    conversation_id = agent.start_conversation("llama2")
    with respx.mock() as router:
        route = router.post(CHAT_URL).mock(
            return_value=httpx.Response(200, content=stream_body("ok"))
        )
        stream = await agent.chat_with_history(conversation_id, "Hello")
        await stream.aclose()
    await agent.aclose()
    payload = json.loads(route.calls.last.request.content)
    assert payload["temperature"] == 0.7
    assert payload["max_tokens"] == 2048


@pytest.mark.asyncio
async def test_chat_server_error():
    agent = make_agent()
    conversation_id = agent.start_conversation("llama2")
    with respx.mock() as router:
        router.post(CHAT_URL).mock(return_value=httpx.Response(500, text="model not found"))
        with pytest.raises(AgentServerError) as info:
            await agent.chat_with_history(conversation_id, "Hello")
    await agent.aclose()
    assert info.value.detail == "model not found"


@pytest.mark.asyncio
async def test_chat_connection_failure():
    agent = make_agent()
    conversation_id = agent.start_conversation("llama2")
    with respx.mock() as router:
        router.post(CHAT_URL).mock(side_effect=httpx.ConnectError("refused"))
        with pytest.raises(AgentServerError) as info:
            await agent.chat_with_history(conversation_id, "Hello")
    await agent.aclose()
    assert "refused" in info.value.detail