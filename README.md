# kowalski

An asyncio library of conversational agents that talk to a local Ollama server.
The agents keep conversation history, add system prompts chosen by a role
(audience, preset or illustration style), digest academic papers from PDF
files, search the web and pull the readable content out of pages.

## Installation

```console
pip install kowalski
```

An Ollama server must be reachable; by default it is expected at
`http://127.0.0.1:11434`.

## Configuration

`kowalski.config.Config.load()` reads `config.toml` from the current directory
when it exists, otherwise `kowalski/config.toml` in the platform's user
configuration directory (see `kowalski.config.config_path()`). Environment
variables of the form `KOWALSKI_<SECTION>_<KEY>` override file values, for
example `KOWALSKI_OLLAMA_BASE_URL` or `KOWALSKI_CHAT_TEMPERATURE`. When the
resulting settings are incomplete or invalid, the defaults are used and written
to the user configuration file with `Config.save()`.

```toml
[ollama]
base_url = "http://127.0.0.1:11434"
default_model = "mistral-small"

[chat]
temperature = 0.7
max_tokens = 512
stream = true

[search]
provider = "duckduckgo"
```

## Roles, audiences, presets and styles

A `Role` decides the system prompts that are added to a conversation before
your message.

```python
from kowalski.role.audience import Audience
from kowalski.role.preset import Preset
from kowalski.role.role import Role

role = Role.translator(Audience.from_str("scientist"), Preset.from_str("questions"))
for prompt in role.system_prompts():
    print(prompt)
```

Audiences: family, scientist, industry, donor, wikipedia, socials.
Presets: simplify, terminology, applications, optimistic, analyzed, takeaways,
questions. Styles for `Role.illustrator`: vector, realistic, artistic.
Every `from_str` is case-insensitive and returns `None` for unknown names.

## Chatting

`BaseAgent.chat_with_history` returns a `ChatStream`; each line it yields is
turned into text by `process_stream_response`, which returns `None` once the
answer is complete.

```python
import asyncio

from kowalski.agent.academic import AcademicAgent
from kowalski.config import Config
from kowalski.role.audience import Audience
from kowalski.role.preset import Preset
from kowalski.role.role import Role


async def run() -> None:
    async with AcademicAgent(Config.load()) as agent:
        conversation_id = agent.start_conversation("llama2")
        role = Role.translator(Audience.SCIENTIST, Preset.QUESTIONS)
        stream = await agent.chat_with_history(conversation_id, "paper.pdf", role)
        answer = []
        async with stream:
            async for chunk in stream.chunks():
                text = agent.process_stream_response(conversation_id, chunk)
                if text is None:
                    break
                print(text, end="", flush=True)
                answer.append(text)
        agent.add_message(conversation_id, "assistant", "".join(answer))


asyncio.run(run())
```

The agents:

- `kowalski.agent.academic.AcademicAgent` replaces input ending in `.pdf` with
  the cleaned text of that paper.
- `kowalski.agent.tooling.ToolingAgent` replaces a URL or a `search:` request
  with what its tools return, and offers `search`, `fetch_page` and
  `collect_data`.
- `kowalski.agent.general.GeneralAgent` records the conversation but sends only
  its system prompt (set with `with_system_prompt`) and your latest input.

## Searching and reading the web

Queries are routed by `kowalski.tools.base.TaskRouter`: inputs starting with
`search:`, `find:` or `lookup:` go to the DuckDuckGo search tool; URLs of
twitter.com, linkedin.com and facebook.com go to `WebBrowser`, and other URLs
to the rate-limited `WebScraper`.

```python
import asyncio

from kowalski.agent.tooling import ToolingAgent
from kowalski.config import Config


async def run() -> None:
    async with ToolingAgent(Config.load()) as agent:
        hits = await agent.search("search: python packaging")
        for hit in hits:
            print(hit.title, hit.url)
        if hits:
            page = await agent.fetch_page(hits[0].url)
            print(page.title)
            print(page.content[:500])


asyncio.run(run())
```

## Cleaning paper text

```python
from kowalski.paper_cleaner import PaperCleaner

text = "This is a hyphen-\nated word.\n\nReferences\n1. Someone"
print(PaperCleaner().clean(text))  # "This is a hyphenated word."
```

`kowalski.pdf_reader.read_pdf_file` and `pdf_to_text` extract text from PDF
files.

## Managing models

```python
import asyncio

from kowalski.model import ModelManager


async def run() -> None:
    async with ModelManager("http://127.0.0.1:11434") as manager:
        for info in (await manager.list_models()).models:
            print(info.name, info.size, info.modified_at)
        if not await manager.model_exists("llama2"):
            async for progress in manager.pull_model("llama2"):
                print(progress.status)


asyncio.run(run())
```

## What the package does not do

- There is no command-line program; the package is used as a library.
- `WebBrowser` makes a plain HTTP request; it does not run JavaScript.
- `ToolCache` keeps entries in memory only; local storage holds nothing.
- The PDF text extraction reads uncompressed and Flate-compressed content
  streams and does not map custom font encodings, so some papers yield little
  or garbled text.

## Running the tests

```console
pip install "kowalski[test]"
pytest
```