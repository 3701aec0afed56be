"""Settings for the model server, chat requests and web search."""

from __future__ import annotations

import dataclasses
import logging
import os
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

import platformdirs
import tomli_w

logger = logging.getLogger(__name__)

ENV_PREFIX = "KOWALSKI_"
LOCAL_CONFIG = "config.toml"
_SECTIONS = ("ollama", "chat", "search")

T = TypeVar("T")


@dataclass
class OllamaConfig:
    """Where the model server lives and which model to use by default."""

    base_url: str = "http://127.0.0.1:11434"
    default_model: str = "mistral-small"


@dataclass
class ChatConfig:
    """Parameters sent with chat requests."""

    temperature: float | None = 0.7
    max_tokens: int | None = 512
    stream: bool = True


@dataclass
class SearchConfig:
    """Which search provider to use."""

    api_key: str | None = None
    provider: str = "duckduckgo"


def config_path() -> Path:
    """Return the path of the per-user configuration file."""
    path = Path(platformdirs.user_config_dir()) / "kowalski" / "config.toml"
    logger.info("Config path: %s", path)
    return path


def _string(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError(f"expected a string, got {value!r}")


def _float(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"expected a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"expected a number, got {value!r}") from exc


def _int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as exc:
            raise ValueError(f"expected an integer, got {value!r}") from exc
    raise ValueError(f"expected an integer, got {value!r}")


_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


def _bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    raise ValueError(f"expected a boolean, got {value!r}")


def _optional(value: Any, convert: Callable[[Any], T]) -> T | None:
    return None if value is None else convert(value)


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = data.get(name)
    if section is None:
        raise ValueError(f"missing configuration section: {name}")
    if not isinstance(section, Mapping):
        raise ValueError(f"configuration section {name} must be a table")
    return section


def _required(section: Mapping[str, Any], name: str, key: str) -> Any:
    if key not in section:
        raise ValueError(f"missing configuration field: {name}.{key}")
    return section[key]


def _without_none(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def _apply_environment(data: dict[str, Any], environ: Mapping[str, str]) -> None:
    for name, value in environ.items():
        if not name.upper().startswith(ENV_PREFIX):
            continue
        key = name[len(ENV_PREFIX):].lower()
        for section in _SECTIONS:
            if key.startswith(section + "_"):
                table = data.get(section)
                if not isinstance(table, dict):
                    table = data[section] = {}
                table[key[len(section) + 1:]] = value
                break


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


@dataclass
class Config:
    """All settings of the assistant."""

    ollama: OllamaConfig = field(default_factory=OllamaConfig)
    chat: ChatConfig = field(default_factory=ChatConfig)
    search: SearchConfig = field(default_factory=SearchConfig)

    @classmethod
    def load(cls) -> Config:
        """Load settings from ./config.toml or the user file, then environment overrides.

        Falls back to (and saves) the defaults when the settings are incomplete.
        """
        data: dict[str, Any] = {}
        local = Path(LOCAL_CONFIG)
        if local.exists():
            logger.info("Using local config.toml")
            data = _read_toml(local)
        else:
            path = config_path()
            if path.exists():
                logger.info("Using system config at: %s", path)
                data = _read_toml(path)
            else:
                logger.warning(
                    "No config file found, using defaults with environment overrides"
                )

        _apply_environment(data, os.environ)

        try:
            return cls.from_dict(data)
        except ValueError:
            default = cls()
            try:
                default.save()
            except OSError as exc:
                logger.error("Warning: Could not save default config: %s", exc)
            return default

    def save(self) -> None:
        """Write these settings to the user configuration file."""
        path = config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(tomli_w.dumps(self.to_dict()), encoding="utf-8")

    def to_dict(self) -> dict[str, Any]:
        """Return the settings as nested dictionaries, leaving out unset values."""
        return {
            "ollama": _without_none(dataclasses.asdict(self.ollama)),
            "chat": _without_none(dataclasses.asdict(self.chat)),
            "search": _without_none(dataclasses.asdict(self.search)),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Config:
        """Build settings from nested dictionaries; raise ValueError if incomplete or invalid."""
        ollama = _section(data, "ollama")
        chat = _section(data, "chat")
        search = _section(data, "search")
        return cls(
            ollama=OllamaConfig(
                base_url=_string(_required(ollama, "ollama", "base_url")),
                default_model=_string(_required(ollama, "ollama", "default_model")),
            ),
            chat=ChatConfig(
                temperature=_optional(chat.get("temperature"), _float),
                max_tokens=_optional(chat.get("max_tokens"), _int),
                stream=_bool(_required(chat, "chat", "stream")),
            ),
            search=SearchConfig(
                api_key=_optional(search.get("api_key"), _string),
                provider=_string(_required(search, "search", "provider")),
            ),
        )