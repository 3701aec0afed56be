"""Manage the models available on an Ollama server."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass
from typing import Any

import httpx

DEFAULT_MODEL = "mistral-small"


class ModelError(Exception):
    """Base class for failures while talking to the model server."""

    prefix = "Model error"

    def __init__(self, detail: object = "") -> None:
        self.detail = str(detail)
        super().__init__(self.detail)

    def __str__(self) -> str:
        return f"{self.prefix}: {self.detail}"


class ModelRequestError(ModelError):
    """The HTTP request could not be made."""

    prefix = "Request error"


class ModelJsonError(ModelError):
    """The server answered with JSON that could not be understood."""

    prefix = "JSON error"


class ModelServerError(ModelError):
    """The server answered with an error."""

    prefix = "Server error"


def _field(data: Mapping[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, kind):
        raise ModelJsonError(f"missing or invalid field `{key}`")
    return value


def _optional(data: Mapping[str, Any], key: str, kind: type) -> Any:
    if data.get(key) is None:
        return None
    return _field(data, key, kind)


@dataclass
class ModelInfo:
    """A model installed on the server."""

    name: str
    size: int
    digest: str
    modified_at: str

    @classmethod
    def from_dict(cls, data: Any) -> ModelInfo:
        """Build the description from a decoded JSON object."""
        if not isinstance(data, Mapping):
            raise ModelJsonError("expected a JSON object for a model")
        return cls(
            name=_field(data, "name", str),
            size=_field(data, "size", int),
            digest=_field(data, "digest", str),
            modified_at=_field(data, "modified_at", str),
        )


@dataclass
class ModelsResponse:
    """The list of installed models."""

    models: list[ModelInfo]

    @classmethod
    def from_dict(cls, data: Any) -> ModelsResponse:
        """Build the list from a decoded JSON object."""
        if not isinstance(data, Mapping):
            raise ModelJsonError("expected a JSON object")
        models = _field(data, "models", list)
        return cls(models=[ModelInfo.from_dict(item) for item in models])


@dataclass
class PullResponse:
    """One progress report while a model is downloaded."""

    status: str
    digest: str | None = None
    total: int | None = None
    completed: int | None = None

    @classmethod
    def from_json(cls, text: str) -> PullResponse:
        """Parse one line of the pull progress stream."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ModelJsonError(exc) from exc
        if not isinstance(data, Mapping):
            raise ModelJsonError("expected a JSON object")
        if "error" in data and "status" not in data:
            raise ModelServerError(data["error"])
        return cls(
            status=_field(data, "status", str),
            digest=_optional(data, "digest", str),
            total=_optional(data, "total", int),
            completed=_optional(data, "completed", int),
        )


class ModelManager:
    """Lists, pulls and deletes models on an Ollama server."""

    def __init__(self, base_url: str, client: httpx.AsyncClient | None = None) -> None:
        self.base_url = base_url
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(
            limits=httpx.Limits(max_keepalive_connections=0), timeout=None
        )

    async def __aenter__(self) -> ModelManager:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, self._url(path), **kwargs)
        except httpx.HTTPError as exc:
            raise ModelRequestError(exc) from exc
        if not response.is_success:
            raise ModelServerError(response.text)
        return response

    async def list_models(self) -> ModelsResponse:
        """Return the models installed on the server."""
        response = await self._send("GET", "/api/tags")
        try:
            data = response.json()
        except ValueError as exc:
            raise ModelJsonError(exc) from exc
        return ModelsResponse.from_dict(data)

    async def model_exists(self, model: str) -> bool:
        """Whether a model with exactly this name is installed."""
        models = await self.list_models()
        return any(info.name == model for info in models.models)

    async def pull_model(self, model: str) -> AsyncIterator[PullResponse]:
        """Download a model, yielding each progress report the server streams."""
        try:
            async with self._client.stream(
                "POST", self._url("/api/pull"), json={"name": model}
            ) as response:
                if not response.is_success:
                    await response.aread()
                    raise ModelServerError(response.text)
                async for line in response.aiter_lines():
                    if line.strip():
                        yield PullResponse.from_json(line)
        except httpx.HTTPError as exc:
            raise ModelRequestError(exc) from exc

    async def delete_model(self, model: str) -> None:
        """Remove a model from the server."""
        await self._send("DELETE", "/api/delete", json={"name": model})

    async def aclose(self) -> None:
        """Close the HTTP client if this manager created it."""
        if self._owns_client:
            await self._client.aclose()